"""Equilibrium search: enumerate support pairs, solve one LP per pair, collect.

Every pair is processed before results are returned. A pair whose LP has no
solution is recorded with ``None`` and the search moves on; configuration
errors abort before the first LP is built.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from nashfinder.config import ExtractionConfig, SearchConfig, SolverConfig
from nashfinder.core.builder import ConstraintMode, build_equilibrium_lp
from nashfinder.core.enumeration import support_pairs
from nashfinder.core.extraction import extract_equilibrium
from nashfinder.core.solver import HighsSolver, LinearProgramSolver
from nashfinder.core.verify import verify_equilibrium
from nashfinder.models.equilibrium import NashEquilibrium
from nashfinder.models.game import StrategicGame
from nashfinder.models.support import SupportPair, SupportSet, describe_pair

logger = logging.getLogger(__name__)


class SearchState(Enum):
    INITIALIZED = "initialized"
    ENUMERATING = "enumerating"
    BUILDING_LP = "building_lp"
    SOLVING = "solving"
    EXTRACTING = "extracting"
    COLLECTED = "collected"
    DONE = "done"


class SearchOptions(BaseModel):
    """Tunable parameters of a search."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    mode: ConstraintMode = ConstraintMode.EQUILIBRIUM
    timeout_ms: int = Field(default=SolverConfig.TIMEOUT_MILLIS, gt=0)
    verbosity: int = Field(default=SolverConfig.VERBOSITY, ge=0)
    decimals: int = Field(
        default=ExtractionConfig.ROUNDING_DECIMALS,
        ge=0,
        le=ExtractionConfig.MAX_ROUNDING_DECIMALS,
    )
    max_workers: int = Field(default=SearchConfig.DEFAULT_MAX_WORKERS, ge=1)


class SearchResult:
    """Equilibrium (or None) per support pair, in enumeration order."""

    def __init__(self, game: StrategicGame) -> None:
        self.game = game
        self._results: dict[SupportPair, NashEquilibrium | None] = {}

    def record(self, pair: SupportPair, equilibrium: NashEquilibrium | None) -> None:
        self._results[pair] = equilibrium

    def __getitem__(self, pair: SupportPair) -> NashEquilibrium | None:
        return self._results[pair]

    def __contains__(self, pair: object) -> bool:
        return pair in self._results

    def __iter__(self) -> Iterator[SupportPair]:
        return iter(self._results)

    def __len__(self) -> int:
        return len(self._results)

    def items(self):
        return self._results.items()

    def equilibria(self) -> list[tuple[SupportPair, NashEquilibrium]]:
        """Only the pairs for which an equilibrium was found."""
        return [(pair, eq) for pair, eq in self._results.items() if eq is not None]

    @property
    def num_equilibria(self) -> int:
        return sum(1 for eq in self._results.values() if eq is not None)

    def to_dict(self, only_equilibria: bool = False) -> dict[str, Any]:
        """Serialize to a JSON-compatible dictionary."""
        entries = []
        for pair, equilibrium in self._results.items():
            if equilibrium is None and only_equilibria:
                continue
            entry: dict[str, Any] = {
                "description": describe_pair(pair),
                "supports": {support.player: list(support.actions) for support in pair},
                "equilibrium": None,
            }
            if equilibrium is not None:
                entry["equilibrium"] = equilibrium.to_dict()
                entry["verification"] = verify_equilibrium(self.game, equilibrium).to_dict()
            entries.append(entry)
        return {
            "players": list(self.game.players),
            "pairs_tested": len(self._results),
            "equilibria_found": self.num_equilibria,
            "results": entries,
        }


class EquilibriumSearch:
    """Drives enumerate -> build LP -> solve -> extract for one game."""

    def __init__(
        self,
        game: StrategicGame,
        explicit: Sequence[SupportSet] | None = None,
        solver: LinearProgramSolver | None = None,
        options: SearchOptions | None = None,
    ) -> None:
        self.game = game
        self.explicit = explicit
        self.options = options or SearchOptions()
        self.solver = solver or HighsSolver(
            timeout_ms=self.options.timeout_ms, verbosity=self.options.verbosity
        )
        self.state = SearchState.INITIALIZED

    def run(self) -> SearchResult:
        if self.state is not SearchState.INITIALIZED:
            raise RuntimeError(f"Search already ran (state: {self.state.value})")

        self.state = SearchState.ENUMERATING
        pairs = support_pairs(self.game, self.explicit)
        logger.info(
            "Testing %d support pair(s) (mode=%s, workers=%d)",
            len(pairs),
            self.options.mode.value,
            self.options.max_workers,
        )

        start_time = time.perf_counter()
        result = SearchResult(self.game)
        if self.options.max_workers > 1 and len(pairs) > 1:
            with ThreadPoolExecutor(max_workers=self.options.max_workers) as executor:
                # map keeps input order
                equilibria = executor.map(self._solve_pair, pairs)
                for pair, equilibrium in zip(pairs, equilibria):
                    result.record(pair, equilibrium)
        else:
            for pair in pairs:
                result.record(pair, self._solve_pair(pair, track_state=True))

        self.state = SearchState.COLLECTED
        elapsed_ms = int((time.perf_counter() - start_time) * 1000)
        logger.info(
            "Search complete: %d equilibrium(s) in %d pair(s) (%dms)",
            result.num_equilibria,
            len(result),
            elapsed_ms,
        )
        self.state = SearchState.DONE
        return result

    def _solve_pair(self, pair: SupportPair, track_state: bool = False) -> NashEquilibrium | None:
        if track_state:
            self.state = SearchState.BUILDING_LP
        program = build_equilibrium_lp(self.game, pair, self.options.mode)

        if track_state:
            self.state = SearchState.SOLVING
        solution = self.solver.solve(program)

        if track_state:
            self.state = SearchState.EXTRACTING
        equilibrium = extract_equilibrium(solution, self.game, self.options.decimals)
        logger.debug(
            "%s -> %s", describe_pair(pair), "equilibrium" if equilibrium else "no equilibrium"
        )
        return equilibrium


def find_equilibria(
    game: StrategicGame,
    explicit: Sequence[SupportSet] | None = None,
    solver: LinearProgramSolver | None = None,
    options: SearchOptions | None = None,
) -> SearchResult:
    """Run a complete support-enumeration search on ``game``."""
    return EquilibriumSearch(game, explicit=explicit, solver=solver, options=options).run()
