"""Mixed strategies and Nash equilibria read back from solved LPs."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from nashfinder.core.errors import ExtractionError, InvariantViolation, ProbabilityBoundsError


class NashStrategy(Mapping[str, float]):
    """Probability per action for one player.

    Actions that are absent have probability zero. Probabilities outside
    [0, 1] are rejected, never clamped.
    """

    def __init__(self) -> None:
        self._probabilities: dict[str, float] = {}
        self._frozen = False

    def add_action(self, action: str, probability: float) -> None:
        if self._frozen:
            raise InvariantViolation("Cannot modify a strategy that belongs to an equilibrium.")
        if not 0.0 <= probability <= 1.0:
            raise ProbabilityBoundsError(
                "The given probability must be between zero and one (both inclusive): "
                f"{action}={probability}"
            )
        self._probabilities[action] = probability

    def freeze(self) -> None:
        self._frozen = True

    def probability(self, action: str) -> float:
        return self._probabilities.get(action, 0.0)

    def total(self) -> float:
        return sum(self._probabilities.values())

    def support(self) -> tuple[str, ...]:
        """Actions played with strictly positive probability."""
        return tuple(a for a, p in self._probabilities.items() if p > 0.0)

    def __getitem__(self, action: str) -> float:
        return self._probabilities[action]

    def __iter__(self) -> Iterator[str]:
        return iter(self._probabilities)

    def __len__(self) -> int:
        return len(self._probabilities)

    def __repr__(self) -> str:
        return f"NashStrategy({self._probabilities!r})"

    def __str__(self) -> str:
        inner = ", ".join(f"{a}: {p}" for a, p in self._probabilities.items())
        return f"{{{inner}}}"


class NashEquilibrium:
    """Per-player strategy and expected utility. Read-only once built."""

    __slots__ = ("_strategies", "_utilities")

    def __init__(
        self,
        strategies: Mapping[str, NashStrategy],
        utilities: Mapping[str, float],
    ) -> None:
        if list(strategies) != list(utilities):
            raise ExtractionError(
                "Strategies and utilities must cover the same players "
                f"(got {list(strategies)} and {list(utilities)})."
            )
        for strategy in strategies.values():
            strategy.freeze()
        self._strategies = MappingProxyType(dict(strategies))
        self._utilities = MappingProxyType(dict(utilities))

    @property
    def players(self) -> tuple[str, ...]:
        return tuple(self._strategies)

    @property
    def strategies(self) -> Mapping[str, NashStrategy]:
        return self._strategies

    @property
    def utilities(self) -> Mapping[str, float]:
        return self._utilities

    def strategy(self, player: str) -> NashStrategy:
        return self._strategies[player]

    def utility(self, player: str) -> float:
        return self._utilities[player]

    def is_pure(self) -> bool:
        """True if every player puts all weight on a single action."""
        return all(len(s.support()) == 1 for s in self._strategies.values())

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dictionary."""
        return {
            "strategies": {p: dict(s) for p, s in self._strategies.items()},
            "utilities": dict(self._utilities),
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NashEquilibrium):
            return NotImplemented
        return (
            dict(self._utilities) == dict(other._utilities)
            and {p: dict(s) for p, s in self._strategies.items()}
            == {p: dict(s) for p, s in other._strategies.items()}
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        strategies = {p: dict(s) for p, s in self._strategies.items()}
        return f"NashEquilibrium(strategies={strategies}, utilities={dict(self._utilities)})"

    def __str__(self) -> str:
        return "\n".join(
            f"\t{player}: {self._utilities[player]} {strategy}"
            for player, strategy in self._strategies.items()
        )
