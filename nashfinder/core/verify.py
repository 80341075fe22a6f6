"""Check an extracted profile against the full game.

Computes, for each player, the payoff of the profile and the best payoff a
pure deviation would get. A profile is an equilibrium when no player can
gain more than the regret tolerance by deviating.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from pydantic import BaseModel, ConfigDict

from nashfinder.config import ExtractionConfig
from nashfinder.models.equilibrium import NashEquilibrium
from nashfinder.models.game import StrategicGame


class PlayerCheck(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    expected_payoff: float
    best_deviation_payoff: float
    best_deviation: str
    regret: float
    probability_sum: float


class EquilibriumCheck(BaseModel):
    """Outcome of ``verify_equilibrium``.

    Probabilities are rounded before the check, so both bounds grow with
    the action count: ``probability_tolerance`` bounds how far a player's
    probabilities may sum from one, ``regret_tolerance`` additionally
    scales with the payoff magnitude.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    players: dict[str, PlayerCheck]
    tolerance: float
    probability_tolerance: float
    regret_tolerance: float

    @property
    def max_regret(self) -> float:
        return max((check.regret for check in self.players.values()), default=0.0)

    @property
    def is_equilibrium(self) -> bool:
        return self.max_regret <= self.regret_tolerance and all(
            abs(check.probability_sum - 1.0) <= self.probability_tolerance
            for check in self.players.values()
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_equilibrium": self.is_equilibrium,
            "max_regret": self.max_regret,
            "players": {p: c.model_dump() for p, c in self.players.items()},
        }


def verify_equilibrium(
    game: StrategicGame,
    equilibrium: NashEquilibrium,
    tolerance: float = ExtractionConfig.VERIFY_TOLERANCE,
) -> EquilibriumCheck:
    """Measure how far ``equilibrium`` is from a Nash equilibrium of ``game``."""
    first, second = game.first_and_second_players()
    payoff_1, payoff_2 = game.payoff_matrices()
    x = _as_vector(game, equilibrium, first)
    y = _as_vector(game, equilibrium, second)

    # Payoff of each pure action against the opponent's mix
    row_payoffs = payoff_1 @ y
    col_payoffs = payoff_2.T @ x

    checks = {
        first: _player_check(game.actions(first), row_payoffs, x),
        second: _player_check(game.actions(second), col_payoffs, y),
    }

    scale = max(1.0, float(np.abs(payoff_1).max()), float(np.abs(payoff_2).max()))
    width = max(payoff_1.shape)
    return EquilibriumCheck(
        players=checks,
        tolerance=tolerance,
        probability_tolerance=tolerance * width,
        regret_tolerance=2 * tolerance * scale * width,
    )


def _as_vector(game: StrategicGame, equilibrium: NashEquilibrium, player: str) -> np.ndarray:
    strategy = equilibrium.strategy(player)
    return np.array([strategy.probability(a) for a in game.actions(player)], dtype=float)


def _player_check(
    actions: tuple[str, ...], action_payoffs: np.ndarray, mix: np.ndarray
) -> PlayerCheck:
    expected = float(mix @ action_payoffs)
    best = int(np.argmax(action_payoffs))
    best_payoff = float(action_payoffs[best])
    return PlayerCheck(
        expected_payoff=expected,
        best_deviation_payoff=best_payoff,
        best_deviation=actions[best],
        regret=max(0.0, best_payoff - expected),
        probability_sum=float(mix.sum()),
    )
