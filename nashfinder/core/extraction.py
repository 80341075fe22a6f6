"""Turn a solved LP back into a Nash equilibrium."""

from __future__ import annotations

from decimal import ROUND_HALF_DOWN, Context, Decimal

from nashfinder.config import ExtractionConfig
from nashfinder.core.errors import ExtractionError, GameStateError
from nashfinder.core.lp import (
    FIRST_PLAYER_UTILITY,
    SECOND_PLAYER_UTILITY,
    ProbabilityVariable,
    UtilityVariable,
)
from nashfinder.core.solver import LinearProgramSolution
from nashfinder.models.equilibrium import NashEquilibrium, NashStrategy
from nashfinder.models.game import StrategicGame


def round_half_down(value: float, decimals: int = ExtractionConfig.ROUNDING_DECIMALS) -> float:
    """Round ``value`` to ``decimals`` places, ties toward zero.

    Works on the exact binary value of the float, so ``0.125`` rounds to
    ``0.12`` while ``0.135`` (stored slightly above) rounds to ``0.14``.
    """
    exact = Decimal(value)
    quantum = Decimal(1).scaleb(-decimals)
    # room for every integer digit, the decimals and a carry (9.999 -> 10.00)
    context = Context(prec=max(exact.adjusted(), 0) + decimals + 2)
    rounded = float(exact.quantize(quantum, rounding=ROUND_HALF_DOWN, context=context))
    # avoid reporting -0.0
    return rounded + 0.0


def extract_equilibrium(
    solution: LinearProgramSolution | None,
    game: StrategicGame,
    decimals: int = ExtractionConfig.ROUNDING_DECIMALS,
) -> NashEquilibrium | None:
    """Read utilities and strategies for both players out of ``solution``.

    Returns None when there is no solution. Every action of a player is
    looked up, not just the tested support; actions without a value in the
    solution are left out of the strategy (probability zero).

    Raises:
        ExtractionError: If the game has fewer than two players or the
            solution lacks a utility value.
        ProbabilityBoundsError: If a rounded probability is outside [0, 1].
    """
    if solution is None:
        return None

    try:
        first, second = game.first_and_second_players()
    except GameStateError as e:
        raise ExtractionError(
            "Could not extract results. The given game may be corrupt."
        ) from e

    utilities = {
        first: _utility(solution, FIRST_PLAYER_UTILITY, decimals),
        second: _utility(solution, SECOND_PLAYER_UTILITY, decimals),
    }
    strategies = {
        player: _strategy(solution, game, player, decimals) for player in (first, second)
    }
    return NashEquilibrium(strategies=strategies, utilities=utilities)


def _utility(
    solution: LinearProgramSolution, variable: UtilityVariable, decimals: int
) -> float:
    value = solution.primal_value(variable)
    if value is None:
        raise ExtractionError(f"Solution has no value for utility variable {variable}.")
    return round_half_down(value, decimals)


def _strategy(
    solution: LinearProgramSolution, game: StrategicGame, player: str, decimals: int
) -> NashStrategy:
    strategy = NashStrategy()
    for action in game.actions(player):
        probability = solution.primal_value(ProbabilityVariable(player, action))
        if probability is not None:
            strategy.add_action(action, round_half_down(probability, decimals))
    return strategy
