"""Build the linear program that tests one support pair.

Both players get the same three constraint families, once with the first
player as protagonist facing the second, and once the other way round.
All constraints go into a single LP whose objective maximizes the sum of
both expected utilities.

Two modes are available:

``BEST_RESPONSE``
    For every action ``r`` in the antagonist's support, the protagonist's
    mix over its own support must earn at least its utility against ``r``:
    ``sum_{a in P} payoff(a, r) * x_a - u >= 0``. This alone does not stop
    an action outside the protagonist's support from doing better, so it
    may accept supports that are not equilibria.

``EQUILIBRIUM``
    Every action in the protagonist's support earns exactly its utility
    against the antagonist's mix (``sum_{r in Q} payoff(a, r) * y_r - u = 0``)
    and no action outside the support earns more (``... <= 0``). Feasible
    solutions are Nash equilibria.

In both modes the protagonist's probabilities over its support sum to one
and are bounded below by zero.
"""

from __future__ import annotations

from enum import Enum

from nashfinder.core.lp import (
    FIRST_PLAYER_UTILITY,
    SECOND_PLAYER_UTILITY,
    LinearProgram,
    ProbabilityVariable,
    Relation,
    Term,
    UtilityVariable,
)
from nashfinder.models.game import StrategicGame
from nashfinder.models.support import SupportPair, SupportSet


class ConstraintMode(str, Enum):
    EQUILIBRIUM = "equilibrium"
    BEST_RESPONSE = "best-response"


def build_equilibrium_lp(
    game: StrategicGame,
    pair: SupportPair,
    mode: ConstraintMode = ConstraintMode.EQUILIBRIUM,
) -> LinearProgram:
    """Create the LP for ``pair`` (first player's support, second player's)."""
    first_support, second_support = pair
    program = LinearProgram()
    program.add_variable(FIRST_PLAYER_UTILITY)
    program.add_variable(SECOND_PLAYER_UTILITY)
    program.maximize([(FIRST_PLAYER_UTILITY, 1.0), (SECOND_PLAYER_UTILITY, 1.0)])

    add_constellation_constraints(
        program, game, first_support, second_support, FIRST_PLAYER_UTILITY, mode
    )
    add_constellation_constraints(
        program, game, second_support, first_support, SECOND_PLAYER_UTILITY, mode
    )
    return program


def add_constellation_constraints(
    program: LinearProgram,
    game: StrategicGame,
    protagonist: SupportSet,
    antagonist: SupportSet,
    utility: UtilityVariable,
    mode: ConstraintMode = ConstraintMode.EQUILIBRIUM,
) -> None:
    """Add the constraints for ``protagonist`` playing against ``antagonist``."""
    mode = ConstraintMode(mode)
    if mode is ConstraintMode.BEST_RESPONSE:
        _add_best_response_constraints(program, game, protagonist, antagonist, utility)
    else:
        _add_equilibrium_constraints(program, game, protagonist, antagonist, utility)

    # Probabilities over the support form a distribution
    program.add_constraint(
        [(ProbabilityVariable(protagonist.player, a), 1.0) for a in protagonist.actions],
        Relation.EQ,
        1,
    )
    for action in protagonist.actions:
        program.add_variable(ProbabilityVariable(protagonist.player, action), lower=0.0)


def _add_best_response_constraints(
    program: LinearProgram,
    game: StrategicGame,
    protagonist: SupportSet,
    antagonist: SupportSet,
    utility: UtilityVariable,
) -> None:
    for response in antagonist.actions:
        terms: list[Term] = []
        for action in protagonist.actions:
            payoff = _payoff(game, protagonist, action, antagonist, response)
            terms.append((ProbabilityVariable(protagonist.player, action), float(payoff)))
        terms.append((utility, -1.0))
        program.add_constraint(terms, Relation.GE, 0)


def _add_equilibrium_constraints(
    program: LinearProgram,
    game: StrategicGame,
    protagonist: SupportSet,
    antagonist: SupportSet,
    utility: UtilityVariable,
) -> None:
    for action in game.actions(protagonist.player):
        terms: list[Term] = []
        for response in antagonist.actions:
            payoff = _payoff(game, protagonist, action, antagonist, response)
            terms.append((ProbabilityVariable(antagonist.player, response), float(payoff)))
        terms.append((utility, -1.0))
        relation = Relation.EQ if protagonist.has_action(action) else Relation.LE
        program.add_constraint(terms, relation, 0)


def _payoff(
    game: StrategicGame,
    protagonist: SupportSet,
    action: str,
    antagonist: SupportSet,
    response: str,
) -> int:
    """Protagonist's payoff, with the profile laid out in player order."""
    first, _ = game.first_and_second_players()
    if protagonist.player == first:
        profile = (action, response)
    else:
        profile = (response, action)
    return game.payoff_for_player(profile, protagonist.player)
