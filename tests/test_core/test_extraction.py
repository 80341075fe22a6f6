"""Tests for reading equilibria out of LP solutions."""
from __future__ import annotations

import math

import pytest

from nashfinder.core.errors import ExtractionError, ProbabilityBoundsError
from nashfinder.core.extraction import extract_equilibrium, round_half_down
from nashfinder.core.lp import FIRST_PLAYER_UTILITY, SECOND_PLAYER_UTILITY, ProbabilityVariable
from nashfinder.core.solver import LinearProgramSolution
from nashfinder.models.game import StrategicGame


def _solution(**probabilities: float) -> LinearProgramSolution:
    """Utilities 0.5/-0.5 plus ``P1_H=0.3``-style probabilities."""
    values = {FIRST_PLAYER_UTILITY: 0.5, SECOND_PLAYER_UTILITY: -0.5}
    for key, value in probabilities.items():
        player, action = key.split("_")
        values[ProbabilityVariable(player, action)] = value
    return LinearProgramSolution(values=values)


class TestRoundHalfDown:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (0.5, 0.5),
            (0.333333, 0.33),
            (0.666666, 0.67),
            (0.125, 0.12),
            (-0.125, -0.12),
            (1.0, 1.0),
            (2.0 / 3.0, 0.67),
        ],
    )
    def test_two_decimals(self, value, expected):
        assert round_half_down(value) == expected

    def test_other_precision(self):
        assert round_half_down(0.0625, 3) == 0.062
        assert round_half_down(0.4, 0) == 0.0

    def test_many_decimals(self):
        assert round_half_down(1.0 / 3.0, 30) == 1.0 / 3.0
        assert round_half_down(12345.5, 30) == 12345.5

    def test_carry_into_new_digit(self):
        assert round_half_down(9.999) == 10.0

    def test_negative_zero_is_normalized(self):
        rounded = round_half_down(-0.001)
        assert rounded == 0.0
        assert math.copysign(1.0, rounded) == 1.0


class TestExtractEquilibrium:
    def test_none_solution(self, matching_pennies: StrategicGame):
        assert extract_equilibrium(None, matching_pennies) is None

    def test_reads_utilities_and_strategies(self, matching_pennies: StrategicGame):
        solution = _solution(P1_H=0.3, P1_T=0.7, P2_T=1.0)
        equilibrium = extract_equilibrium(solution, matching_pennies)

        assert equilibrium is not None
        assert equilibrium.players == ("P1", "P2")
        assert equilibrium.utility("P1") == 0.5
        assert equilibrium.utility("P2") == -0.5
        assert dict(equilibrium.strategy("P1")) == {"H": 0.3, "T": 0.7}
        # actions that are not in the solution are left out
        assert dict(equilibrium.strategy("P2")) == {"T": 1.0}
        assert equilibrium.strategy("P2").probability("H") == 0.0

    def test_rounds_values(self, matching_pennies: StrategicGame):
        solution = LinearProgramSolution(
            values={
                FIRST_PLAYER_UTILITY: 1.0 / 3.0,
                SECOND_PLAYER_UTILITY: -1e-12,
                ProbabilityVariable("P1", "H"): 0.4999999,
                ProbabilityVariable("P2", "H"): 1.0000000001,
            }
        )
        equilibrium = extract_equilibrium(solution, matching_pennies)
        assert equilibrium.utility("P1") == 0.33
        assert equilibrium.utility("P2") == 0.0
        assert equilibrium.strategy("P1")["H"] == 0.5
        assert equilibrium.strategy("P2")["H"] == 1.0

    def test_probability_out_of_bounds(self, matching_pennies: StrategicGame):
        with pytest.raises(ProbabilityBoundsError):
            extract_equilibrium(_solution(P1_H=1.2, P2_H=1.0), matching_pennies)

    def test_missing_utility(self, matching_pennies: StrategicGame):
        solution = LinearProgramSolution(values={FIRST_PLAYER_UTILITY: 0.0})
        with pytest.raises(ExtractionError):
            extract_equilibrium(solution, matching_pennies)

    def test_game_without_two_players(self):
        game = StrategicGame()
        game.add_player("Solo")
        with pytest.raises(ExtractionError, match="corrupt"):
            extract_equilibrium(_solution(), game)
