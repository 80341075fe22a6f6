"""Tests for checking extracted profiles against the full game."""
from __future__ import annotations

import pytest

from nashfinder.core.verify import verify_equilibrium
from nashfinder.models.equilibrium import NashEquilibrium, NashStrategy
from nashfinder.models.game import StrategicGame


def _profile(first: dict[str, float], second: dict[str, float], players=("P1", "P2")) -> NashEquilibrium:
    strategies = {}
    for player, probabilities in zip(players, (first, second)):
        strategy = NashStrategy()
        for action, probability in probabilities.items():
            strategy.add_action(action, probability)
        strategies[player] = strategy
    return NashEquilibrium(strategies=strategies, utilities={p: 0.0 for p in players})


class TestVerifyEquilibrium:
    def test_mixed_matching_pennies_is_equilibrium(self, matching_pennies: StrategicGame):
        check = verify_equilibrium(
            matching_pennies, _profile({"H": 0.5, "T": 0.5}, {"H": 0.5, "T": 0.5})
        )
        assert check.is_equilibrium
        assert check.max_regret == pytest.approx(0.0)
        assert check.players["P1"].expected_payoff == pytest.approx(0.0)
        assert check.players["P2"].probability_sum == pytest.approx(1.0)

    def test_pure_matching_pennies_is_not_equilibrium(self, matching_pennies: StrategicGame):
        check = verify_equilibrium(matching_pennies, _profile({"H": 1.0}, {"H": 1.0}))
        assert not check.is_equilibrium
        assert check.players["P1"].regret == pytest.approx(0.0)
        assert check.players["P2"].regret == pytest.approx(2.0)
        assert check.players["P2"].best_deviation == "T"
        assert check.max_regret == pytest.approx(2.0)

    def test_defect_defect(self, prisoners_dilemma: StrategicGame):
        profile = _profile({"Defect": 1.0}, {"Defect": 1.0}, players=("Row", "Column"))
        check = verify_equilibrium(prisoners_dilemma, profile)
        assert check.is_equilibrium
        assert check.players["Row"].expected_payoff == pytest.approx(-2.0)
        assert check.players["Column"].best_deviation == "Defect"

    def test_rounded_mixed_strategy_is_accepted(self, rock_paper_scissors: StrategicGame):
        third = {"Rock": 0.33, "Paper": 0.33, "Scissors": 0.33}
        check = verify_equilibrium(rock_paper_scissors, _profile(third, third))
        assert check.is_equilibrium

    def test_probabilities_must_sum_to_one(self, matching_pennies: StrategicGame):
        check = verify_equilibrium(matching_pennies, _profile({"H": 0.5}, {"H": 0.5}))
        assert check.players["P1"].probability_sum == pytest.approx(0.5)
        assert not check.is_equilibrium

    def test_to_dict(self, matching_pennies: StrategicGame):
        data = verify_equilibrium(matching_pennies, _profile({"H": 1.0}, {"T": 1.0})).to_dict()
        assert data["is_equilibrium"] is False
        assert set(data["players"]) == {"P1", "P2"}
        assert set(data["players"]["P1"]) == {
            "expected_payoff",
            "best_deviation_payoff",
            "best_deviation",
            "regret",
            "probability_sum",
        }
