"""Shared test fixtures for nashfinder."""
from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from nashfinder.core.lp import LinearProgram
from nashfinder.core.solver import LinearProgramSolution
from nashfinder.formats import load_game
from nashfinder.main import app
from nashfinder.models.game import StrategicGame

EXAMPLES_DIR = Path(__file__).resolve().parent.parent / "examples"


class RecordingSolver:
    """Solver double: returns a fixed answer and remembers every LP it saw."""

    def __init__(self, solution: LinearProgramSolution | None = None) -> None:
        self.solution = solution
        self.programs: list[LinearProgram] = []

    def solve(self, program: LinearProgram) -> LinearProgramSolution | None:
        self.programs.append(program)
        return self.solution


@pytest.fixture
def examples_dir() -> Path:
    return EXAMPLES_DIR


@pytest.fixture
def matching_pennies() -> StrategicGame:
    """Zero-sum game whose only equilibrium is both players mixing 50/50."""
    return load_game(EXAMPLES_DIR / "matching-pennies.json")


@pytest.fixture
def prisoners_dilemma() -> StrategicGame:
    """Defect strictly dominates Cooperate for both players."""
    return load_game(EXAMPLES_DIR / "prisoners-dilemma.json")


@pytest.fixture
def battle_of_the_sexes() -> StrategicGame:
    return load_game(EXAMPLES_DIR / "battle-of-the-sexes.json")


@pytest.fixture
def rock_paper_scissors() -> StrategicGame:
    return load_game(EXAMPLES_DIR / "rock-paper-scissors.json")


@pytest.fixture
def recording_solver() -> RecordingSolver:
    return RecordingSolver()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_solver():
    """Factory for solver doubles with a preset answer."""
    return RecordingSolver
