"""FastAPI dependency injection factories and shared type aliases.

Route handlers receive the solver through ``SolverFactoryDep`` so tests can
swap in a double:

    from nashfinder.dependencies import get_solver_factory

    def test_solve(client):
        app.dependency_overrides[get_solver_factory] = lambda: lambda options: FakeSolver()
        # ... test ...
        app.dependency_overrides.clear()
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends

from nashfinder.core.search import SearchOptions
from nashfinder.core.solver import HighsSolver, LinearProgramSolver

SolverFactory = Callable[[SearchOptions], LinearProgramSolver]


def _highs_solver(options: SearchOptions) -> LinearProgramSolver:
    return HighsSolver(timeout_ms=options.timeout_ms, verbosity=options.verbosity)


def get_solver_factory() -> SolverFactory:
    """Build the LP solver for a request's search options."""
    return _highs_solver


SolverFactoryDep = Annotated[SolverFactory, Depends(get_solver_factory)]
