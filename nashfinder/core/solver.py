"""LP solver interface and the SciPy/HiGHS implementation.

The search only depends on ``LinearProgramSolver``; anything with a
matching ``solve`` method can be injected (tests use simple doubles).
A ``None`` result means "no solution" for whatever reason: infeasible,
unbounded, time limit reached or numerical trouble.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

import numpy as np
from scipy.optimize import linprog

from nashfinder.config import SolverConfig
from nashfinder.core.lp import LinearProgram, Relation, Variable

logger = logging.getLogger(__name__)

# scipy.optimize.linprog status codes
_STATUS_SUCCESS = 0
_STATUS_MESSAGES = {
    1: "iteration or time limit reached",
    2: "infeasible",
    3: "unbounded",
    4: "numerical difficulties",
}


@dataclass(frozen=True)
class LinearProgramSolution:
    """Primal values of a solved LP, keyed by variable."""

    values: Mapping[Variable, float] = field(default_factory=dict)
    objective: float = 0.0

    def primal_value(self, variable: Variable) -> float | None:
        """Value of ``variable``, or None if it was not part of the LP."""
        return self.values.get(variable)


@runtime_checkable
class LinearProgramSolver(Protocol):
    """Anything that can solve a ``LinearProgram``."""

    def solve(self, program: LinearProgram) -> LinearProgramSolution | None:
        ...


class HighsSolver:
    """Solve LPs with ``scipy.optimize.linprog`` using the HiGHS backend."""

    def __init__(
        self,
        timeout_ms: int = SolverConfig.TIMEOUT_MILLIS,
        verbosity: int = SolverConfig.VERBOSITY,
    ) -> None:
        if timeout_ms <= 0:
            raise ValueError(f"timeout_ms must be positive, got {timeout_ms}")
        self.timeout_ms = timeout_ms
        self.verbosity = verbosity

    def solve(self, program: LinearProgram) -> LinearProgramSolution | None:
        if any(c.is_trivially_infeasible() for c in program.constraints):
            logger.debug("LP has an unsatisfiable empty constraint; skipping solver")
            return None

        variables = program.variables
        index = {variable: i for i, variable in enumerate(variables)}
        n = len(variables)

        # linprog minimizes, so negate the maximization objective
        c = np.zeros(n)
        for variable, coef in program.objective:
            c[index[variable]] -= coef

        ub_rows: list[np.ndarray] = []
        ub_rhs: list[float] = []
        eq_rows: list[np.ndarray] = []
        eq_rhs: list[float] = []
        for constraint in program.constraints:
            if not constraint.terms:
                continue
            row = np.zeros(n)
            for variable, coef in constraint.terms:
                row[index[variable]] += coef
            if constraint.relation is Relation.EQ:
                eq_rows.append(row)
                eq_rhs.append(constraint.rhs)
            elif constraint.relation is Relation.LE:
                ub_rows.append(row)
                ub_rhs.append(constraint.rhs)
            else:
                ub_rows.append(-row)
                ub_rhs.append(-constraint.rhs)

        bounds = [
            (program.bounds(variable).lower, program.bounds(variable).upper)
            for variable in variables
        ]

        try:
            result = linprog(
                c,
                A_ub=np.vstack(ub_rows) if ub_rows else None,
                b_ub=np.array(ub_rhs) if ub_rows else None,
                A_eq=np.vstack(eq_rows) if eq_rows else None,
                b_eq=np.array(eq_rhs) if eq_rows else None,
                bounds=bounds,
                method=SolverConfig.METHOD,
                options={
                    "time_limit": self.timeout_ms / 1000.0,
                    "disp": self.verbosity > 0,
                },
            )
        except ValueError as e:
            logger.warning("LP solver rejected the problem: %s", e)
            return None

        if result.status != _STATUS_SUCCESS:
            logger.debug(
                "LP not solved (%s): %s",
                _STATUS_MESSAGES.get(result.status, f"status {result.status}"),
                result.message,
            )
            return None

        values = {variable: float(result.x[i]) for variable, i in index.items()}
        return LinearProgramSolution(values=values, objective=-float(result.fun))
