"""Solver-neutral linear program representation.

Unknowns are either a player's expected utility or the probability of one
of a player's actions. Both kinds are plain hashable values, so an LP can
mix them freely and a solution can be queried by the same keys.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Literal, Union


@dataclass(frozen=True)
class UtilityVariable:
    """Expected utility of the first or second player."""

    slot: Literal["first", "second"]

    def __str__(self) -> str:
        return f"u_{self.slot}"


FIRST_PLAYER_UTILITY = UtilityVariable("first")
SECOND_PLAYER_UTILITY = UtilityVariable("second")


@dataclass(frozen=True)
class ProbabilityVariable:
    """Probability that ``player`` plays ``action``."""

    player: str
    action: str

    def __str__(self) -> str:
        return f"{self.player}:{self.action}"


Variable = Union[UtilityVariable, ProbabilityVariable]
Term = tuple[Variable, float]


class Relation(str, Enum):
    GE = ">="
    LE = "<="
    EQ = "="


@dataclass(frozen=True)
class LinearConstraint:
    """``sum(coefficient * variable) <relation> rhs``."""

    terms: tuple[Term, ...]
    relation: Relation
    rhs: float

    def is_trivially_infeasible(self) -> bool:
        """True for a constraint without terms that ``0 <relation> rhs`` violates."""
        if self.terms:
            return False
        if self.relation is Relation.EQ:
            return self.rhs != 0
        if self.relation is Relation.GE:
            return self.rhs > 0
        return self.rhs < 0

    def __str__(self) -> str:
        lhs = " + ".join(f"{coef:g}*{var}" for var, coef in self.terms) or "0"
        return f"{lhs} {self.relation.value} {self.rhs:g}"


@dataclass(frozen=True)
class Bounds:
    lower: float | None = None
    upper: float | None = None


class LinearProgram:
    """Variables with bounds, linear constraints and a maximization objective."""

    def __init__(self) -> None:
        self._bounds: dict[Variable, Bounds] = {}
        self._constraints: list[LinearConstraint] = []
        self._objective: tuple[Term, ...] = ()

    def add_variable(
        self, variable: Variable, lower: float | None = None, upper: float | None = None
    ) -> None:
        """Declare a variable, or tighten the bounds of an existing one."""
        current = self._bounds.get(variable)
        if current is not None:
            if lower is None:
                lower = current.lower
            elif current.lower is not None:
                lower = max(lower, current.lower)
            if upper is None:
                upper = current.upper
            elif current.upper is not None:
                upper = min(upper, current.upper)
        self._bounds[variable] = Bounds(lower, upper)

    def add_constraint(
        self, terms: Iterable[Term], relation: Relation | str, rhs: float
    ) -> LinearConstraint:
        """Add a constraint; unseen variables are declared as free."""
        constraint = LinearConstraint(tuple(terms), Relation(relation), float(rhs))
        for variable, _ in constraint.terms:
            if variable not in self._bounds:
                self._bounds[variable] = Bounds()
        self._constraints.append(constraint)
        return constraint

    def maximize(self, terms: Iterable[Term]) -> None:
        self._objective = tuple(terms)
        for variable, _ in self._objective:
            if variable not in self._bounds:
                self._bounds[variable] = Bounds()

    @property
    def variables(self) -> tuple[Variable, ...]:
        return tuple(self._bounds)

    @property
    def constraints(self) -> tuple[LinearConstraint, ...]:
        return tuple(self._constraints)

    @property
    def objective(self) -> tuple[Term, ...]:
        return self._objective

    def bounds(self, variable: Variable) -> Bounds:
        return self._bounds[variable]

    def __str__(self) -> str:
        objective = " + ".join(f"{coef:g}*{var}" for var, coef in self._objective)
        lines = [f"max {objective}"]
        lines.extend(f"  {constraint}" for constraint in self._constraints)
        return "\n".join(lines)
