"""Exception hierarchy.

Configuration errors are raised before any equilibrium work starts.
Invariant violations signal corrupted internal state and are never
recovered from. Solver non-convergence is not an error at all: it shows up
as a missing equilibrium for the affected support pair.
"""
from __future__ import annotations


class NashFinderError(Exception):
    """Base class for every error raised by nashfinder."""


class ConfigurationError(NashFinderError, ValueError):
    """The user supplied an unusable game file, support string or option."""


class GameFormatError(ConfigurationError):
    """A game document is missing keys or has the wrong shape or types."""


class SupportSetError(ConfigurationError):
    """A support-set string is malformed or names unknown players/actions."""


class InvariantViolation(NashFinderError, RuntimeError):
    """Internal state is inconsistent."""


class GameStateError(InvariantViolation):
    """A game lookup failed in a way that valid input can never cause."""


class PayoffShapeError(InvariantViolation):
    """A payoff tuple does not match the player count or profile length."""


class ExtractionError(InvariantViolation):
    """A solved LP could not be mapped back onto the game."""


class ProbabilityBoundsError(NashFinderError, ValueError):
    """A strategy probability fell outside [0, 1]."""
