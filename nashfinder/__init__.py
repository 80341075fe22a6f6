"""Nash equilibria of two-player strategic games by support enumeration."""

from nashfinder.core.builder import ConstraintMode
from nashfinder.core.search import EquilibriumSearch, SearchOptions, SearchResult, find_equilibria
from nashfinder.models import NashEquilibrium, NashStrategy, StrategicGame, SupportSet

__version__ = "0.1.0"

__all__ = [
    "ConstraintMode",
    "EquilibriumSearch",
    "NashEquilibrium",
    "NashStrategy",
    "SearchOptions",
    "SearchResult",
    "StrategicGame",
    "SupportSet",
    "find_equilibria",
]
