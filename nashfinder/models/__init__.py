"""Game, support and equilibrium models."""

from nashfinder.models.equilibrium import NashEquilibrium, NashStrategy
from nashfinder.models.game import ActionProfile, Payoff, StrategicGame
from nashfinder.models.support import SupportPair, SupportSet, describe_pair

__all__ = [
    "ActionProfile",
    "NashEquilibrium",
    "NashStrategy",
    "Payoff",
    "StrategicGame",
    "SupportPair",
    "SupportSet",
    "describe_pair",
]
