"""Support-set enumeration.

Either every pair of supports (power set of the first player's actions
crossed with the power set of the second player's) or a single explicit
pair supplied by the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TypeVar

from nashfinder.config import SearchConfig
from nashfinder.core.errors import SupportSetError
from nashfinder.models.game import StrategicGame
from nashfinder.models.support import SupportPair, SupportSet

logger = logging.getLogger(__name__)

T = TypeVar("T")


def power_set(items: Sequence[T]) -> list[tuple[T, ...]]:
    """Return all subsets of ``items``, the empty and the full set included.

    Fixes the head, recurses on the tail, and for every subset of the tail
    emits it once with and once without the head. Order is stable for a
    given input order; duplicates in ``items`` are ignored.
    """
    items = tuple(dict.fromkeys(items))
    if not items:
        return [()]
    head, rest = items[0], items[1:]
    subsets: list[tuple[T, ...]] = []
    for subset in power_set(rest):
        subsets.append((head, *subset))
        subsets.append(subset)
    return subsets


def exhaustive_support_pairs(game: StrategicGame) -> list[SupportPair]:
    """Every combination of a first-player and a second-player support.

    Yields 2^|A1| * 2^|A2| pairs, including the pair of empty supports.
    """
    first, second = game.first_and_second_players()
    first_subsets = power_set(game.actions(first))
    second_subsets = power_set(game.actions(second))

    pairs = [
        (
            SupportSet(player=first, actions=first_actions),
            SupportSet(player=second, actions=second_actions),
        )
        for first_actions in first_subsets
        for second_actions in second_subsets
    ]
    if len(pairs) > SearchConfig.SUPPORT_PAIR_WARNING_THRESHOLD:
        logger.warning(
            "Enumerating %d support pairs; this may take a while", len(pairs)
        )
    return pairs


def validate_support_pair(game: StrategicGame, pair: Sequence[SupportSet]) -> SupportPair:
    """Check an externally supplied support pair against ``game``.

    The supports must belong to the first and second player, in that order,
    and every action must be one of that player's actions.

    Raises:
        SupportSetError: If the pair does not fit the game.
    """
    first, second = game.first_and_second_players()
    if len(pair) != 2:
        raise SupportSetError(
            f"Expected one support set per player (2), got {len(pair)}."
        )
    for support in pair:
        support.validate_against(game)
    if (pair[0].player, pair[1].player) != (first, second):
        raise SupportSetError(
            f"Support sets must be given for {first!r} and {second!r} in that order, "
            f"got {pair[0].player!r} and {pair[1].player!r}."
        )
    return pair[0], pair[1]


def support_pairs(
    game: StrategicGame, explicit: Sequence[SupportSet] | None = None
) -> list[SupportPair]:
    """Support pairs to test: exhaustive, or the single validated explicit pair."""
    if explicit is None:
        return exhaustive_support_pairs(game)
    return [validate_support_pair(game, explicit)]
