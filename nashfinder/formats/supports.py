"""Parser for explicit support sets written as ``[H,T][T]``.

One bracketed, comma-separated action list per player, in player order.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from nashfinder.core.errors import SupportSetError
from nashfinder.models.support import SupportSet

_BRACKET_PATTERN = re.compile(r"\[(.*?)\]")


def parse_support_set(text: str, player: str) -> SupportSet:
    """Parse the inside of one bracket (``H, T``) into a support set."""
    actions = [action.strip() for action in text.split(",")]
    if not text.strip() or any(not action for action in actions):
        raise SupportSetError(
            f"Can not parse support sets. The support set may be in the wrong format: [{text}]"
        )
    return SupportSet(player=player, actions=tuple(actions))


def parse_support_sets(text: str, players: Sequence[str]) -> tuple[SupportSet, ...]:
    """Parse ``[a1,a2][b1]`` into one support set per player.

    Raises:
        SupportSetError: If the text is malformed or the number of brackets
            differs from the number of players.
    """
    text = (text or "").strip()
    groups = _BRACKET_PATTERN.findall(text)
    leftover = _BRACKET_PATTERN.sub("", text).strip()
    if leftover:
        raise SupportSetError(
            f"Can not parse support sets. Unexpected text outside brackets: {leftover!r}"
        )
    if len(groups) != len(players):
        raise SupportSetError(
            "Can not parse support sets. The number of support sets "
            f"({len(groups)}) does not match the number of players ({len(players)})."
        )
    return tuple(parse_support_set(group, player) for group, player in zip(groups, players))


def format_support_sets(supports: Sequence[SupportSet]) -> str:
    """Inverse of ``parse_support_sets``."""
    return "".join(f"[{','.join(support.actions)}]" for support in supports)
