"""Render search results as text or JSON."""

from __future__ import annotations

import json

from nashfinder.core.search import SearchResult
from nashfinder.models.support import describe_pair

NO_EQUILIBRIUM = "\tno equilibrium"


def format_text(result: SearchResult, only_equilibria: bool = False) -> str:
    """One block per support pair: the pair, then each player's utility and strategy.

    Example::

        P1: {H, T} | P2: {H, T}
            P1: 0.0 {H: 0.5, T: 0.5}
            P2: 0.0 {H: 0.5, T: 0.5}
    """
    blocks = []
    for pair, equilibrium in result.items():
        if equilibrium is None:
            if only_equilibria:
                continue
            blocks.append(f"{describe_pair(pair)}\n{NO_EQUILIBRIUM}")
        else:
            blocks.append(f"{describe_pair(pair)}\n{equilibrium}")
    return "\n".join(blocks)


def format_summary(result: SearchResult) -> str:
    count = result.num_equilibria
    noun = "equilibrium" if count == 1 else "equilibria"
    return f"{count} Nash {noun} in {len(result)} support pair{'s' if len(result) != 1 else ''}"


def format_json(result: SearchResult, only_equilibria: bool = False) -> str:
    return json.dumps(result.to_dict(only_equilibria=only_equilibria), indent=2)
