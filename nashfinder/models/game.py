"""Strategic form (bimatrix) game model.

Players are kept in insertion order; the first and second player added
define the row and column roles used by enumeration and LP construction.
Payoffs are stored per action profile, one integer per player in player
order.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import numpy as np

from nashfinder.core.errors import GameStateError, PayoffShapeError

ActionProfile = tuple[str, ...]
Payoff = tuple[int, ...]


class StrategicGame:
    """Players, their actions, and a payoff tuple per action profile.

    The container accepts any number of players, but payoff lookups by
    role (``first_and_second_players``) and everything built on top of them
    require exactly two.
    """

    def __init__(self, title: str | None = None) -> None:
        self.title = title
        # dicts double as insertion-ordered sets
        self._players: dict[str, None] = {}
        self._actions: dict[str, dict[str, None]] = {}
        self._payoffs: dict[ActionProfile, Payoff] = {}

    def __repr__(self) -> str:
        actions = {player: list(actions) for player, actions in self._actions.items()}
        return (
            f"StrategicGame(title={self.title!r}, players={list(self._players)}, "
            f"actions={actions})"
        )

    def add_player(self, player: str) -> bool:
        """Add a player; returns False if it was already present."""
        if player in self._players:
            return False
        self._players[player] = None
        return True

    def add_action(self, player: str, action: str) -> bool:
        """Add an action to a player's action set, creating the set lazily."""
        actions = self._actions.setdefault(player, {})
        if action in actions:
            return False
        actions[action] = None
        return True

    def add_payoff(self, profile: Sequence[str], payoff: Sequence[int]) -> None:
        """Store the payoff tuple for an action profile.

        Raises:
            PayoffShapeError: If the tuple length differs from the player
                count or from the profile length.
            GameStateError: If the profile already has a payoff.
        """
        profile = tuple(profile)
        payoff = tuple(payoff)
        if len(payoff) != len(self._players) or len(payoff) != len(profile):
            raise PayoffShapeError(
                "Could not add payoff. The size of payoff must be equal to the amount of "
                f"players and the size of the action profile (payoff={payoff}, "
                f"profile={profile}, players={len(self._players)})."
            )
        if profile in self._payoffs:
            raise GameStateError(f"Payoff for profile {profile} is already set.")
        self._payoffs[profile] = payoff

    def payoff(self, profile: Sequence[str]) -> Payoff | None:
        """Return the payoff tuple for a profile, or None if unknown."""
        return self._payoffs.get(tuple(profile))

    def payoff_for_player(self, profile: Sequence[str], player: str) -> int:
        """Return one player's component of a profile's payoff tuple.

        The player is matched positionally against the stored tuple. Failure
        means the game's internal structures are corrupt.
        """
        payoff = self.payoff(profile)
        if payoff is None:
            raise GameStateError(
                f"No payoff stored for profile {tuple(profile)}. "
                "The internal structures may be corrupt."
            )
        for current, value in zip(self._players, payoff):
            if current == player:
                return value
        raise GameStateError(
            f"Could not find the payoff for player {player!r}. "
            "The internal structures may be corrupt."
        )

    def has_player(self, player: str) -> bool:
        return player in self._players

    def has_action(self, player: str, action: str) -> bool:
        return action in self._actions.get(player, ())

    @property
    def players(self) -> tuple[str, ...]:
        return tuple(self._players)

    @property
    def num_players(self) -> int:
        return len(self._players)

    def actions(self, player: str) -> tuple[str, ...]:
        """Return a player's actions in insertion order (empty if none)."""
        return tuple(self._actions.get(player, ()))

    def profiles(self) -> Iterable[tuple[ActionProfile, Payoff]]:
        """Iterate over stored (profile, payoff) pairs in insertion order."""
        return self._payoffs.items()

    def first_and_second_players(self) -> tuple[str, str]:
        """Return the row and column player.

        Raises:
            GameStateError: If the game does not have exactly two players.
        """
        if len(self._players) != 2:
            raise GameStateError(
                f"Exactly two players are required, the game has {len(self._players)}."
            )
        first, second = self._players
        return first, second

    def payoff_matrices(self) -> tuple[np.ndarray, np.ndarray]:
        """Return the (row player, column player) payoff matrices.

        Rows follow the first player's actions and columns the second
        player's, both in insertion order.
        """
        first, second = self.first_and_second_players()
        rows = self.actions(first)
        cols = self.actions(second)
        payoff_1 = np.zeros((len(rows), len(cols)))
        payoff_2 = np.zeros((len(rows), len(cols)))
        for i, row in enumerate(rows):
            for j, col in enumerate(cols):
                payoff_1[i, j] = self.payoff_for_player((row, col), first)
                payoff_2[i, j] = self.payoff_for_player((row, col), second)
        return payoff_1, payoff_2
