"""Support sets: the actions a player may play with positive probability."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

from nashfinder.core.errors import SupportSetError
from nashfinder.models.game import StrategicGame


class SupportSet(BaseModel):
    """A player together with an ordered, duplicate-free set of actions.

    Membership of the actions in the player's action set is not checked on
    construction; call ``validate_against`` before using the support.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    player: str
    actions: tuple[str, ...] = ()

    @field_validator("actions")
    @classmethod
    def _drop_duplicates(cls, actions: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(dict.fromkeys(actions))

    def has_action(self, action: str) -> bool:
        return action in self.actions

    @property
    def is_empty(self) -> bool:
        return not self.actions

    def validate_against(self, game: StrategicGame) -> None:
        """Check that the player and all actions exist in ``game``.

        Raises:
            SupportSetError: If the player or one of its actions is unknown.
        """
        if not game.has_player(self.player):
            raise SupportSetError(
                f"The given support set is not valid: unknown player {self.player!r}."
            )
        for action in self.actions:
            if not game.has_action(self.player, action):
                raise SupportSetError(
                    f"The given support set is not valid: player {self.player!r} "
                    f"has no action {action!r}."
                )

    def describe(self) -> str:
        if len(self.actions) == 1:
            return f"{self.player}: {self.actions[0]}"
        return f"{self.player}: {{{', '.join(self.actions)}}}"

    def __str__(self) -> str:
        return self.describe()


# First player's support, then second player's
SupportPair = tuple[SupportSet, SupportSet]


def describe_pair(pair: SupportPair) -> str:
    """Human-readable description of a support pair, e.g. ``P1: {H, T} | P2: T``."""
    return " | ".join(support.describe() for support in pair)
