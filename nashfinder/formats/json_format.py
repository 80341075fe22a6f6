"""JSON game format.

A game file holds three keys::

    {
      "Agents": ["P1", "P2"],
      "Actions": [["H", "T"], ["H", "T"]],
      "Values": [[[1, -1], [-1, 1]], [[-1, 1], [1, -1]]]
    }

``Values[i][j]`` is the payoff tuple when the first agent plays its i-th
action and the second agent its j-th. Only two-player games are accepted.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, ValidationError, model_validator

from nashfinder.core.errors import GameFormatError
from nashfinder.formats import register_format
from nashfinder.models.game import StrategicGame

REQUIRED_PLAYERS = 2


class GameDocument(BaseModel):
    """Validated contents of a game file."""

    model_config = ConfigDict(frozen=True)

    agents: list[StrictStr] = Field(alias="Agents")
    actions: list[list[StrictStr]] = Field(alias="Actions")
    values: list[list[list[StrictInt]]] = Field(alias="Values")

    @model_validator(mode="after")
    def _check_shape(self) -> GameDocument:
        if len(self.agents) != REQUIRED_PLAYERS:
            raise ValueError(
                f"exactly {REQUIRED_PLAYERS} agents are supported, got {len(self.agents)}"
            )
        if len(set(self.agents)) != len(self.agents):
            raise ValueError(f"agent names must be unique: {self.agents}")
        if len(self.actions) != len(self.agents):
            raise ValueError(
                f"expected one action list per agent ({len(self.agents)}), "
                f"got {len(self.actions)}"
            )
        for agent, actions in zip(self.agents, self.actions):
            if not actions:
                raise ValueError(f"agent {agent!r} has no actions")
            if len(set(actions)) != len(actions):
                raise ValueError(f"actions of agent {agent!r} must be unique: {actions}")

        rows, cols = len(self.actions[0]), len(self.actions[1])
        if len(self.values) != rows:
            raise ValueError(f"expected {rows} payoff rows, got {len(self.values)}")
        for i, row in enumerate(self.values):
            if len(row) != cols:
                raise ValueError(f"payoff row {i} must have {cols} entries, got {len(row)}")
            for j, payoff in enumerate(row):
                if len(payoff) != len(self.agents):
                    raise ValueError(
                        f"payoff at [{i}][{j}] must have {len(self.agents)} values, "
                        f"got {len(payoff)}"
                    )
        return self

    def to_game(self) -> StrategicGame:
        game = StrategicGame()
        for agent in self.agents:
            game.add_player(agent)
        for agent, actions in zip(self.agents, self.actions):
            for action in actions:
                game.add_action(agent, action)
        first_actions, second_actions = self.actions
        for i, row_action in enumerate(first_actions):
            for j, col_action in enumerate(second_actions):
                game.add_payoff((row_action, col_action), self.values[i][j])
        return game

    @classmethod
    def from_game(cls, game: StrategicGame) -> GameDocument:
        first, second = game.first_and_second_players()
        rows, cols = game.actions(first), game.actions(second)
        values = [[list(game.payoff((r, c)) or ()) for c in cols] for r in rows]
        return cls.model_validate(
            {"Agents": [first, second], "Actions": [list(rows), list(cols)], "Values": values}
        )


def _describe_validation_error(error: ValidationError) -> str:
    parts = []
    for detail in error.errors():
        location = ".".join(str(loc) for loc in detail["loc"])
        parts.append(f"{location}: {detail['msg']}" if location else detail["msg"])
    return "; ".join(parts)


def parse_document(data: Any) -> GameDocument:
    """Validate already-decoded JSON data.

    Raises:
        GameFormatError: If keys are missing or types and shapes are wrong.
    """
    try:
        return GameDocument.model_validate(data)
    except ValidationError as e:
        raise GameFormatError(
            f"Could not parse the game. The format may be corrupt ({_describe_validation_error(e)})."
        ) from e


def parse_json(content: str, filename: str = "game.json") -> StrategicGame:
    """Parse a JSON game file into a ``StrategicGame``."""
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise GameFormatError(f"Could not parse {filename}: invalid JSON ({e.msg}).") from e

    game = parse_document(data).to_game()
    game.title = filename
    return game


def serialize_json(game: StrategicGame) -> str:
    """Serialize a two-player game to the JSON game format."""
    return GameDocument.from_game(game).model_dump_json(by_alias=True, indent=2)


register_format(".json", parse_json, serialize_json)
