# server/models/commands.py
"""Inbound player commands, validated at the WebSocket boundary."""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator

from config.settings import MAX_NAME_LENGTH


class NameData(BaseModel):
    name: Optional[str] = None

    @field_validator("name")
    @classmethod
    def truncate_name(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return value[:MAX_NAME_LENGTH]


class TargetData(BaseModel):
    x: float = Field(allow_inf_nan=False)
    y: float = Field(allow_inf_nan=False)


class JoinCommand(BaseModel):
    type: Literal["join"]
    data: Optional[NameData] = None


class MoveCommand(BaseModel):
    type: Literal["move"]
    data: TargetData


class SplitCommand(BaseModel):
    type: Literal["split"]


class EjectCommand(BaseModel):
    type: Literal["eject"]


class RespawnCommand(BaseModel):
    type: Literal["respawn"]
    data: Optional[NameData] = None


Command = Annotated[
    Union[JoinCommand, MoveCommand, SplitCommand, EjectCommand, RespawnCommand],
    Field(discriminator="type"),
]

command_adapter = TypeAdapter(Command)


def parse_command(raw: Union[str, bytes]) -> Command:
    """Parse a raw JSON message into a command.

    Raises ``pydantic.ValidationError`` for anything that is not valid JSON
    or not one of the known command shapes.
    """
    return command_adapter.validate_json(raw)
