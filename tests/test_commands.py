import pytest
from pydantic import ValidationError

from models.commands import (
    EjectCommand,
    JoinCommand,
    MoveCommand,
    RespawnCommand,
    SplitCommand,
    parse_command,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ('{"type": "join", "data": {"name": "Ada"}}', JoinCommand),
        ('{"type": "move", "data": {"x": 10, "y": -4.5}}', MoveCommand),
        ('{"type": "split"}', SplitCommand),
        ('{"type": "eject", "data": null}', EjectCommand),
        ('{"type": "respawn"}', RespawnCommand),
    ],
)
def test_known_commands_parse(raw, expected):
    assert isinstance(parse_command(raw), expected)


def test_join_without_name():
    command = parse_command('{"type": "join"}')
    assert command.data is None


def test_move_carries_target():
    command = parse_command('{"type": "move", "data": {"x": 10, "y": -4.5}}')
    assert (command.data.x, command.data.y) == (10.0, -4.5)


@pytest.mark.parametrize(
    "raw",
    [
        "not json at all",
        "{}",
        '{"type": "teleport"}',
        '{"type": "move", "data": {"x": 1}}',
        '{"type": "move", "data": {"x": "left", "y": 0}}',
        '{"type": "move"}',
    ],
)
def test_malformed_messages_are_rejected(raw):
    with pytest.raises(ValidationError):
        parse_command(raw)


def test_long_name_is_truncated():
    command = parse_command('{"type": "join", "data": {"name": "' + "x" * 100 + '"}}')
    assert command.data.name == "x" * 32
