"""Pytest configuration and fixtures for the arena server tests."""

import random
import uuid

import pytest

from models.entities import Cell, Player, Point
from services.game_service import GameService


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def game(clock):
    """A game with an empty world: no food or viruses are spawned."""
    return GameService(clock=clock, seed=42, food_amount=0, virus_amount=0)


def make_cell(x=0.0, y=0.0, mass=40.0, merge_at=0.0, vx=0.0, vy=0.0) -> Cell:
    return Cell(id=uuid.uuid4().hex, x=x, y=y, mass=mass, mergeAt=merge_at, vx=vx, vy=vy)


def make_player(world, cells, target=(0.0, 0.0), name="Tester", score=None) -> Player:
    """Add a player with the given cells to the world."""
    total = sum(cell.mass for cell in cells)
    player = Player(
        id=uuid.uuid4().hex,
        name=name,
        color="hsl(10,80%,55%)",
        cells=list(cells),
        target=Point(*target),
        score=total if score is None else score,
        best=total if score is None else score,
    )
    world.players[player.id] = player
    return player
