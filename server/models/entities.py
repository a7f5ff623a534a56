# server/models/entities.py
"""Game entity models and data classes."""

import itertools
from dataclasses import dataclass, field
from typing import Dict, Iterator, List

from utils.helpers import radius_from_mass


@dataclass
class Point:
    """A steering target."""

    x: float
    y: float


@dataclass
class Cell:
    """One independently moving body owned by a player."""

    id: str
    x: float
    y: float
    mass: float
    mergeAt: float
    vx: float = 0.0
    vy: float = 0.0

    @property
    def radius(self) -> float:
        return radius_from_mass(self.mass)


@dataclass
class Player:
    """Represents a player in the game."""

    id: str
    name: str
    color: str
    cells: List[Cell]
    target: Point
    alive: bool = True
    isSpectating: bool = False
    score: float = 0.0
    best: float = 0.0

    @property
    def total_mass(self) -> float:
        return sum(cell.mass for cell in self.cells)


@dataclass
class Food:
    """Represents a food pellet in the game."""

    id: int
    x: float
    y: float
    mass: int
    color: str


@dataclass
class Virus:
    """Represents a virus that pops cells too small to eat it."""

    id: int
    x: float
    y: float
    mass: float
    color: str
    feed: float = 0.0

    @property
    def radius(self) -> float:
        return radius_from_mass(self.mass)


@dataclass
class EjectedMass:
    """Represents a pellet of mass ejected by a player."""

    id: int
    x: float
    y: float
    mass: float
    vx: float
    vy: float
    color: str


@dataclass
class World:
    """The single shared game state.

    Holds no game rules; the services mutate it and keep its invariants.
    """

    players: Dict[str, Player] = field(default_factory=dict)
    food: List[Food] = field(default_factory=list)
    viruses: List[Virus] = field(default_factory=list)
    ejected: List[EjectedMass] = field(default_factory=list)
    _ids: Iterator[int] = field(default_factory=lambda: itertools.count(1), repr=False)

    def next_id(self) -> int:
        return next(self._ids)
