# server/services/actions.py
"""Player actions: joining, splitting, ejecting mass and virus fragmentation."""

import math
import random
import uuid
from typing import List, Optional

from models.entities import Cell, EjectedMass, Player, Point, World
from config.settings import (
    DEFAULT_PLAYER_NAME,
    EJECT_MARGIN,
    EJECT_MASS,
    EJECT_SPEED,
    FRAGMENT_IMPULSE,
    MAX_CELLS,
    RECOMBINE_DELAY,
    SPLIT_IMPULSE,
    SPLIT_MIN_MASS,
    SPLIT_RECOIL,
    START_MASS,
)
from utils.helpers import angle_towards, random_color, random_position


def _new_id() -> str:
    return uuid.uuid4().hex


def spawn_player(world: World, name: Optional[str], now: float, rng: random.Random) -> Player:
    """Create a new player with a single starting cell at a random position."""
    x, y = random_position(rng)
    cell = Cell(id=_new_id(), x=x, y=y, mass=START_MASS, mergeAt=now)
    player = Player(
        id=_new_id(),
        name=name or DEFAULT_PLAYER_NAME,
        color=random_color(rng),
        cells=[cell],
        target=Point(x, y),
        score=START_MASS,
        best=START_MASS,
    )
    world.players[player.id] = player
    return player


def remove_player(world: World, player_id: str) -> Optional[Player]:
    """Remove a player from the world, returning it if it existed."""
    return world.players.pop(player_id, None)


def handle_split(player: Player, now: float) -> int:
    """Split every large enough cell in two towards the target.

    Returns the number of new cells created.
    """
    new_cells: List[Cell] = []
    for cell in player.cells:
        if cell.mass < SPLIT_MIN_MASS:
            continue
        if len(player.cells) + len(new_cells) >= MAX_CELLS:
            break

        half = cell.mass / 2
        cell.mass = half
        angle = angle_towards(cell.x, cell.y, player.target.x, player.target.y)
        offset = cell.radius * 2

        cell.vx += math.cos(angle) * SPLIT_IMPULSE * -SPLIT_RECOIL
        cell.vy += math.sin(angle) * SPLIT_IMPULSE * -SPLIT_RECOIL
        cell.mergeAt = now + RECOMBINE_DELAY
        new_cells.append(
            Cell(
                id=_new_id(),
                x=cell.x + math.cos(angle) * offset,
                y=cell.y + math.sin(angle) * offset,
                mass=half,
                mergeAt=now + RECOMBINE_DELAY,
                vx=math.cos(angle) * SPLIT_IMPULSE,
                vy=math.sin(angle) * SPLIT_IMPULSE,
            )
        )

    player.cells.extend(new_cells)
    return len(new_cells)


def handle_eject(world: World, player: Player) -> List[EjectedMass]:
    """Shoot one pellet of mass out of every cell that can afford it."""
    ejected = []
    for cell in player.cells:
        if cell.mass <= EJECT_MASS + EJECT_MARGIN:
            continue

        cell.mass -= EJECT_MASS
        angle = angle_towards(cell.x, cell.y, player.target.x, player.target.y)
        pellet = EjectedMass(
            id=world.next_id(),
            x=cell.x + math.cos(angle) * cell.radius,
            y=cell.y + math.sin(angle) * cell.radius,
            mass=EJECT_MASS,
            vx=math.cos(angle) * EJECT_SPEED,
            vy=math.sin(angle) * EJECT_SPEED,
            color=player.color,
        )
        world.ejected.append(pellet)
        ejected.append(pellet)
    return ejected


def split_into_fragments(
    player: Player, cell: Cell, parts: int, now: float, rng: random.Random
) -> int:
    """Scatter a popped cell into fragments around it.

    The cell gives up one share of mass for every requested fragment, even
    those dropped at ``MAX_CELLS``. This may leave it at zero or below; the
    caller sets the cell's final mass. Returns the number of fragments
    created.
    """
    mass_per = max(cell.mass / parts, START_MASS / 2)
    created = 0
    for _ in range(parts - 1):
        if len(player.cells) >= MAX_CELLS:
            break
        angle = rng.random() * math.pi * 2
        player.cells.append(
            Cell(
                id=_new_id(),
                x=cell.x + math.cos(angle) * cell.radius,
                y=cell.y + math.sin(angle) * cell.radius,
                mass=mass_per,
                mergeAt=now + RECOMBINE_DELAY,
                vx=math.cos(angle) * FRAGMENT_IMPULSE,
                vy=math.sin(angle) * FRAGMENT_IMPULSE,
            )
        )
        created += 1

    cell.mass -= mass_per * (parts - 1)
    cell.mergeAt = now + RECOMBINE_DELAY
    return created
