# server/services/physics.py
"""Cell movement, sibling merging and ejected-mass drift."""

import math

from models.entities import Cell, Player, World
from config.settings import (
    EJECTED_DAMPING,
    IMPULSE_DAMPING,
    MERGE_IMPULSE,
    MERGE_RANGE_FACTOR,
    TICK_RATE,
)
from utils.helpers import angle_towards, clamp_to_world, distance, speed_from_mass


def move_cells(player: Player) -> None:
    """Advance every cell one step towards the player's target."""
    cell_count = len(player.cells)
    for cell in player.cells:
        dx = player.target.x - cell.x
        dy = player.target.y - cell.y
        dist = math.hypot(dx, dy) or 1
        step = speed_from_mass(cell.mass, cell_count) / TICK_RATE

        cell.x += dx / dist * step + cell.vx
        cell.y += dy / dist * step + cell.vy
        cell.vx *= IMPULSE_DAMPING
        cell.vy *= IMPULSE_DAMPING
        cell.x, cell.y = clamp_to_world(cell.x, cell.y)


def _absorb(player: Player, recipient: Cell, donor: Cell) -> None:
    angle = angle_towards(recipient.x, recipient.y, player.target.x, player.target.y)
    recipient.mass += donor.mass
    recipient.vx += math.cos(angle) * MERGE_IMPULSE
    recipient.vy += math.sin(angle) * MERGE_IMPULSE


def merge_cells(player: Player, now: float) -> int:
    """Recombine sibling cells whose cooldown has expired.

    The heavier cell survives; on equal mass the earlier cell survives.
    Returns the number of cells absorbed.
    """
    cells = player.cells
    absorbed = set()

    for i, a in enumerate(cells):
        if a.id in absorbed or now < a.mergeAt:
            continue
        for b in cells[i + 1:]:
            if b.id in absorbed or now < b.mergeAt:
                continue
            if a.mass >= b.mass:
                recipient, donor = a, b
            else:
                recipient, donor = b, a
            if distance(a, b) >= recipient.radius + donor.radius * MERGE_RANGE_FACTOR:
                continue

            _absorb(player, recipient, donor)
            absorbed.add(donor.id)
            if donor is a:
                break

    if absorbed:
        player.cells = [cell for cell in cells if cell.id not in absorbed]
    return len(absorbed)


def advance_ejected(world: World) -> None:
    """Drift ejected pellets and clamp them into the world.

    Pellets are clamped every step, so none can stray far enough outside the
    world to need culling.
    """
    for pellet in world.ejected:
        pellet.x += pellet.vx / TICK_RATE
        pellet.y += pellet.vy / TICK_RATE
        pellet.vx *= EJECTED_DAMPING
        pellet.vy *= EJECTED_DAMPING
        pellet.x, pellet.y = clamp_to_world(pellet.x, pellet.y)
