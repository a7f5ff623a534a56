# server/services/interactions.py
"""Consumption, predation, decay and boundary rules applied to a player each tick."""

import logging
import math
import random

from models.entities import Player, World
from config.settings import (
    DECAY_RATE,
    DECAY_START,
    EJECT_MARGIN,
    PREDATION_FACTOR,
    START_MASS,
    VIRUS_EAT_FACTOR,
    VIRUS_POP_BASE_PARTS,
    VIRUS_POP_KEEP_RATIO,
    VIRUS_POP_MASS_PER_PART,
    VIRUS_REWARD,
)
from utils.helpers import clamp_to_world, distance
from .actions import split_into_fragments

logger = logging.getLogger(__name__)


def consume_food(world: World, player: Player) -> int:
    """Let each cell eat the food it overlaps. Returns the number eaten."""
    eaten = set()
    for cell in player.cells:
        for food in world.food:
            if food.id in eaten:
                continue
            if distance(cell, food) <= cell.radius:
                cell.mass += food.mass
                player.score += food.mass
                eaten.add(food.id)

    if eaten:
        world.food = [food for food in world.food if food.id not in eaten]
    return len(eaten)


def consume_ejected(world: World, player: Player) -> int:
    """Let each cell eat overlapping ejected pellets it is big enough for."""
    eaten = set()
    for cell in player.cells:
        for pellet in world.ejected:
            if pellet.id in eaten:
                continue
            if distance(cell, pellet) <= cell.radius and cell.mass > pellet.mass + EJECT_MARGIN:
                cell.mass += pellet.mass
                player.score += pellet.mass
                eaten.add(pellet.id)

    if eaten:
        world.ejected = [pellet for pellet in world.ejected if pellet.id not in eaten]
    return len(eaten)


def consume_viruses(world: World, player: Player, now: float, rng: random.Random) -> int:
    """Resolve cells touching viruses.

    A cell more than ``VIRUS_EAT_FACTOR`` times the virus mass eats it for a
    bonus; anything smaller is popped into fragments. Either way the virus
    is gone. Fragments created here are not checked against other viruses
    until the next tick.
    """
    touched = set()
    for cell in list(player.cells):
        for virus in world.viruses:
            if virus.id in touched:
                continue
            if distance(cell, virus) > cell.radius:
                continue

            touched.add(virus.id)
            if cell.mass > virus.mass * VIRUS_EAT_FACTOR:
                reward = virus.mass * VIRUS_REWARD
                cell.mass += reward
                player.score += reward
            else:
                parts = VIRUS_POP_BASE_PARTS + math.floor(cell.mass / VIRUS_POP_MASS_PER_PART)
                split_into_fragments(player, cell, parts, now, rng)
                cell.mass = max(cell.mass * VIRUS_POP_KEEP_RATIO, START_MASS)

    if touched:
        world.viruses = [virus for virus in world.viruses if virus.id not in touched]
    return len(touched)


def resolve_predation(world: World, player: Player) -> int:
    """Let the player's cells eat sufficiently smaller cells of other players.

    Victim cells are marked during the pass and removed afterwards, so every
    victim cell is considered exactly once per attacker pass.
    Returns the number of cells eaten.
    """
    if not player.alive:
        return 0

    total = 0
    for other in list(world.players.values()):
        if other is player or not other.alive:
            continue

        eaten = set()
        for cell in player.cells:
            for target in other.cells:
                if target.id in eaten:
                    continue
                if distance(cell, target) < cell.radius and cell.mass > target.mass * PREDATION_FACTOR:
                    cell.mass += target.mass
                    other.score = max(0.0, other.score - target.mass)
                    eaten.add(target.id)

        if not eaten:
            continue
        other.cells = [cell for cell in other.cells if cell.id not in eaten]
        total += len(eaten)
        if not other.cells:
            other.alive = False
            other.isSpectating = True
            logger.info("Player %s (%s) was eaten by %s", other.id, other.name, player.id)
    return total


def decay_mass(player: Player) -> None:
    """Shrink cells above ``DECAY_START`` without taking them below it."""
    for cell in player.cells:
        if cell.mass > DECAY_START:
            cell.mass = max(DECAY_START, cell.mass * (1 - DECAY_RATE))


def clamp_cells(player: Player) -> None:
    for cell in player.cells:
        cell.x, cell.y = clamp_to_world(cell.x, cell.y)


def update_scores(player: Player) -> None:
    total = player.total_mass
    player.score = max(player.score, total)
    player.best = max(player.best, total)
