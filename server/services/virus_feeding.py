# server/services/virus_feeding.py
"""Viruses absorb ejected mass and reproduce once fed enough."""

import logging
import math
import random
from typing import Optional

from models.entities import Virus, World
from config.settings import (
    VIRUS_BASE_MASS,
    VIRUS_COLOR,
    VIRUS_SHOOT_DISTANCE,
    VIRUS_SHOOT_THRESHOLD,
)
from utils.helpers import clamp_to_world, distance

logger = logging.getLogger(__name__)


def feed_viruses(world: World, rng: random.Random, virus_cap: int) -> int:
    """Absorb pellets that overlap a virus, shooting new viruses as feed fills up.

    A pellet feeds at most one virus. Viruses spawned during this pass do not
    eat until the next tick. Returns the number of pellets absorbed.
    """
    absorbed = set()
    viruses = list(world.viruses)
    for pellet in world.ejected:
        for virus in viruses:
            if distance(pellet, virus) > virus.radius:
                continue
            virus.feed += pellet.mass
            absorbed.add(pellet.id)
            if virus.feed >= VIRUS_SHOOT_THRESHOLD:
                virus.feed = 0
                shoot_virus(world, virus, rng, virus_cap)
            break

    if absorbed:
        world.ejected = [pellet for pellet in world.ejected if pellet.id not in absorbed]
    return len(absorbed)


def shoot_virus(
    world: World, parent: Virus, rng: random.Random, virus_cap: int
) -> Optional[Virus]:
    """Spawn a sibling virus next to ``parent`` unless the world is at the cap."""
    if len(world.viruses) >= virus_cap:
        logger.debug("Virus cap of %d reached, virus %s did not reproduce", virus_cap, parent.id)
        return None

    angle = rng.random() * math.pi * 2
    x, y = clamp_to_world(
        parent.x + math.cos(angle) * VIRUS_SHOOT_DISTANCE,
        parent.y + math.sin(angle) * VIRUS_SHOOT_DISTANCE,
    )
    virus = Virus(id=world.next_id(), x=x, y=y, mass=VIRUS_BASE_MASS, color=VIRUS_COLOR)
    world.viruses.append(virus)
    logger.debug("Virus %s reproduced into %s", parent.id, virus.id)
    return virus
