# server/services/population.py
"""Keeps food and virus populations topped up."""

import random

from models.entities import Food, Virus, World
from config.settings import FOOD_VARIANTS, VIRUS_BASE_MASS, VIRUS_COLOR
from utils.helpers import random_position


def spawn_food(world: World, rng: random.Random) -> Food:
    """Spawn a single food pellet at a random position."""
    x, y = random_position(rng)
    variant = rng.choice(FOOD_VARIANTS)
    food = Food(id=world.next_id(), x=x, y=y, mass=variant["mass"], color=variant["color"])
    world.food.append(food)
    return food


def spawn_virus(world: World, rng: random.Random) -> Virus:
    """Spawn a single base-mass virus at a random position."""
    x, y = random_position(rng)
    virus = Virus(id=world.next_id(), x=x, y=y, mass=VIRUS_BASE_MASS, color=VIRUS_COLOR)
    world.viruses.append(virus)
    return virus


def maintain_food(world: World, rng: random.Random, target: int) -> int:
    """Spawn food until the world holds ``target`` pellets. Returns how many were added."""
    spawned = 0
    while len(world.food) < target:
        spawn_food(world, rng)
        spawned += 1
    return spawned


def maintain_viruses(world: World, rng: random.Random, target: int) -> int:
    spawned = 0
    while len(world.viruses) < target:
        spawn_virus(world, rng)
        spawned += 1
    return spawned
