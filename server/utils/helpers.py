# server/utils/helpers.py
"""Utility functions and helpers."""

import math
import random
from typing import Tuple

from config.settings import HALF_WORLD


def radius_from_mass(mass: float) -> float:
    """Calculate radius from mass using the same formula as client."""
    return math.sqrt(mass) * 4


def speed_from_mass(mass: float, cell_count: int = 1) -> float:
    """Per-second speed of a cell; bigger cells and many-cell players are slower."""
    base = 340 / math.sqrt(mass + 14)
    multiplier = 1 + max(0.0, 0.35 - min(0.25, cell_count * 0.015))
    return max(22.0, base * multiplier)


def distance(a, b) -> float:
    """Calculate distance between two positioned entities."""
    return math.hypot(a.x - b.x, a.y - b.y)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def clamp_to_world(x: float, y: float) -> Tuple[float, float]:
    """Clamp position to world boundaries."""
    return clamp(x, -HALF_WORLD, HALF_WORLD), clamp(y, -HALF_WORLD, HALF_WORLD)


def random_position(rng: random.Random) -> Tuple[float, float]:
    """Uniformly random point inside the world."""
    return rng.uniform(-HALF_WORLD, HALF_WORLD), rng.uniform(-HALF_WORLD, HALF_WORLD)


def angle_towards(x: float, y: float, target_x: float, target_y: float) -> float:
    """Angle from a point to a target; 0 when they coincide."""
    return math.atan2(target_y - y, target_x - x)


def random_color(rng: random.Random) -> str:
    return f"hsl({rng.randint(0, 360)},80%,55%)"
