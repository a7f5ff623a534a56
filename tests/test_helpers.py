import math

import pytest

from config.settings import HALF_WORLD
from utils.helpers import (
    angle_towards,
    clamp_to_world,
    distance,
    radius_from_mass,
    speed_from_mass,
)
from conftest import make_cell


def test_radius_grows_with_square_root_of_mass():
    assert radius_from_mass(100) == 40
    assert radius_from_mass(25) == 20


def test_speed_for_single_starting_cell():
    expected = 340 / math.sqrt(54) * (1 + 0.35 - 0.015)
    assert speed_from_mass(40, 1) == pytest.approx(expected)


def test_speed_penalty_is_capped():
    base = 340 / math.sqrt(100 + 14)
    assert speed_from_mass(100, 20) == pytest.approx(base * 1.1)
    assert speed_from_mass(100, 100) == pytest.approx(base * 1.1)


def test_speed_has_a_floor():
    assert speed_from_mass(1_000_000, 16) == 22


def test_distance_between_cells():
    assert distance(make_cell(0, 0), make_cell(3, 4)) == 5


def test_clamp_to_world():
    assert clamp_to_world(5000, -5000) == (HALF_WORLD, -HALF_WORLD)
    assert clamp_to_world(12.5, -3) == (12.5, -3)


def test_angle_towards_same_point_is_zero():
    assert angle_towards(7, 7, 7, 7) == 0
    assert angle_towards(0, 0, 0, 10) == pytest.approx(math.pi / 2)
