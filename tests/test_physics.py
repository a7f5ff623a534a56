import math

import pytest

from config.settings import HALF_WORLD, MERGE_IMPULSE, TICK_RATE
from models.entities import EjectedMass, World
from services.physics import advance_ejected, merge_cells, move_cells
from utils.helpers import speed_from_mass
from conftest import make_cell, make_player


def test_cell_moves_towards_target_by_one_step():
    world = World()
    player = make_player(world, [make_cell(0, 0, mass=40)], target=(100, 0))

    move_cells(player)

    cell = player.cells[0]
    step = speed_from_mass(40, 1) / TICK_RATE
    assert cell.x == pytest.approx(step)
    assert cell.y == pytest.approx(0)
    assert 100 - cell.x == pytest.approx(100 - step)


def test_cell_on_target_does_not_steer():
    world = World()
    player = make_player(world, [make_cell(10, 10)], target=(10, 10))

    move_cells(player)

    assert (player.cells[0].x, player.cells[0].y) == (10, 10)


def test_impulse_is_applied_then_damped():
    world = World()
    player = make_player(world, [make_cell(0, 0, vx=10, vy=-5)], target=(0, 0))

    move_cells(player)

    cell = player.cells[0]
    assert cell.x == pytest.approx(10)
    assert cell.y == pytest.approx(-5)
    assert cell.vx == pytest.approx(8.8)
    assert cell.vy == pytest.approx(-4.4)


def test_movement_is_clamped_to_world():
    world = World()
    player = make_player(world, [make_cell(HALF_WORLD - 1, 0, vx=100)], target=(HALF_WORLD + 500, 0))

    move_cells(player)

    assert player.cells[0].x == HALF_WORLD


def test_siblings_merge_after_cooldown():
    world = World()
    a = make_cell(0, 0, mass=50)
    b = make_cell(5, 0, mass=30)
    player = make_player(world, [a, b], target=(100, 0))

    assert merge_cells(player, now=10) == 1

    assert len(player.cells) == 1
    assert player.cells[0] is a
    assert a.mass == 80
    assert a.vx == pytest.approx(MERGE_IMPULSE)


def test_merge_waits_for_cooldown():
    world = World()
    player = make_player(world, [make_cell(0, 0, mass=50), make_cell(5, 0, mass=30, merge_at=20)])

    assert merge_cells(player, now=10) == 0
    assert len(player.cells) == 2


def test_merge_requires_proximity():
    world = World()
    player = make_player(world, [make_cell(0, 0, mass=50), make_cell(200, 0, mass=30)])

    merge_cells(player, now=10)

    assert len(player.cells) == 2


def test_equal_masses_keep_the_earlier_cell():
    world = World()
    first = make_cell(0, 0, mass=40)
    second = make_cell(1, 0, mass=40)
    player = make_player(world, [first, second])

    merge_cells(player, now=10)

    assert player.cells == [first]
    assert first.mass == 80


def test_heavier_later_cell_absorbs_earlier_one():
    world = World()
    small = make_cell(0, 0, mass=30)
    big = make_cell(5, 0, mass=50)
    player = make_player(world, [small, big], target=(5, 100))

    merge_cells(player, now=10)

    assert player.cells == [big]
    assert big.mass == 80
    assert big.vy == pytest.approx(MERGE_IMPULSE)
    assert big.vx == pytest.approx(0, abs=1e-9)


def test_many_overlapping_cells_merge_conserving_mass():
    world = World()
    cells = [make_cell(i, 0, mass=mass) for i, mass in enumerate([20, 35, 10, 35])]
    player = make_player(world, cells)

    merge_cells(player, now=10)

    assert len(player.cells) == 1
    assert player.cells[0].mass == 100


def test_ejected_pellets_drift_and_slow_down():
    world = World()
    world.ejected.append(EjectedMass(id=1, x=0, y=0, mass=12, vx=60, vy=0, color="red"))

    advance_ejected(world)

    pellet = world.ejected[0]
    assert pellet.x == pytest.approx(60 / TICK_RATE)
    assert pellet.vx == pytest.approx(57)


def test_ejected_pellets_outside_the_world_are_clamped():
    world = World()
    world.ejected.append(EjectedMass(id=1, x=7500, y=0, mass=12, vx=0, vy=0, color="red"))
    world.ejected.append(EjectedMass(id=2, x=3600, y=-3600, mass=12, vx=0, vy=0, color="red"))

    advance_ejected(world)

    assert [(p.x, p.y) for p in world.ejected] == [(HALF_WORLD, 0), (HALF_WORLD, -HALF_WORLD)]


def test_fast_pellet_stays_inside_the_world():
    world = World()
    world.ejected.append(EjectedMass(id=1, x=HALF_WORLD - 1, y=0, mass=12, vx=600, vy=0, color="red"))

    for _ in range(30):
        advance_ejected(world)

    assert len(world.ejected) == 1
    assert world.ejected[0].x == HALF_WORLD


def test_zero_distance_merge_impulse_is_finite():
    world = World()
    a = make_cell(0, 0, mass=40)
    b = make_cell(0, 0, mass=20)
    player = make_player(world, [a, b], target=(0, 0))

    merge_cells(player, now=10)

    assert math.isfinite(a.vx) and math.isfinite(a.vy)
