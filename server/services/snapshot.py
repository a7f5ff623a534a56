# server/services/snapshot.py
"""Serialization of world state for broadcasting to clients."""

import math
from dataclasses import asdict
from typing import List

from models.entities import Player, World
from config.settings import LEADERBOARD_SIZE, WORLD_SIZE


def _quantize(value: float) -> float:
    return round(value, 1)


def serialize_player(player: Player) -> dict:
    """Player view with cell positions and masses rounded to one decimal."""
    return {
        "id": player.id,
        "name": player.name,
        "color": player.color,
        "cells": [
            {
                "id": cell.id,
                "x": _quantize(cell.x),
                "y": _quantize(cell.y),
                "mass": _quantize(cell.mass),
            }
            for cell in player.cells
        ],
        "alive": player.alive,
        "isSpectating": player.isSpectating,
    }


def build_leaderboard(world: World, size: int = LEADERBOARD_SIZE) -> List[dict]:
    """Top players by score; ties keep join order."""
    ranked = sorted(world.players.values(), key=lambda p: p.score, reverse=True)
    return [
        {"name": player.name, "score": math.floor(player.score), "id": player.id}
        for player in ranked[:size]
    ]


def build_snapshot(world: World) -> dict:
    """Full world view sent identically to every client."""
    return {
        "players": [serialize_player(player) for player in world.players.values()],
        "food": [asdict(food) for food in world.food],
        "viruses": [asdict(virus) for virus in world.viruses],
        "ejected": [asdict(pellet) for pellet in world.ejected],
        "leaderboard": build_leaderboard(world),
        "worldSize": WORLD_SIZE,
    }
