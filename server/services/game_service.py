# server/services/game_service.py
"""Core game loop and state management."""

import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from models.commands import Command
from models.entities import Player, Point, World
from config.settings import (
    BROADCAST_RATE,
    FOOD_AMOUNT,
    VIRUS_AMOUNT,
    VIRUS_MAX_AMOUNT,
    WORLD_SIZE,
)
from . import actions, interactions, physics, population, snapshot
from .virus_feeding import feed_viruses

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """Per-connection state: which player the connection controls."""

    player_id: Optional[str] = None
    joined: bool = False


class GameService:
    """Owns the world and advances it one step at a time.

    All methods are synchronous; callers serialize ticks and commands
    (the WebSocket service runs both on one event loop).
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        seed: Optional[int] = None,
        food_amount: int = FOOD_AMOUNT,
        virus_amount: int = VIRUS_AMOUNT,
        virus_cap: int = VIRUS_MAX_AMOUNT,
    ):
        self.world = World()
        self.clock = clock
        self.rng = random.Random(seed)
        self.food_amount = food_amount
        self.virus_amount = virus_amount
        self.virus_cap = max(virus_cap, virus_amount)

        self.tick_count = 0
        self._last_snapshot_at: Optional[float] = None

        self._initialize_world()

    def _initialize_world(self):
        """Fill the world with its starting food and viruses."""
        population.maintain_food(self.world, self.rng, self.food_amount)
        population.maintain_viruses(self.world, self.rng, self.virus_amount)

    # Simulation
    def tick(self):
        """Run one simulation step."""
        now = self.clock()
        world = self.world

        population.maintain_food(world, self.rng, self.food_amount)
        population.maintain_viruses(world, self.rng, self.virus_amount)
        physics.advance_ejected(world)
        feed_viruses(world, self.rng, self.virus_cap)

        for player in list(world.players.values()):
            if not player.alive and not player.isSpectating:
                continue
            self.update_player(player, now)

        self.tick_count += 1

    def update_player(self, player: Player, now: float):
        """Apply movement and every interaction rule to a single player."""
        physics.move_cells(player)
        interactions.consume_food(self.world, player)
        interactions.consume_ejected(self.world, player)
        interactions.consume_viruses(self.world, player, now, self.rng)
        physics.merge_cells(player, now)
        interactions.resolve_predation(self.world, player)
        interactions.decay_mass(player)
        interactions.clamp_cells(player)
        interactions.update_scores(player)

    def poll_snapshot(self) -> Optional[dict]:
        """Return a snapshot if the broadcast interval has elapsed, else None."""
        now = self.clock()
        if self._last_snapshot_at is not None and now - self._last_snapshot_at < 1 / BROADCAST_RATE:
            return None
        self._last_snapshot_at = now
        return self.build_snapshot()

    def build_snapshot(self) -> dict:
        return snapshot.build_snapshot(self.world)

    def get_leaderboard(self) -> List[dict]:
        return snapshot.build_leaderboard(self.world)

    # Commands
    def handle_command(self, session: Session, command: Command) -> Optional[dict]:
        """Apply a player command; returns a reply message for the sender, if any."""
        if command.type == "join":
            if session.joined:
                return None
            name = command.data.name if command.data else None
            return self._join(session, name)

        player = self.world.players.get(session.player_id) if session.player_id else None
        if player is None:
            return None

        if command.type == "move":
            player.target = Point(command.data.x, command.data.y)
        elif command.type == "split":
            actions.handle_split(player, self.clock())
        elif command.type == "eject":
            actions.handle_eject(self.world, player)
        elif command.type == "respawn":
            name = command.data.name if command.data and command.data.name else player.name
            actions.remove_player(self.world, player.id)
            logger.info("Player %s respawning", player.id)
            return self._join(session, name)
        return None

    def _join(self, session: Session, name: Optional[str]) -> dict:
        player = actions.spawn_player(self.world, name, self.clock(), self.rng)
        session.player_id = player.id
        session.joined = True
        logger.info("Player %s joined as %r", player.id, player.name)
        return self._welcome_message(player)

    def _welcome_message(self, player: Player) -> dict:
        return {
            "type": "welcome",
            "data": {"id": player.id, "color": player.color, "worldSize": WORLD_SIZE},
        }

    def disconnect(self, session: Session):
        """Remove the session's player, if it ever joined."""
        if session.player_id and actions.remove_player(self.world, session.player_id):
            logger.info("Player %s left", session.player_id)
        session.player_id = None

    # Getter methods for game state
    def get_player(self, player_id: str) -> Optional[Player]:
        return self.world.players.get(player_id)

    def get_stats(self) -> dict:
        """Get game statistics."""
        players = self.world.players.values()
        return {
            "totalPlayers": len(players),
            "alivePlayers": sum(1 for p in players if p.alive),
            "totalFood": len(self.world.food),
            "totalViruses": len(self.world.viruses),
            "totalEjected": len(self.world.ejected),
            "tickCount": self.tick_count,
        }
