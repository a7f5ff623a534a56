# server/services/websocket_service.py
"""WebSocket connection management, message handling and the tick loop."""

import asyncio
import json
import logging
from typing import Dict, Optional, Set, Union

from fastapi import WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from models.commands import parse_command
from .game_service import GameService, Session
from config.settings import TICK_RATE

logger = logging.getLogger(__name__)


class WebSocketService:
    """Manages WebSocket connections and message routing."""

    def __init__(self, game_service: GameService):
        self.game_service = game_service
        self.connected_clients: Set[WebSocket] = set()
        self.websocket_to_session: Dict[WebSocket, Session] = {}
        self._tick_task: Optional[asyncio.Task] = None

    def start_background_tasks(self):
        """Start the simulation loop."""
        if not self._tick_task:
            self._tick_task = asyncio.create_task(self._tick_loop())

    async def stop_background_tasks(self):
        if self._tick_task:
            self._tick_task.cancel()
            try:
                await self._tick_task
            except asyncio.CancelledError:
                pass
            self._tick_task = None

    async def _tick_loop(self):
        """Background task running the simulation at a fixed rate."""
        loop = asyncio.get_running_loop()
        interval = 1 / TICK_RATE
        next_tick = loop.time()

        while True:
            try:
                self.game_service.tick()
                snapshot = self.game_service.poll_snapshot()
            except Exception:
                logger.exception("Simulation tick failed")
                snapshot = None

            if snapshot is not None and self.connected_clients:
                await self._broadcast_message({"type": "update", "data": snapshot})

            next_tick += interval
            await asyncio.sleep(max(0.0, next_tick - loop.time()))

    async def handle_connection(self, websocket: WebSocket):
        """Handle a new WebSocket connection."""
        await websocket.accept()
        logger.info("WebSocket connection accepted for %s", websocket.client)

        session = Session()
        self.connected_clients.add(websocket)
        self.websocket_to_session[websocket] = session

        try:
            await self._handle_client_messages(websocket, session)
        except WebSocketDisconnect:
            logger.info("WebSocket %s disconnected", websocket.client)
        finally:
            self._handle_disconnect(websocket)

    async def _handle_client_messages(self, websocket: WebSocket, session: Session):
        """Handle incoming text or binary messages from a client."""
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(message.get("code", 1000))

            raw = message.get("text") or message.get("bytes")
            if raw is None:
                logger.warning("Dropping empty frame from %s", session.player_id)
                continue
            reply = self._process_message(session, raw)
            if reply:
                await websocket.send_json(reply)

    def _process_message(self, session: Session, raw: Union[str, bytes]) -> Optional[dict]:
        """Validate a single message and apply it to the game."""
        try:
            command = parse_command(raw)
        except ValidationError as e:
            logger.warning("Dropping malformed message from %s: %s", session.player_id, e.errors()[:1])
            return None
        return self.game_service.handle_command(session, command)

    def _handle_disconnect(self, websocket: WebSocket):
        """Handle client disconnection."""
        self.connected_clients.discard(websocket)
        session = self.websocket_to_session.pop(websocket, None)
        if session is not None:
            self.game_service.disconnect(session)

    async def _broadcast_message(self, message: dict):
        """Broadcast a message to all connected clients."""
        payload = json.dumps(message)
        disconnected = set()

        for client in list(self.connected_clients):
            try:
                await client.send_text(payload)
            except Exception as e:
                logger.warning("Dropping client %s after failed send: %s", client.client, e)
                disconnected.add(client)

        for client in disconnected:
            self._handle_disconnect(client)
