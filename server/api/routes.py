# server/api/routes.py
"""API routes for the game server."""

from fastapi import APIRouter
from services.game_service import GameService
from config.settings import get_game_config


class GameAPI:
    """API routes for game-related endpoints."""

    def __init__(self, game_service: GameService):
        self.game_service = game_service
        self.router = APIRouter()
        self._setup_routes()

    def _setup_routes(self):
        """Set up all API routes."""

        @self.router.get("/")
        async def root():
            """Root endpoint."""
            return {"message": "Cell Arena Server Running"}

        @self.router.get("/api/game/config")
        async def get_game_config_endpoint():
            """Get game configuration including world size and gameplay constants."""
            return get_game_config()

        @self.router.get("/api/game/leaderboard")
        async def get_leaderboard():
            """Get the current top players."""
            return {"leaderboard": self.game_service.get_leaderboard()}

        @self.router.get("/api/game/stats")
        async def get_game_stats():
            """Get game statistics."""
            return self.game_service.get_stats()
