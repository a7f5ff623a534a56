# server/main.py
"""FastAPI application entry point for the cell arena server."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, WebSocket
from fastapi.middleware.cors import CORSMiddleware

from api.routes import GameAPI
from config.settings import ALLOWED_ORIGINS, HOST, LOG_LEVEL, PORT
from services.game_service import GameService
from services.websocket_service import WebSocketService

logger = logging.getLogger(__name__)


def configure_logging(level: str = LOG_LEVEL):
    """Configure application logging and align the uvicorn loggers."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).setLevel(level)


def create_app(game_service: Optional[GameService] = None, run_tick_loop: bool = True) -> FastAPI:
    """Build the app around a game service (a fresh one by default)."""
    game_service = game_service or GameService()
    websocket_service = WebSocketService(game_service)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if run_tick_loop:
            websocket_service.start_background_tasks()
            logger.info("Simulation loop started")
        yield
        await websocket_service.stop_background_tasks()
        logger.info("Simulation loop stopped")

    app = FastAPI(title="Cell Arena Server", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.game_service = game_service
    app.state.websocket_service = websocket_service
    app.include_router(GameAPI(game_service).router)

    @app.websocket("/ws")
    async def websocket_endpoint(websocket: WebSocket):
        await websocket_service.handle_connection(websocket)

    return app


configure_logging()
app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host=HOST, port=PORT)
