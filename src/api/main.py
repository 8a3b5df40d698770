"""
FastAPI server
Clients connect through a websocket, send commands (setup / move / reset) and receive state updates.
"""

import logging

import uvicorn
from fastapi import FastAPI, WebSocket, WebSocketDisconnect

from src.api.connections import ConnectionManager
from src.api.models import GameStateResponse
from src.core import config
from src.duel.match import Match
from src.services.duel_service import DuelService

# Configure logging
logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
logger = logging.getLogger(__name__)


def create_app(service: DuelService | None = None) -> FastAPI:
    """Build the app around a single match. Tests pass their own service to start from a known state."""
    duel_service = service or DuelService(Match.new())
    connections = ConnectionManager()

    app = FastAPI(
        title="Grid Duel API",
        description="Authoritative game server for a two-player duel on a 5x5 grid",
        version="1.0.0",
    )
    app.state.service = duel_service
    app.state.connections = connections

    @app.get("/state", response_model=GameStateResponse, response_model_by_alias=True)
    def get_state() -> GameStateResponse:
        """Current snapshot of the match (same content as the gameState of an update message)."""
        return duel_service.state()

    @app.websocket(config.WEBSOCKET_PATH)
    async def play(websocket: WebSocket) -> None:
        await connections.connect(websocket)
        try:
            connections.deliver(websocket, duel_service.connect())
            while True:
                raw = await websocket.receive_text()
                # handled synchronously: the next frame is only read once this command is done
                outbound = duel_service.handle(raw)
                connections.deliver(websocket, outbound)
        except WebSocketDisconnect:
            logger.debug("Websocket closed by client")
        finally:
            connections.disconnect(websocket)

    return app


app = create_app()


def run() -> None:
    logger.info("Server is listening on port %d", config.PORT)
    uvicorn.run(app, host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
