"""
Registry of connected websocket clients. Delivers the messages produced by the service.

Every client gets its own outbox queue drained by its own writer task. Handing a message over is a
synchronous `put_nowait`, so a client that stops reading never holds up the others or the next command.
"""

import asyncio
import logging

from fastapi import WebSocket, WebSocketDisconnect

from src.core import config
from src.services.duel_service import Outbound, Recipient

logger = logging.getLogger(__name__)


class ConnectionManager:
    def __init__(self, outbox_size: int = config.OUTBOX_SIZE) -> None:
        self.active: list[WebSocket] = []
        self.outbox_size = outbox_size
        self._outboxes: dict[WebSocket, asyncio.Queue[str]] = {}
        self._writers: dict[WebSocket, asyncio.Task[None]] = {}

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        outbox: asyncio.Queue[str] = asyncio.Queue(maxsize=self.outbox_size)
        self.active.append(websocket)
        self._outboxes[websocket] = outbox
        self._writers[websocket] = asyncio.create_task(self._write(websocket, outbox))
        logger.info("Client connected (%d connected)", len(self.active))

    def disconnect(self, websocket: WebSocket) -> None:
        self._outboxes.pop(websocket, None)
        writer = self._writers.pop(websocket, None)
        if writer is not None and writer is not asyncio.current_task():
            writer.cancel()
        if websocket in self.active:
            self.active.remove(websocket)
            logger.info("Client disconnected (%d connected)", len(self.active))

    def deliver(self, sender: WebSocket, messages: list[Outbound]) -> None:
        """Queue the messages of one command, in order. Returns without waiting for any socket."""
        for outbound in messages:
            payload = outbound.to_json()
            if outbound.recipient == Recipient.SENDER:
                self.send(sender, payload)
            else:
                self.broadcast(payload)

    def send(self, websocket: WebSocket, payload: str) -> None:
        """Fire and forget: a client whose outbox overflows is dropped, the failure is not passed on."""
        outbox = self._outboxes.get(websocket)
        if outbox is None:
            return
        try:
            outbox.put_nowait(payload)
        except asyncio.QueueFull:
            logger.warning("Dropping client that stopped reading (%d messages pending)", outbox.qsize())
            self.disconnect(websocket)

    def broadcast(self, payload: str) -> None:
        # iterate over a copy: clients with a full outbox get removed while sending
        for websocket in list(self.active):
            self.send(websocket, payload)

    async def _write(self, websocket: WebSocket, outbox: asyncio.Queue[str]) -> None:
        while True:
            payload = await outbox.get()
            try:
                await websocket.send_text(payload)
            except (WebSocketDisconnect, RuntimeError, OSError) as exc:
                logger.warning("Dropping unreachable client: %r", exc)
                self.disconnect(websocket)
                return
