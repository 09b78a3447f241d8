"""A websocket client that forwards incoming text to an event bus."""

from __future__ import annotations

import asyncio
import contextlib
import logging

import websockets
from websockets.exceptions import ConnectionClosed

from wschat.event_bus import EventBus

log = logging.getLogger(__name__)

DEFAULT_URL = "ws://127.0.0.1:8080"
CHANNEL_CAPACITY = 1000


class SendError(Exception):
    """Raised when an outgoing message cannot be queued."""


class WebsocketService:
    """Queues outgoing text for the server and publishes incoming text on a bus."""

    def __init__(self, event_bus: EventBus, url: str = DEFAULT_URL) -> None:
        self.event_bus = event_bus
        self.url = url
        self._outgoing: asyncio.Queue[str] = asyncio.Queue(maxsize=CHANNEL_CAPACITY)
        self._connection = None
        self._closed = False

    def try_send(self, text: str) -> None:
        """Queue a message for sending without waiting."""
        if self._closed:
            raise SendError("channel is closed")
        try:
            self._outgoing.put_nowait(text)
        except asyncio.QueueFull as exc:
            raise SendError("channel is full") from exc

    async def run(self) -> None:
        """Connect, then pump messages both ways until the connection closes."""
        async with websockets.connect(self.url) as connection:
            self._connection = connection
            writer = asyncio.create_task(self._write(connection))
            try:
                await self._read(connection)
            finally:
                writer.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await writer
                self._connection = None
        log.debug("WebSocket Closed")

    async def close(self) -> None:
        """Stop accepting messages and close the connection."""
        self._closed = True
        if self._connection is not None:
            await self._connection.close()

    async def _write(self, connection) -> None:
        while True:
            text = await self._outgoing.get()
            log.debug("got event from channel! %s", text)
            try:
                await connection.send(text)
            except ConnectionClosed as exc:
                log.error("ws: %r", exc)
                return

    async def _read(self, connection) -> None:
        try:
            async for message in connection:
                if isinstance(message, bytes):
                    try:
                        message = message.decode("utf-8")
                    except UnicodeDecodeError:
                        continue
                log.debug("from websocket: %s", message)
                self.event_bus.send(message)
        except ConnectionClosed as exc:
            log.error("ws: %r", exc)