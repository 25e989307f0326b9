# Area: Server
"""
rps_lobby.server — WebSocket lobby server
=========================================

Thin FastAPI transport around the session layer.

Endpoints:
    GET  /health    Health check
    WS   /ws        Game channel (create or join, then play)

Each WebSocket gets a ``WebSocketChannel``: sessions call its
synchronous ``send``/``close``, which only enqueue; a writer task
drains the queue onto the socket in order. Inbound frames are handled
one at a time on the event loop, so sessions never see concurrent
requests.
"""

from __future__ import annotations
import asyncio
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from pydantic import BaseModel

from . import __version__
from ._session import Connection, Registry

logger = logging.getLogger("rps_lobby.server")

_CLOSE = object()


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
    games: int


class WebSocketChannel:
    """Non-blocking channel backed by a FastAPI WebSocket."""

    def __init__(self, websocket: WebSocket):
        self.websocket = websocket
        self.closed = False
        self._queue: "asyncio.Queue[Any]" = asyncio.Queue()

    def send(self, text: str) -> None:
        if self.closed:
            return
        self._queue.put_nowait(text)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._queue.put_nowait(_CLOSE)

    async def pump(self) -> None:
        """Deliver queued frames until the channel is closed."""
        while True:
            item = await self._queue.get()
            if item is _CLOSE:
                try:
                    await self.websocket.close()
                except Exception as e:
                    logger.debug(f"Ignoring close error: {e}")
                return
            try:
                await self.websocket.send_text(item)
            except Exception as e:
                logger.debug(f"Dropping frame to dead socket: {e}")


def create_app(registry: Optional[Registry] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        registry: Optional Registry instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    app = FastAPI(title="RPS Lobby", version=__version__)
    app.state.registry = registry if registry is not None else Registry()

    @app.get("/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        return HealthResponse(
            status="healthy",
            service="rps-lobby",
            version=__version__,
            games=len(app.state.registry),
        )

    @app.websocket("/ws")
    async def websocket_endpoint(websocket: WebSocket):
        await websocket.accept()

        channel = WebSocketChannel(websocket)
        writer = asyncio.create_task(channel.pump())
        connection = Connection(app.state.registry, channel)

        try:
            while not channel.closed:
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    raise WebSocketDisconnect(message.get("code", 1000))
                frame = message.get("text")
                if frame is None:
                    frame = message.get("bytes") or b""
                connection.on_message(frame)
        except WebSocketDisconnect:
            pass
        except RuntimeError as e:
            # Receiving after our own close() has been sent
            logger.debug(f"WebSocket receive stopped: {e}")
        finally:
            connection.on_close()
            channel.close()
            await writer

    return app


def run_server(config: Dict[str, Any]) -> None:
    """Serve the lobby with uvicorn. Blocks until interrupted."""
    import uvicorn

    logger.info("=" * 60)
    logger.info("  RPS Lobby Server — Starting")
    logger.info(f"  Listen: ws://{config['host']}:{config['port']}/ws")
    logger.info("=" * 60)

    uvicorn.run(
        create_app(),
        host=config["host"],
        port=config["port"],
        log_level=str(config.get("log_level", "INFO")).lower(),
    )
