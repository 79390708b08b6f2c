"""Helpers shared by the WebSocket endpoints."""
import asyncio
import logging
from typing import Coroutine, Any, Union

from fastapi import WebSocket, WebSocketDisconnect
from pydantic import BaseModel

logger = logging.getLogger(__name__)


async def receive_frame(websocket: WebSocket) -> str:
    """Receive one text or binary frame as text.

    Raises:
        WebSocketDisconnect: When the peer closes the connection.
    """
    message = await websocket.receive()
    if message["type"] == "websocket.disconnect":
        raise WebSocketDisconnect(message.get("code", 1000), message.get("reason"))
    if message.get("text") is not None:
        return message["text"]
    return (message.get("bytes") or b"").decode("utf-8", errors="replace")


class SocketSender:
    """Serializes outbound frames from concurrent handlers on one socket.

    Frames for a socket that has gone away are dropped: the work that
    produced them has already been applied to the session.
    """

    def __init__(self, websocket: WebSocket) -> None:
        self._websocket = websocket
        self._lock = asyncio.Lock()

    async def send(self, *frames: Union[BaseModel, dict]) -> bool:
        async with self._lock:
            try:
                for frame in frames:
                    if isinstance(frame, BaseModel):
                        await self._websocket.send_text(frame.model_dump_json(exclude_none=False))
                    else:
                        await self._websocket.send_json(frame)
            except (WebSocketDisconnect, RuntimeError, OSError) as exc:
                logger.debug("Dropping %d frame(s) for closed socket: %s", len(frames), exc)
                return False
        return True


def spawn(in_flight: set[asyncio.Task], coro: Coroutine[Any, Any, None]) -> asyncio.Task:
    """Run a handler in its own task, keeping a reference until it finishes."""
    task = asyncio.create_task(coro)
    in_flight.add(task)
    task.add_done_callback(in_flight.discard)
    return task
