"""
Live change notifications for connected dashboard clients.
"""

import asyncio
from typing import Any, Set
from fastapi import WebSocket
from fastapi.encoders import jsonable_encoder
from models.base import SourceType
from schemas.api import UpdateEvent
import logging

logger = logging.getLogger(__name__)

UPDATE_EVENT = "update"


class ChangeNotifier:
    """
    Fan-out of `update` events to every connected WebSocket.

    Delivery is best-effort: there is no replay for late subscribers and a
    socket that fails to receive is dropped. The connection set is only
    mutated between awaits and no state is bound to an event loop.
    """

    def __init__(self):
        self._connections: Set[WebSocket] = set()

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    async def connect(self, websocket: WebSocket) -> None:
        """Accept and register a new connection."""
        await websocket.accept()
        self._connections.add(websocket)
        logger.info(f"Client connected ({len(self._connections)} total)")

    async def disconnect(self, websocket: WebSocket) -> None:
        """Remove a connection."""
        self._connections.discard(websocket)
        logger.info(f"Client disconnected ({len(self._connections)} total)")

    async def broadcast(self, source_type: SourceType, payload: Any) -> int:
        """
        Send an update event to all connected clients.

        Args:
            source_type: Which source produced the change
            payload: New records, or a message object

        Returns:
            Number of connections that received the event
        """
        event = {
            "event": UPDATE_EVENT,
            "data": jsonable_encoder(UpdateEvent(type=source_type, data=payload)),
        }

        connections = list(self._connections)

        results = await asyncio.gather(
            *[self._send(websocket, event) for websocket in connections]
        )

        stale = [ws for ws, delivered in zip(connections, results) if not delivered]
        self._connections.difference_update(stale)

        sent_count = sum(1 for delivered in results if delivered)
        logger.debug(f"Broadcast {SourceType(source_type).value} update: sent to {sent_count}/{len(connections)}")
        return sent_count

    @staticmethod
    async def _send(websocket: WebSocket, event: dict) -> bool:
        try:
            await websocket.send_json(event)
            return True
        except Exception as e:
            logger.debug(f"Dropping client after failed send: {e}")
            return False


notifier = ChangeNotifier()
