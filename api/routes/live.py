"""
WebSocket channel for live `update` events
"""

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from ingestion.notifier import notifier
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Live"])


@router.websocket("/ws")
async def live_updates(websocket: WebSocket):
    """
    Push channel for dashboard clients.

    Events: {"event": "update", "data": {"type", "data", "timestamp"}}.
    Incoming messages are ignored; the loop only detects disconnects.
    """
    await notifier.connect(websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        await notifier.disconnect(websocket)
