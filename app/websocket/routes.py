# =============================================================================
# app/websocket/routes.py - WebSocket Routes
# =============================================================================
# WebSocket endpoint for live application stats.
#
# Connect: ws://host/ws/stats
#
# Events:
#   - {"type": "stats", "total": ..., "pending": ..., "accepted": ...}
# =============================================================================

import logging
from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from app.websocket.broadcast import STATS_CHANNEL, stats_event
from app.websocket.manager import websocket_manager
from lib.supabase_client import SupabaseClientError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/ws/stats")
async def stats_websocket(websocket: WebSocket):
    """
    WebSocket endpoint for live application stats.

    No authentication: the stats are public on the landing page.
    The current stats are sent on connect; a new event follows every
    accepted submission. Send "ping" to receive "pong".
    """
    await websocket_manager.connect(STATS_CHANNEL, websocket)

    try:
        try:
            await websocket.send_json(stats_event())
        except SupabaseClientError as e:
            logger.error(f"WebSocket: failed to read initial stats: {e}")
            await websocket.close(code=1011, reason="Stats unavailable")
            return

        while True:
            data = await websocket.receive_text()

            if data == "ping":
                await websocket.send_text("pong")
            else:
                logger.debug(f"WebSocket received: {data[:100]}")

    except WebSocketDisconnect:
        logger.info("WebSocket client disconnected from stats")
    finally:
        websocket_manager.disconnect(STATS_CHANNEL, websocket)


@router.get("/ws/status")
async def websocket_status():
    """
    Get WebSocket connection statistics.

    Returns:
        dict: Connection counts and active channels
    """
    return {
        "total_connections": websocket_manager.get_connection_count(),
        "stats_connections": websocket_manager.get_connection_count(STATS_CHANNEL),
        "active_channels": websocket_manager.get_active_channels(),
    }
