# =============================================================================
# app/websocket/broadcast.py - Stats Broadcasting
# =============================================================================
# Pushes fresh application stats to every client on the stats channel.
# Called after a successful submit so open landing pages update live.
#
# Events:
#   - {"type": "stats", "total": 3, "pending": 2, "accepted": 1}
# =============================================================================

import logging
from typing import Any

from app.websocket.manager import websocket_manager
from core.services.application_service import ApplicationService
from lib.supabase_client import SupabaseClientError

logger = logging.getLogger(__name__)

STATS_CHANNEL = "stats"


def stats_event() -> dict[str, Any]:
    """Build a stats event from the current counts."""
    return {"type": "stats", **ApplicationService.get_stats().model_dump()}


async def publish_stats() -> int:
    """
    Broadcast current stats to the stats channel.

    Returns:
        int: Number of clients reached (0 if stats couldn't be read)
    """
    if not websocket_manager.get_connection_count(STATS_CHANNEL):
        return 0

    try:
        event = stats_event()
    except SupabaseClientError as e:
        logger.error(f"Failed to read stats for broadcast: {e}")
        return 0

    return await websocket_manager.broadcast(STATS_CHANNEL, event)
