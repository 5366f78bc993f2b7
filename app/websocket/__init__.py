# =============================================================================
# app/websocket/__init__.py - WebSocket Module
# =============================================================================
# Provides live stats updates for the landing page.
#
# Usage:
#   from app.websocket import publish_stats
#
#   await publish_stats()
# =============================================================================

from app.websocket.manager import websocket_manager
from app.websocket.broadcast import publish_stats, stats_event, STATS_CHANNEL

__all__ = [
    "websocket_manager",
    "publish_stats",
    "stats_event",
    "STATS_CHANNEL",
]
