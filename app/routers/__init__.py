# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - applications.py: Application submit / stats / status check
# - landing.py: Landing page content
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import applications
from . import landing

__all__ = [
    "health",
    "applications",
    "landing",
]
