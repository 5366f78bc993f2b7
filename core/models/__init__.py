# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - application.py: Application intake schemas and status enum
#
# These models define the "contract" between API and clients.
# =============================================================================

from .application import (
    ApplicationCreate,
    ApplicationResponse,
    ApplicationStats,
    ApplicationStatus,
    ApplicationSubmitResponse,
    ExistingApplication,
    ExistingApplicationResponse,
    ExperienceLevel,
)

__all__ = [
    "ApplicationCreate",
    "ApplicationResponse",
    "ApplicationStats",
    "ApplicationStatus",
    "ApplicationSubmitResponse",
    "ExistingApplication",
    "ExistingApplicationResponse",
    "ExperienceLevel",
]
