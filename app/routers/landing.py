# =============================================================================
# app/routers/landing.py - Landing Page Content
# =============================================================================
# Serves the copy and live numbers for the single marketing page, so the
# web client only renders.
# =============================================================================

import logging

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field

from app.config import settings
from core.models.application import ApplicationStats, ExperienceLevel
from core.services.application_service import ApplicationService
from lib.supabase_client import SupabaseClientError

logger = logging.getLogger(__name__)

router = APIRouter()

SEASON = "S01"


# =============================================================================
# Response Models
# =============================================================================

class ConceptCard(BaseModel):
    """One of the show's pitch cards."""
    title: str
    body: str


class ExperienceOption(BaseModel):
    """A selectable coding experience level for the form."""
    value: ExperienceLevel
    label: str


class LandingResponse(BaseModel):
    """Everything the landing page shows."""
    model_config = ConfigDict(populate_by_name=True)

    brand: str
    badge: str
    headline: str
    subtitle: str
    season: str
    applications_open: bool = Field(..., alias="applicationsOpen")
    # None when the datastore couldn't be reached; the page shows a dash
    stats: ApplicationStats | None
    concepts: list[ConceptCard]
    experience_options: list[ExperienceOption] = Field(..., alias="experienceOptions")


CONCEPTS = [
    ConceptCard(
        title="Live Building",
        body="Watch the entire process unfold. The chaos, the breakthroughs, the bugs.",
    ),
    ConceptCard(
        title="Vibe Coding",
        body="AI-assisted development. Cursor, Claude, Copilot. Whatever ships fastest.",
    ),
    ConceptCard(
        title="Real Revenue",
        body="Not vanity metrics. Real paying customers. Even if it's just one dollar.",
    ),
]

EXPERIENCE_OPTIONS = [
    ExperienceOption(value=ExperienceLevel.BEGINNER, label="Beginner - Learning the basics"),
    ExperienceOption(value=ExperienceLevel.VIBE_CODER, label="Vibe Coder - I let AI do the heavy lifting"),
    ExperienceOption(value=ExperienceLevel.INTERMEDIATE, label="Intermediate - Comfortable building"),
    ExperienceOption(value=ExperienceLevel.ADVANCED, label="Advanced - Ship regularly"),
]


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/landing", response_model=LandingResponse)
async def landing():
    """
    Get the landing page content.

    Includes the current application stats.
    """
    try:
        stats = ApplicationService.get_stats()
    except SupabaseClientError as e:
        logger.error(f"Landing stats unavailable: {e}")
        stats = None

    return LandingResponse(
        brand="$1 STARTUP",
        badge="Now accepting applications" if settings.APPLICATIONS_OPEN else "Applications closed",
        headline="Watch vibe coders build startups from zero to $1 revenue",
        subtitle=(
            "A YouTube series where we invite builders to create real products live on camera. "
            "No scripts. No polish. Just raw creation until first dollar."
        ),
        season=SEASON,
        applications_open=settings.APPLICATIONS_OPEN,
        stats=stats,
        concepts=CONCEPTS,
        experience_options=EXPERIENCE_OPTIONS,
    )
