# =============================================================================
# core/models/application.py - Application Schemas
# =============================================================================
# These models define the API contract for application intake:
# - ApplicationCreate: Input for submitting an application
# - ApplicationResponse: A stored application record
# - ApplicationStatus: Enum for review states
# - ApplicationStats / ExistingApplication: Read-only query results
#
# Wire names keep the camelCase the web client sends (twitterHandle,
# projectIdea, whyYou, createdAt, userId). Requests accept either form.
# =============================================================================

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ApplicationStatus(str, Enum):
    """
    Review state of an application.

    - pending: Submitted, not yet reviewed
    - accepted: Selected to build on the show
    - rejected: Not selected

    Flow: pending -> accepted | rejected (performed outside this API)
    """
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class ExperienceLevel(str, Enum):
    """Coding experience levels suggested by the application form."""
    BEGINNER = "beginner"
    VIBE_CODER = "vibe-coder"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+$"


class ApplicationCreate(BaseModel):
    """
    Schema for submitting an application.

    Every field is required and must be non-blank once surrounding
    whitespace is stripped.

    Example:
        {
            "name": "Jane Doe",
            "email": "jane@example.com",
            "twitterHandle": "@janedoe",
            "experience": "vibe-coder",
            "projectIdea": "A CRM for dog walkers",
            "whyYou": "I narrate my bugs out loud"
        }
    """

    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Full name"
    )

    email: str = Field(
        ...,
        min_length=3,
        max_length=320,
        pattern=EMAIL_PATTERN,
        description="Contact email; one application per email"
    )

    twitter_handle: str = Field(
        ...,
        alias="twitterHandle",
        min_length=1,
        max_length=200,
        description="Twitter / X handle"
    )

    # Free text; the form offers ExperienceLevel values
    experience: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Coding experience"
    )

    project_idea: str = Field(
        ...,
        alias="projectIdea",
        min_length=1,
        max_length=5000,
        description="What the applicant would build on the show"
    )

    why_you: str = Field(
        ...,
        alias="whyYou",
        min_length=1,
        max_length=5000,
        description="Why the applicant should be picked"
    )


class ApplicationResponse(BaseModel):
    """
    Schema for returning a stored application.

    Returned by GET /applications/me.
    """

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID = Field(..., description="Unique application identifier")
    name: str
    email: str
    twitter_handle: str = Field(..., alias="twitterHandle")
    experience: str
    project_idea: str = Field(..., alias="projectIdea")
    why_you: str = Field(..., alias="whyYou")

    # Absent for anonymous submissions
    user_id: UUID | None = Field(
        default=None,
        alias="userId",
        description="Supabase Auth user who submitted, if signed in"
    )

    created_at: datetime = Field(..., alias="createdAt")
    status: ApplicationStatus


class ApplicationSubmitResponse(BaseModel):
    """Response after a successful submission."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID = Field(..., description="Identifier of the new application")
    status: ApplicationStatus = Field(default=ApplicationStatus.PENDING)
    created_at: datetime = Field(..., alias="createdAt")
    message: str = Field(default="Application received")


class ApplicationStats(BaseModel):
    """
    Aggregate counts shown on the landing page.

    Example:
        {"total": 3, "pending": 2, "accepted": 1}
    """
    total: int = Field(default=0, ge=0)
    pending: int = Field(default=0, ge=0)
    accepted: int = Field(default=0, ge=0)


class ExistingApplication(BaseModel):
    """Status of an application found by email."""

    model_config = ConfigDict(populate_by_name=True)

    status: ApplicationStatus
    created_at: datetime = Field(..., alias="createdAt")


class ExistingApplicationResponse(BaseModel):
    """
    Result of an email check.

    `exists` is false and `application` is null when nothing matches.
    """
    exists: bool = False
    application: ExistingApplication | None = None
