# =============================================================================
# app/routers/applications.py - Application Intake Endpoints
# =============================================================================
# Submit an application, read aggregate stats, and check the status of an
# application by email. Submitting works with or without a bearer token;
# the caller's user id is attached when one is present.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from app.auth import AuthUser, get_current_user, get_current_user_optional
from app.config import settings
from app.exceptions import ApplicationNotFoundError, ApplicationsClosedError
from app.websocket import publish_stats
from core.models.application import (
    ApplicationCreate,
    ApplicationResponse,
    ApplicationStats,
    ApplicationSubmitResponse,
    ExistingApplicationResponse,
)
from core.services.application_service import ApplicationService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=ApplicationSubmitResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_application(
    application: ApplicationCreate,
    user: AuthUser | None = Depends(get_current_user_optional),
):
    """
    Submit an application.

    Only one application is accepted per email address. A second submit
    with the same email fails with 409 DUPLICATE_SUBMISSION.
    """
    if not settings.APPLICATIONS_OPEN:
        raise ApplicationsClosedError()

    row = ApplicationService.submit(application, user_id=user.id if user else None)

    sent = await publish_stats()
    if sent:
        logger.debug(f"Pushed stats update to {sent} clients")

    return ApplicationSubmitResponse(
        id=row["id"],
        status=row["status"],
        created_at=row["created_at"],
        message="Application received. We'll be in touch if you're selected to participate.",
    )


@router.get("/stats", response_model=ApplicationStats)
async def get_stats():
    """
    Get aggregate application counts.

    Returns total, pending and accepted counts.
    """
    return ApplicationService.get_stats()


@router.get("/check", response_model=ExistingApplicationResponse)
async def check_existing(
    email: Annotated[str, Query(description="Email used to apply")] = "",
):
    """
    Check whether an application exists for an email.

    Returns `exists: false` (not an error) when nothing matches or the
    email is empty.
    """
    existing = ApplicationService.check_existing(email)
    return ExistingApplicationResponse(exists=existing is not None, application=existing)


@router.get("/me", response_model=ApplicationResponse)
async def get_my_application(
    user: AuthUser = Depends(get_current_user),
):
    """
    Get the application submitted with the signed-in user's email.

    Raises:
        401: If not authenticated
        404: If no application exists for the account's email
    """
    row = ApplicationService.get_application_by_email(user.email)
    if not row:
        raise ApplicationNotFoundError(user.email)
    return ApplicationResponse.model_validate(row)
