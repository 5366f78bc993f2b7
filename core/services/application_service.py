# =============================================================================
# core/services/application_service.py - Application Intake Logic
# =============================================================================
# Handles application submission, stats and per-email status lookups.
# Separates HTTP concerns from database/business logic.
#
# One application per email: submit() checks for an existing row first and
# the database carries a unique index on email, so two overlapping submits
# for the same email cannot both land.
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient, DuplicateEmailError
from lib.utils import mask_email, normalize_email, normalize_uuid
from core.models.application import (
    ApplicationCreate,
    ApplicationStats,
    ApplicationStatus,
    ExistingApplication,
)
from app.exceptions import DuplicateSubmissionError

logger = logging.getLogger(__name__)


class ApplicationService:
    """
    Service for application intake operations.

    Records are only ever inserted here; status changes happen in review
    tooling outside this API.
    """

    @staticmethod
    def submit(
        application: ApplicationCreate,
        user_id: UUID | str | None = None,
    ) -> dict[str, Any]:
        """
        Submit a new application.

        Args:
            application: The validated form fields
            user_id: Authenticated user submitting, if any

        Returns:
            Created application row (includes the new id)

        Raises:
            DuplicateSubmissionError: If an application exists for the email
            SupabaseClientError: If the datastore can't be reached
        """
        email = application.email

        if SupabaseClient.fetch_application_by_email(email):
            logger.warning(f"Duplicate application rejected for {mask_email(email)}")
            raise DuplicateSubmissionError(email)

        data = application.model_dump()
        data.update({
            "user_id": normalize_uuid(user_id) if user_id else None,
            "status": ApplicationStatus.PENDING.value,
            "created_at": datetime.now(timezone.utc).isoformat(),
        })

        try:
            row = SupabaseClient.insert_application(data)
        except DuplicateEmailError:
            # Lost the race against a concurrent submit for the same email
            logger.warning(f"Concurrent duplicate application rejected for {mask_email(email)}")
            raise DuplicateSubmissionError(email)

        logger.info(f"Created application: {row['id']} (user: {user_id or 'anonymous'})")
        return row

    @staticmethod
    def get_stats() -> ApplicationStats:
        """
        Get aggregate application counts.

        All three counts come from one statement, so they describe the same
        snapshot (pending and accepted never exceed total).

        Returns:
            ApplicationStats with total, pending and accepted counts
        """
        return ApplicationStats(**SupabaseClient.fetch_application_stats())

    @staticmethod
    def check_existing(email: str | None) -> ExistingApplication | None:
        """
        Look up the status of the application for an email.

        The email is trimmed the same way submissions are; an empty email
        returns None without querying.

        Returns:
            ExistingApplication (status, created_at) or None if absent
        """
        email = normalize_email(email)
        if not email:
            return None

        row = SupabaseClient.fetch_application_by_email(email)
        if not row:
            return None

        return ExistingApplication(
            status=row["status"],
            created_at=row["created_at"],
        )

    @staticmethod
    def get_application_by_email(email: str | None) -> dict[str, Any] | None:
        """Fetch the full application row for an email, or None."""
        email = normalize_email(email)
        if not email:
            return None
        return SupabaseClient.fetch_application_by_email(email)
