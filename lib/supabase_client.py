# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database and auth
# operations. It implements the singleton pattern to reuse a single
# service-role client and provides specialized methods for:
# - Application lookups by email
# - Application inserts (with unique-email enforcement)
# - Application stats read in one statement
# - Password auth flows against Supabase Auth
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   existing = SupabaseClient.fetch_application_by_email("jane@example.com")
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import create_client, Client

from app.config import settings
from lib.utils import normalize_email

logger = logging.getLogger(__name__)

APPLICATIONS_TABLE = "applications"
APPLICATION_STATS_FUNCTION = "application_stats"

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Any failure reaching the datastore or auth provider ends up here.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class DuplicateEmailError(SupabaseClientError):
    """Insert rejected by the unique index on applications.email."""

    def __init__(self, email: str):
        super().__init__(
            message=f"An application already exists for {email}",
            code="DUPLICATE_EMAIL",
            details={"email": email},
        )
        self.email = email


class SupabaseAuthError(SupabaseClientError):
    """Supabase Auth rejected a password flow."""


def _is_unique_violation(error: Exception) -> bool:
    """Check whether a PostgREST error is a unique constraint violation."""
    return getattr(error, "code", None) == UNIQUE_VIOLATION


class SupabaseClient:
    """
    Typed wrapper for Supabase operations.

    Implements singleton pattern - one service-role client instance is
    shared across the application. All methods are class methods for easy
    access without instantiation.

    Example:
        existing = SupabaseClient.fetch_application_by_email("jane@example.com")
        if existing is None:
            row = SupabaseClient.insert_application({...})
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        This is appropriate for server-side operations.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    @classmethod
    def get_auth_client(cls) -> Client:
        """
        Create a fresh anon-key client for a single auth flow.

        Auth clients hold the signed-in session, so they are never shared
        between requests.
        """
        try:
            return create_client(settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY)
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to create Supabase auth client: {e}",
                code="AUTH_CLIENT_INIT_FAILED",
                suggestion="Check SUPABASE_URL and SUPABASE_ANON_KEY in your .env file"
            )

    # -------------------------------------------------------------------------
    # Applications
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_application_by_email(cls, email: str) -> dict[str, Any] | None:
        """
        Fetch the application submitted with an exact email.

        Args:
            email: The email to match exactly (trimmed, no case folding)

        Returns:
            Application row dict, or None if not found

        Raises:
            SupabaseClientError: If query fails
        """
        email = normalize_email(email)
        client = cls.get_client()

        try:
            response = (
                client.table(APPLICATIONS_TABLE)
                .select("*")
                .eq("email", email)
                .limit(1)
                .execute()
            )

            rows = response.data or []
            return rows[0] if rows else None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch application: {e}",
                code="FETCH_APPLICATION_FAILED",
                suggestion="Check that the applications table exists and is accessible",
                details={"email": email}
            )

    @classmethod
    def insert_application(cls, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a new application row.

        Args:
            data: Column values for the new row

        Returns:
            Inserted row dict with generated id

        Raises:
            DuplicateEmailError: If the unique email index rejects the row
            SupabaseClientError: If insert fails for any other reason
        """
        client = cls.get_client()

        try:
            response = (
                client.table(APPLICATIONS_TABLE)
                .insert(data)
                .execute()
            )

            if response.data:
                return response.data[0]
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_NO_DATA"
            )

        except SupabaseClientError:
            raise
        except Exception as e:
            if _is_unique_violation(e):
                raise DuplicateEmailError(data.get("email", ""))
            raise SupabaseClientError(
                message=f"Failed to insert application: {e}",
                code="INSERT_APPLICATION_FAILED",
                details={"email": data.get("email")}
            )

    @classmethod
    def fetch_application_stats(cls) -> dict[str, int]:
        """
        Fetch total, pending and accepted counts in one statement.

        Calls the `application_stats()` SQL function, so all three counts are
        taken from the same snapshot.

        Returns:
            Dict with total, pending and accepted keys

        Raises:
            SupabaseClientError: If the call fails
        """
        client = cls.get_client()

        try:
            response = client.rpc(APPLICATION_STATS_FUNCTION).execute()

            # PostgREST returns a scalar json result as-is, a set as a list
            data = response.data
            if isinstance(data, list):
                data = data[0] if data else {}
            data = data or {}

            return {key: int(data.get(key) or 0) for key in ("total", "pending", "accepted")}

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch application stats: {e}",
                code="FETCH_STATS_FAILED",
                suggestion="Check that the application_stats() function has been migrated",
            )

    # -------------------------------------------------------------------------
    # Auth
    # -------------------------------------------------------------------------

    @classmethod
    def sign_in_with_password(cls, email: str, password: str) -> Any:
        """
        Sign in with email + password.

        Returns:
            The Supabase AuthResponse (user and session)

        Raises:
            SupabaseAuthError: If Supabase Auth rejects the credentials
        """
        client = cls.get_auth_client()

        try:
            return client.auth.sign_in_with_password({"email": email, "password": password})
        except Exception as e:
            raise SupabaseAuthError(
                message=f"Sign-in failed: {e}",
                code="SIGN_IN_FAILED",
                details={"email": email}
            )

    @classmethod
    def sign_up(cls, email: str, password: str) -> Any:
        """
        Create an account with email + password.

        The returned session is None when the project requires email
        confirmation before the first sign-in.

        Raises:
            SupabaseAuthError: If Supabase Auth rejects the sign-up
        """
        client = cls.get_auth_client()

        try:
            return client.auth.sign_up({"email": email, "password": password})
        except Exception as e:
            raise SupabaseAuthError(
                message=f"Sign-up failed: {e}",
                code="SIGN_UP_FAILED",
                details={"email": email}
            )

    @classmethod
    def sign_out(cls, access_token: str) -> None:
        """
        Revoke the refresh tokens behind an access token.

        Raises:
            SupabaseClientError: If the admin sign-out call fails
        """
        client = cls.get_client()

        try:
            client.auth.admin.sign_out(access_token)
        except Exception as e:
            raise SupabaseClientError(
                message=f"Sign-out failed: {e}",
                code="SIGN_OUT_FAILED",
            )
