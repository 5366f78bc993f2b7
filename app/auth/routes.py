# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Password sign-in / sign-up / sign-out backed by Supabase Auth, plus
# endpoints for reading the identity behind a token.
# =============================================================================

import logging

from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials

from app.auth.dependencies import (
    decode_access_token,
    get_current_user,
    get_current_user_optional,
    security,
)
from app.auth.models import AuthSessionResponse, AuthState, AuthUser, PasswordCredentials
from app.exceptions import AuthenticationFailedError
from lib.supabase_client import SupabaseAuthError, SupabaseClient
from lib.utils import mask_email

logger = logging.getLogger(__name__)

router = APIRouter()


def _session_response(flow: str, auth_response) -> AuthSessionResponse:
    """Flatten a Supabase AuthResponse into the API shape."""
    user = getattr(auth_response, "user", None)
    session = getattr(auth_response, "session", None)

    return AuthSessionResponse(
        flow=flow,
        user_id=getattr(user, "id", None),
        email=getattr(user, "email", None),
        access_token=getattr(session, "access_token", None),
        refresh_token=getattr(session, "refresh_token", None),
        expires_in=getattr(session, "expires_in", None),
        confirmation_required=session is None,
    )


@router.post("/sign-in", response_model=AuthSessionResponse)
async def sign_in(credentials: PasswordCredentials) -> AuthSessionResponse:
    """
    Sign in with email and password.

    Raises:
        401: If the credentials are rejected
    """
    try:
        auth_response = SupabaseClient.sign_in_with_password(
            credentials.email, credentials.password
        )
    except SupabaseAuthError as e:
        logger.warning(f"Sign-in failed for {mask_email(credentials.email)}: {e.message}")
        raise AuthenticationFailedError("Invalid credentials", code="INVALID_CREDENTIALS")

    return _session_response("signIn", auth_response)


@router.post("/sign-up", response_model=AuthSessionResponse)
async def sign_up(credentials: PasswordCredentials) -> AuthSessionResponse:
    """
    Create an account with email and password.

    If the project requires email confirmation, no tokens are returned
    and `confirmationRequired` is true.

    Raises:
        401: If the account can't be created
    """
    try:
        auth_response = SupabaseClient.sign_up(credentials.email, credentials.password)
    except SupabaseAuthError as e:
        logger.warning(f"Sign-up failed for {mask_email(credentials.email)}: {e.message}")
        raise AuthenticationFailedError("Could not create account", code="SIGN_UP_FAILED")

    logger.info(f"Account created for {mask_email(credentials.email)}")
    return _session_response("signUp", auth_response)


@router.post("/sign-out", status_code=204)
async def sign_out(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> None:
    """
    Sign out, revoking the session behind the bearer token.

    Raises:
        401: If not authenticated
    """
    user = decode_access_token(credentials.credentials)
    SupabaseClient.sign_out(credentials.credentials)
    logger.info(f"Signed out user: {user.id}")


@router.get("/state", response_model=AuthState)
async def auth_state(
    user: AuthUser | None = Depends(get_current_user_optional),
) -> AuthState:
    """
    Report whether the caller is signed in.

    Never fails: a missing or invalid token reads as signed out.
    """
    if user is None:
        return AuthState(is_authenticated=False)
    return AuthState(is_authenticated=True, user_id=user.id, email=user.email)


@router.get("/me", response_model=AuthUser)
async def get_current_user_info(
    user: AuthUser = Depends(get_current_user)
) -> AuthUser:
    """
    Get the current authenticated user from the token.

    Raises:
        401: If not authenticated
    """
    return user


@router.get("/verify")
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """
    Verify that the current token is valid.

    Raises:
        401: If token is invalid or expired
    """
    return {
        "valid": True,
        "user_id": str(user.id),
        "email": user.email
    }
