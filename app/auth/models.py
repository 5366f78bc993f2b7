# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field
from uuid import UUID
from typing import Literal, Optional


class AuthUser(BaseModel):
    """
    Authenticated user extracted from Supabase JWT.

    This is the minimal user info available from the token itself,
    without querying the database.
    """
    model_config = ConfigDict(frozen=True)

    id: UUID
    email: Optional[str] = None


class AuthState(BaseModel):
    """Whether the caller is signed in, and as whom."""
    model_config = ConfigDict(populate_by_name=True)

    is_authenticated: bool = Field(..., alias="isAuthenticated")
    user_id: Optional[UUID] = Field(default=None, alias="userId")
    email: Optional[str] = None


class PasswordCredentials(BaseModel):
    """Email + password submitted by the auth modal."""
    model_config = ConfigDict(str_strip_whitespace=True)

    email: str = Field(..., min_length=3, max_length=320, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., min_length=6, max_length=128)


class AuthSessionResponse(BaseModel):
    """
    Tokens returned after a successful sign-in or sign-up.

    `access_token` is None when sign-up requires email confirmation first.
    """
    model_config = ConfigDict(populate_by_name=True)

    flow: Literal["signIn", "signUp"]
    user_id: Optional[UUID] = Field(default=None, alias="userId")
    email: Optional[str] = None
    access_token: Optional[str] = Field(default=None, alias="accessToken")
    refresh_token: Optional[str] = Field(default=None, alias="refreshToken")
    expires_in: Optional[int] = Field(default=None, alias="expiresIn")
    confirmation_required: bool = Field(default=False, alias="confirmationRequired")

