# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from uuid import UUID


def normalize_uuid(value: str | UUID) -> str:
    """
    Normalize a UUID to string format.

    Handles both string and UUID objects, ensuring consistent string output.

    Example:
        user_id = normalize_uuid(uuid_obj)  # "550e8400-..."
        user_id = normalize_uuid("550e8400-...")  # "550e8400-..."
    """
    return str(value) if isinstance(value, UUID) else value


def mask_email(email: str) -> str:
    """
    Mask the local part of an email for log output.

    Example:
        mask_email("jane@example.com")  # "j***@example.com"
    """
    local, sep, domain = email.partition("@")
    if not sep:
        return "***"
    return f"{local[:1]}***@{domain}"


def normalize_email(email: str | None) -> str:
    """
    Trim surrounding whitespace from an email.

    Submissions are stored trimmed, so every lookup trims the same way.
    Case is preserved: email matching is exact.
    """
    return (email or "").strip()
