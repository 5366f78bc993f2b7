# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper for database and auth operations
# - utils.py: Shared utilities (UUID normalization, log-safe emails)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import (
    SupabaseClient,
    SupabaseClientError,
    SupabaseAuthError,
    DuplicateEmailError,
)
from lib.utils import mask_email, normalize_email, normalize_uuid

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    "SupabaseAuthError",
    "DuplicateEmailError",
    # Utils
    "mask_email",
    "normalize_email",
    "normalize_uuid",
]
