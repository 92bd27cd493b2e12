# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Process-wide Supabase client handle
# - passwords.py: Password hashing (passlib)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.passwords import hash_password, verify_password

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Passwords
    "hash_password",
    "verify_password",
]
