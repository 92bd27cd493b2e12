# =============================================================================
# lib/passwords.py - Password Hashing
# =============================================================================
# Thin wrapper around passlib so the rest of the code never touches a
# hashing scheme directly. Stored hashes are self-describing ($pbkdf2-sha256$...),
# so the scheme can be changed later without a migration.
# =============================================================================

from passlib.hash import pbkdf2_sha256 as hasher


def hash_password(password: str) -> str:
    """Hash a plaintext password for storage."""
    return hasher.hash(password)


def verify_password(password: str, password_hash: str | None) -> bool:
    """
    Check a plaintext password against a stored hash.

    Returns False for a missing or unrecognised hash instead of raising,
    so callers can treat every failure as "invalid credentials".
    """
    if not password_hash:
        return False
    try:
        return hasher.verify(password, password_hash)
    except ValueError:
        return False
