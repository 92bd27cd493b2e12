# =============================================================================
# lib/supabase_client.py - Supabase Client Handle
# =============================================================================
# This module owns the process-wide Supabase client used to reach the
# users and products tables. The handle has an explicit lifecycle:
# - init(): create the client at application startup
# - get_client(): hand the client to request-scoped services
# - close(): release it at shutdown
#
# Services receive the client as a constructor argument; they never reach
# for it themselves.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   SupabaseClient.init()
#   client = SupabaseClient.get_client()
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import create_client, Client

from app.config import settings

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgREST/Postgres error codes we react to
UNIQUE_VIOLATION = "23505"
NO_ROWS = "PGRST116"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Provides actionable error messages:
    "Errors should tell HOW to fix, not just WHAT failed."
    """

    def __init__(
        self,
        message: str,
        code: str = "STORE_ERROR",
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


def error_code(exc: Exception) -> str | None:
    """
    Pull the Postgres/PostgREST error code out of a client exception.

    postgrest's APIError carries it as `.code`; anything else is matched on
    its message, the same way PGRST116 is detected for single-row lookups.
    """
    code = getattr(exc, "code", None)
    if isinstance(code, str):
        return code
    text = str(exc)
    for known in (UNIQUE_VIOLATION, NO_ROWS):
        if known in text:
            return known
    return None


class SupabaseClient:
    """
    Process-wide Supabase client handle.

    One client instance is shared across the application; it is safe to use
    from FastAPI's worker threads because the underlying httpx pool is.

    Example:
        SupabaseClient.init()                  # app startup
        client = SupabaseClient.get_client()   # per request
        SupabaseClient.close()                 # app shutdown
    """

    _instance: Client | None = None

    @classmethod
    def init(cls) -> Client:
        """
        Create the client if it doesn't exist yet.

        Uses the service_role key which bypasses Row Level Security (RLS).
        Ownership is enforced by the services themselves.

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
                ) from e
        return cls._instance

    @classmethod
    def get_client(cls) -> Client:
        """
        Get the shared client, creating it on first use.

        Returns:
            Client: Supabase client instance
        """
        if cls._instance is None:
            return cls.init()
        return cls._instance

    @classmethod
    def close(cls) -> None:
        """Drop the shared client so no new work can be issued on it."""
        if cls._instance is not None:
            cls._instance = None
            logger.info("Supabase client released")


def run_query(query: Any, code: str, **details: Any) -> Any:
    """
    Execute a built PostgREST query, wrapping client failures.

    Args:
        query: A query builder (anything with .execute())
        code: Error code to report if the query fails
        **details: Extra context attached to the error

    Returns:
        The APIResponse; rows are in `.data`

    Raises:
        SupabaseClientError: If the query fails. The original exception is
            chained, and its Postgres code is kept in details["pg_code"].
    """
    try:
        return query.execute()
    except Exception as e:
        pg_code = error_code(e)
        logger.error(f"{code}: {e}")
        raise SupabaseClientError(
            message=str(e),
            code=code,
            details={**details, "pg_code": pg_code} if pg_code else details,
        ) from e
