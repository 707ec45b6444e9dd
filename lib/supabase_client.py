# =============================================================================
# lib/supabase_client.py - Supabase Client Construction
# =============================================================================
# This module builds Supabase clients and runs queries against them.
#
# Two kinds of client exist:
# - Request clients: built per request with the anon key, optionally bound to
#   the caller's access token so row-level security sees the real user.
# - The service client: uses the service_role key, bypasses RLS, and is only
#   used by trusted scripts (seeding, setup checks).
#
# Clients are passed explicitly into the service layer. Nothing in core/
# reaches for a global client.
#
# Usage:
#   from lib.supabase_client import create_request_client, execute_query
#   client = create_request_client(access_token)
#   response = execute_query(client.table("apps").select("*"), "LIST_FAILED", "list apps")
# =============================================================================

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

from supabase import create_client, Client

from app.config import settings
from lib.utils import ApplicationError

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgREST code for an offset past the end of a counted result (HTTP 416)
RANGE_NOT_SATISFIABLE = "PGRST103"


class SupabaseClientError(ApplicationError):
    """
    Error during Supabase operations.

    The platform's own message is kept in `message` so callers see what
    actually failed.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, suggestion=suggestion, details=details)

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


def create_request_client(access_token: str | None = None) -> Client:
    """
    Create a client bound to the current request's credentials.

    Args:
        access_token: The caller's Supabase JWT, or None for anonymous access

    Returns:
        Client: Supabase client using the anon key

    Raises:
        SupabaseClientError: If client creation fails
    """
    try:
        client = create_client(settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY)
    except Exception as e:
        raise SupabaseClientError(
            message=f"Failed to create Supabase client: {e}",
            code="CLIENT_INIT_FAILED",
            suggestion="Check SUPABASE_URL and SUPABASE_ANON_KEY in your .env file"
        ) from e

    if access_token:
        # PostgREST evaluates RLS policies against this token
        client.postgrest.auth(access_token)

    return client


@lru_cache
def create_service_client() -> Client:
    """
    Get the cached service_role client.

    Uses the service_role key which bypasses Row Level Security (RLS).
    Only trusted server-side scripts should use it.

    Raises:
        SupabaseClientError: If client creation fails
    """
    try:
        client = create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)
        logger.info("Supabase service client initialized successfully")
        return client
    except Exception as e:
        raise SupabaseClientError(
            message=f"Failed to create Supabase service client: {e}",
            code="CLIENT_INIT_FAILED",
            suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
        ) from e


def execute_query(
    query: Any,
    code: str,
    action: str,
    details: dict[str, Any] | None = None,
) -> Any:
    """
    Execute a PostgREST query, wrapping any failure.

    Args:
        query: A query/RPC builder with an execute() method
        code: Error code used if the query fails
        action: Short description for the error message ("list apps")
        details: Extra context attached to the error

    Returns:
        The API response (with .data and, for counted selects, .count)

    Raises:
        SupabaseClientError: If the platform call fails
    """
    try:
        return query.execute()
    except Exception as e:
        logger.error(f"Failed to {action}: {e}")
        raise SupabaseClientError(
            message=f"Failed to {action}: {e}",
            code=code,
            details=details,
        ) from e


def platform_error_code(error: SupabaseClientError) -> str | None:
    """
    The PostgREST error code behind a wrapped failure, e.g. "PGRST103".

    Returns None when the failure didn't come from a PostgREST APIError.
    """
    return getattr(error.__cause__, "code", None)


def first_row(response: Any) -> dict[str, Any] | None:
    """Return the first row of a response, or None when it has no rows."""
    data = getattr(response, "data", None) or []
    if isinstance(data, list):
        return data[0] if data else None
    return data
