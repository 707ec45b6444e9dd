# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Client construction and query execution
# - utils.py: Shared utilities (slugs, UUID parsing, base error)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import (
    RANGE_NOT_SATISFIABLE,
    SupabaseClientError,
    create_request_client,
    create_service_client,
    execute_query,
    first_row,
    platform_error_code,
)
from lib.utils import ApplicationError, parse_uuid, slugify, unique_slug

__all__ = [
    # Supabase
    "RANGE_NOT_SATISFIABLE",
    "SupabaseClientError",
    "create_request_client",
    "create_service_client",
    "execute_query",
    "first_row",
    "platform_error_code",
    # Utils
    "ApplicationError",
    "parse_uuid",
    "slugify",
    "unique_slug",
]
