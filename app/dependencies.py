# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials
from supabase import Client

from app.auth.dependencies import get_current_user_optional, security_optional
from app.auth.models import AuthUser
from lib.supabase_client import create_request_client


async def get_supabase_client(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_optional),
    user: Optional[AuthUser] = Depends(get_current_user_optional),
) -> Client:
    """
    Build a Supabase client for this request.

    The caller's token is forwarded only when it verified, so row-level
    security sees the same identity the API does.
    """
    access_token = credentials.credentials if credentials and user else None
    return create_request_client(access_token)


# Type aliases for dependency injection
SupabaseDep = Annotated[Client, Depends(get_supabase_client)]
CallerDep = Annotated[Optional[AuthUser], Depends(get_current_user_optional)]
