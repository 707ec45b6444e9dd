# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides JWT-based authentication using Supabase Auth.
#
# Usage:
#   from app.auth import get_current_user_optional, AuthUser
#
#   @router.post("/apps")
#   async def create(user: AuthUser | None = Depends(get_current_user_optional)):
#       ...
# =============================================================================

from app.auth.dependencies import (
    decode_access_token,
    get_current_user,
    get_current_user_optional,
)
from app.auth.models import AuthUser, UserResponse, SERVICE_USER

__all__ = [
    "decode_access_token",
    "get_current_user",
    "get_current_user_optional",
    "AuthUser",
    "UserResponse",
    "SERVICE_USER",
]
