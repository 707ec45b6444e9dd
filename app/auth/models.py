# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from pydantic import BaseModel
from uuid import UUID
from typing import Optional

AUTHENTICATED_ROLE = "authenticated"
SERVICE_ROLE = "service_role"


class AuthUser(BaseModel):
    """
    Authenticated caller extracted from a Supabase JWT.

    This is the minimal user info available from the token itself,
    without querying the database.
    """
    id: UUID
    email: Optional[str] = None
    role: str = AUTHENTICATED_ROLE

    model_config = {"frozen": True}

    @property
    def is_service_role(self) -> bool:
        """True for the all-trusted identity used by scripts."""
        return self.role == SERVICE_ROLE


# The identity trusted scripts act as. It passes every policy check.
SERVICE_USER = AuthUser(id=UUID(int=0), email=None, role=SERVICE_ROLE)


class UserResponse(BaseModel):
    """Identity info returned by GET /auth/me."""
    id: UUID
    email: Optional[str] = None
    role: str = AUTHENTICATED_ROLE
