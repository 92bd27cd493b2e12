# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# These models define the API contract for accounts:
# - UserRole / UserStatus: closed enums for role and approval state
# - Claims: the verified identity carried by a bearer token
# - RegisterRequest / LoginRequest: auth inputs
# - UserPublic / AuthResponse: what clients get back
#
# Approval lifecycle for farmers:
#   pending -> approved   (admin action, happens at most once, never reverts)
# Consumers and admins are approved from the start.
# =============================================================================

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class UserRole(str, Enum):
    """Who an account belongs to."""
    CONSUMER = "consumer"
    FARMER = "farmer"
    ADMIN = "admin"


class UserStatus(str, Enum):
    """
    Approval state of an account.

    There is no "rejected" state: a farmer that is never approved simply
    stays pending.
    """
    PENDING = "pending"
    APPROVED = "approved"


# Roles that can be chosen at self-registration
SELF_REGISTER_ROLES = frozenset({UserRole.CONSUMER, UserRole.FARMER})


def initial_status(role: UserRole) -> UserStatus:
    """Status a freshly created account starts in."""
    if role is UserRole.FARMER:
        return UserStatus.PENDING
    if role is UserRole.CONSUMER or role is UserRole.ADMIN:
        return UserStatus.APPROVED
    raise ValueError(f"Unknown role: {role!r}")


class Claims(BaseModel):
    """
    Identity asserted by a verified token.

    This is the snapshot taken when the token was issued; it is not
    refreshed from the database, so a farmer approved after login keeps
    status=pending until they log in again.
    """
    id: int
    role: UserRole
    status: UserStatus
    name: str

    model_config = ConfigDict(frozen=True)


class RegisterRequest(BaseModel):
    """
    Body of POST /api/auth/register.

    Example:
        {"name": "Alice", "email": "alice@farm.test", "password": "s3cret", "role": "farmer"}
    """
    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., min_length=1, max_length=320)
    password: str = Field(..., min_length=1)
    role: UserRole = Field(..., description="consumer or farmer")


class LoginRequest(BaseModel):
    """Body of POST /api/auth/login."""
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserPublic(BaseModel):
    """A user row without its password hash."""
    id: int
    name: str
    email: str
    role: UserRole
    status: UserStatus
    created_at: datetime | None = None


class AuthResponse(BaseModel):
    """Returned by register and login."""
    user: UserPublic
    token: str
