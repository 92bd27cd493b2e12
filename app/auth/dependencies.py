# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication and authorization.
#
# Usage:
#   from app.auth import get_current_claims, require, RequireRole
#
#   @router.get("/protected")
#   def protected(claims: Claims = Depends(get_current_claims)):
#       return {"user_id": claims.id}
#
#   @router.get("/admin-only")
#   def admin_only(claims: Claims = Depends(require(RequireRole(UserRole.ADMIN)))):
#       ...
# =============================================================================

from typing import Callable, Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.auth.guards import Guard
from app.auth.tokens import verify_token
from app.exceptions import UnauthorizedError
from core.models.user import Claims

# Missing/garbled headers are turned into our own 401 below
security = HTTPBearer(auto_error=False)


def get_current_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Claims:
    """
    Extract and verify the bearer token from the Authorization header.

    Args:
        credentials: Bearer token from `Authorization: Bearer <token>`

    Returns:
        Claims: The verified identity

    Raises:
        UnauthorizedError: 401 if the header is missing or the token is invalid/expired
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Missing token")

    return verify_token(credentials.credentials)


def require(guard: Guard) -> Callable[..., Claims]:
    """
    Build a dependency that authenticates and then applies `guard`.

    Authentication failures are 401; guard failures are 403. Either way the
    route body never runs.

    Returns:
        A dependency returning the caller's Claims
    """

    def dependency(claims: Claims = Depends(get_current_claims)) -> Claims:
        guard.check(claims)
        return claims

    dependency.__name__ = f"require_{type(guard).__name__}"
    return dependency
