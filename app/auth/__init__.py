# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Bearer-token authentication and guard-based authorization.
#
# Usage:
#   from app.auth import require, RequireApprovedFarmer
#
#   @router.post("/products")
#   def create(claims: Claims = Depends(require(RequireApprovedFarmer()))):
#       ...
# =============================================================================

from app.auth.dependencies import get_current_claims, require
from app.auth.guards import AllOf, Guard, RequireApprovedFarmer, RequireRole
from app.auth.tokens import issue_token, verify_token

__all__ = [
    "get_current_claims",
    "require",
    "AllOf",
    "Guard",
    "RequireApprovedFarmer",
    "RequireRole",
    "issue_token",
    "verify_token",
]
