# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - user.py: Roles, approval status, token claims, auth request/response
# - product.py: Product catalog schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

from .user import (
    SELF_REGISTER_ROLES,
    AuthResponse,
    Claims,
    LoginRequest,
    RegisterRequest,
    UserPublic,
    UserRole,
    UserStatus,
    initial_status,
)
from .product import (
    ProductCreate,
    ProductResponse,
    ProductUpdate,
    PublicProduct,
)

__all__ = [
    # User
    "SELF_REGISTER_ROLES",
    "AuthResponse",
    "Claims",
    "LoginRequest",
    "RegisterRequest",
    "UserPublic",
    "UserRole",
    "UserStatus",
    "initial_status",
    # Product
    "ProductCreate",
    "ProductResponse",
    "ProductUpdate",
    "PublicProduct",
]
