# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .user_service import UserService
from .product_service import ProductService

__all__ = [
    "UserService",
    "ProductService",
]
