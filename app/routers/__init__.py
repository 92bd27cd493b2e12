# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Root and health check endpoints
# - products.py: Product catalog endpoints
# - admin.py: Farmer approval endpoints
#
# Auth routes live in app/auth/routes.py.
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import products
from . import admin

__all__ = [
    "health",
    "products",
    "admin",
]
