# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Temo Connect API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
#   python -m app.main
# =============================================================================

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.config import settings
from app.exceptions import (
    TemoConnectException,
    store_exception_handler,
    temo_connect_exception_handler,
    validation_exception_handler,
)
from app.auth import routes as auth_routes
from app.routers import admin, health, products
from lib.supabase_client import SupabaseClient, SupabaseClientError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: create the shared Supabase client
    - Shutdown: release it (uvicorn has already drained in-flight requests)
    """
    logger.info(f"Starting Temo Connect API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    SupabaseClient.init()

    yield

    logger.info("Shutting down Temo Connect API")
    SupabaseClient.close()


# Create FastAPI application
app = FastAPI(
    title="Temo Connect API",
    description="""
## Farm-to-consumer marketplace API

Farmers list produce, consumers browse it, and an admin approves farmer
accounts before they can sell.

### Roles

| Role | Can |
|------|-----|
| **consumer** | Browse products |
| **farmer** | List, edit and delete own products (once approved) |
| **admin** | Approve pending farmers |

### Quick Start

```bash
# 1. Register as a farmer (starts pending)
curl -X POST http://localhost:5000/api/auth/register \\
  -H "Content-Type: application/json" \\
  -d '{"name": "Alice", "email": "alice@farm.test", "password": "s3cret", "role": "farmer"}'

# 2. Admin approves, farmer logs in again for a fresh token
curl -X PATCH http://localhost:5000/api/admin/farmers/1/approve -H "Authorization: Bearer $ADMIN_TOKEN"

# 3. List a product
curl -X POST http://localhost:5000/api/products \\
  -H "Authorization: Bearer $FARMER_TOKEN" -H "Content-Type: application/json" \\
  -d '{"name": "Tomatoes", "price": 2.5, "quantity": 40}'
```
""",
    version=health.VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Register, log in, and inspect the current token",
        },
        {
            "name": "Products",
            "description": "Public catalog and farmer-owned product management",
        },
        {
            "name": "Admin",
            "description": "Farmer approval queue",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

app.add_exception_handler(TemoConnectException, temo_connect_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(SupabaseClientError, store_exception_handler)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

app.include_router(health.router, tags=["Health"])

app.include_router(
    auth_routes.router,
    prefix="/api/auth",
    tags=["Auth"]
)

app.include_router(
    products.router,
    prefix="/api/products",
    tags=["Products"]
)

app.include_router(
    admin.router,
    prefix="/api/admin",
    tags=["Admin"]
)


# =============================================================================
# Static Frontend
# =============================================================================

if settings.STATIC_DIR:
    static_dir = Path(settings.STATIC_DIR)
    if static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=static_dir, html=True), name="static")
        logger.info(f"Serving frontend from {static_dir}")
    else:
        logger.warning(f"STATIC_DIR does not exist, not serving frontend: {static_dir}")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.API_HOST, port=settings.API_PORT)
