# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings
from app.dependencies import SupabaseDep
from lib.supabase_client import SupabaseClientError, run_query

router = APIRouter()

VERSION = "1.0.0"


# =============================================================================
# Response Models
# =============================================================================

class RootResponse(BaseModel):
    """Root endpoint response."""
    ok: bool
    message: str


class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


class ChecksResponse(BaseModel):
    """Individual service checks."""
    database: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    timestamp: str


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/", response_model=RootResponse)
def root():
    """
    Root endpoint - confirms the API is up.
    """
    return RootResponse(ok=True, message="Temo Connect API running")


@router.get("/health", response_model=HealthResponse)
def health_check():
    """
    Health check endpoint.

    Returns basic health status for load balancers and monitoring.
    """
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        environment=settings.ENVIRONMENT,
        version=VERSION,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
def readiness_check(client: SupabaseDep):
    """
    Readiness check endpoint.

    Checks the database is reachable with a one-row query.
    """
    checks = ChecksResponse(database="unknown")

    try:
        run_query(client.table("users").select("id").limit(1), "PING_FAILED")
        checks.database = "healthy"
    except SupabaseClientError as e:
        checks.database = f"unhealthy: {e.message[:50]}"

    return ReadinessResponse(
        status="ready" if checks.database == "healthy" else "degraded",
        checks=checks,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
