"""Health check endpoints for production monitoring."""

from __future__ import annotations

import time

from fastapi import APIRouter, Request

from supplyguard.schemas.health import HealthResponse, ServiceHealth
from supplyguard.store import data_store

router = APIRouter(tags=["health"])


async def _check_service(name: str, check_fn) -> ServiceHealth:
    """Run a health check function and return a ServiceHealth result."""
    start = time.monotonic()
    try:
        await check_fn()
        latency = (time.monotonic() - start) * 1000
        return ServiceHealth(
            service=name,
            status="healthy",
            latency_ms=round(latency, 2),
        )
    except Exception as exc:
        latency = (time.monotonic() - start) * 1000
        return ServiceHealth(
            service=name,
            status="unhealthy",
            latency_ms=round(latency, 2),
            details=str(exc)[:200],
        )


async def _check_app() -> None:
    """Application self-check — always passes."""
    pass


async def _check_store() -> None:
    """The session store must be holding suppliers."""
    if not data_store.suppliers:
        raise RuntimeError("session store is empty")


def _ai_check(request: Request):
    capability = request.app.state.capability

    async def _check_ai() -> None:
        if not getattr(capability, "is_configured", True):
            raise RuntimeError("AI API key is not configured")

    return _check_ai


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Basic health check — is the application running?"""
    settings = request.app.state.settings
    app_health = await _check_service("app", _check_app)

    services = [app_health]
    overall = "healthy" if all(s.status == "healthy" for s in services) else "degraded"

    return HealthResponse(
        status=overall,
        version=settings.app_version,
        environment=settings.environment,
        services=services,
    )


@router.get("/health/ready", response_model=HealthResponse)
async def readiness_check(request: Request) -> HealthResponse:
    """Readiness check — session seeded and AI service configured?

    A missing AI key leaves the dashboard usable with AI features failing,
    so it degrades rather than fails readiness.
    """
    settings = request.app.state.settings
    services = [
        await _check_service("app", _check_app),
        await _check_service("store", _check_store),
        await _check_service("ai", _ai_check(request)),
    ]

    if all(s.status == "healthy" for s in services):
        overall = "healthy"
    elif services[1].status == "healthy":
        overall = "degraded"
    else:
        overall = "unhealthy"

    return HealthResponse(
        status=overall,
        version=settings.app_version,
        environment=settings.environment,
        services=services,
    )


@router.get("/health/live")
async def liveness_check() -> dict[str, str]:
    """Liveness probe — is the process alive?"""
    return {"status": "alive"}
