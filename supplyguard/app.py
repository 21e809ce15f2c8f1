"""SupplyGuard — FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from supplyguard.config import Settings, get_settings
from supplyguard.middleware import (
    configure_cors,
    configure_rate_limiting,
    configure_request_logging,
    lifespan,
)
from supplyguard.routers import alerts, chat, health, ingestion, questionnaires, reports, suppliers
from supplyguard.services.ai_client import ComplianceCapability, GeminiClient


def create_app(
    settings: Settings | None = None,
    capability: ComplianceCapability | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    *capability* replaces the Gemini client, e.g. with a fake in tests.
    """
    if settings is None:
        settings = get_settings()
    if capability is None:
        capability = GeminiClient.from_settings(settings)

    app = FastAPI(
        title=settings.app_name,
        debug=settings.debug,
        description="Supply-chain compliance monitoring with AI-assisted audits",
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.capability = capability

    # Middleware
    configure_request_logging(app)
    configure_cors(app, settings)
    configure_rate_limiting(app, settings)

    # Routers
    app.include_router(health.router)
    app.include_router(suppliers.router)
    app.include_router(questionnaires.router)
    app.include_router(alerts.router)
    app.include_router(ingestion.router)
    app.include_router(reports.router)
    app.include_router(chat.router)

    return app


# Default app instance for uvicorn
app = create_app()
