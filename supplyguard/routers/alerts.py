"""Alert inbox API endpoints."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from supplyguard.dependencies import get_alert_or_404, get_capability
from supplyguard.models import Alert, AlertStatus
from supplyguard.schemas.alert import AlertListResponse
from supplyguard.services.ai_client import AIServiceError, ComplianceCapability
from supplyguard.services.alert_inbox import mark_read, resolve, unread_count
from supplyguard.services.alert_speech import alert_speech_text, speak_alert
from supplyguard.store import data_store

logger = structlog.get_logger()

router = APIRouter(prefix="/api/alerts", tags=["alerts"])


@router.get("", response_model=AlertListResponse)
async def list_alerts(
    status: AlertStatus | None = Query(default=None),
) -> AlertListResponse:
    """List alerts newest first."""
    alerts = data_store.list_alerts(status)
    return AlertListResponse(
        total=len(alerts),
        unread=unread_count(data_store.list_alerts()),
        alerts=alerts,
    )


@router.post("/{alert_id}/read", response_model=Alert)
async def read_alert(alert: Alert = Depends(get_alert_or_404)) -> Alert:
    """Mark an alert as read."""
    updated = mark_read(alert)
    data_store.put_alert(updated)
    return updated


@router.post("/{alert_id}/resolve", response_model=Alert)
async def resolve_alert(alert: Alert = Depends(get_alert_or_404)) -> Alert:
    """Resolve an alert."""
    updated = resolve(alert)
    data_store.put_alert(updated)
    logger.info("alert_resolved", alert_id=alert.id, supplier_id=alert.supplier_id)
    return updated


@router.post(
    "/{alert_id}/speech",
    response_class=Response,
    responses={200: {"content": {"audio/wav": {}}}},
)
async def alert_speech(
    alert: Alert = Depends(get_alert_or_404),
    capability: ComplianceCapability = Depends(get_capability),
) -> Response:
    """Read the alert out loud as a WAV file."""
    try:
        audio = await speak_alert(alert_speech_text(alert.title, alert.message), capability)
    except AIServiceError as exc:
        logger.warning("alert_speech_failed", alert_id=alert.id, error=str(exc))
        raise HTTPException(status_code=502, detail="AI speech generation unavailable") from exc

    return Response(content=audio, media_type="audio/wav")
