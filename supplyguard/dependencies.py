"""FastAPI dependencies shared by the routers."""

from __future__ import annotations

from fastapi import HTTPException, Request

from supplyguard.config import Settings
from supplyguard.models import Alert, Supplier
from supplyguard.services.ai_client import ComplianceCapability
from supplyguard.store import data_store


def get_capability(request: Request) -> ComplianceCapability:
    """The AI capability attached to the running application."""
    return request.app.state.capability


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_supplier_or_404(supplier_id: str) -> Supplier:
    supplier = data_store.get_supplier(supplier_id)
    if supplier is None:
        raise HTTPException(status_code=404, detail=f"Supplier '{supplier_id}' not found")
    return supplier


def get_alert_or_404(alert_id: str) -> Alert:
    alert = data_store.get_alert(alert_id)
    if alert is None:
        raise HTTPException(status_code=404, detail=f"Alert '{alert_id}' not found")
    return alert
