"""Schemas for alert inbox endpoints."""

from __future__ import annotations

from pydantic import BaseModel

from supplyguard.models import Alert


class AlertListResponse(BaseModel):
    total: int
    unread: int
    alerts: list[Alert]
