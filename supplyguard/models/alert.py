"""Alert model — notifications raised by external monitoring."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import Field

from supplyguard.models.base import DomainModel


class AlertType(str, Enum):
    SANCTIONS = "SANCTIONS"
    HIGH_RISK_NEWS = "HIGH_RISK_NEWS"
    SCORE_INCREASE = "SCORE_INCREASE"
    NEW_SUPPLIER = "NEW_SUPPLIER"


class AlertStatus(str, Enum):
    UNREAD = "UNREAD"
    READ = "READ"
    RESOLVED = "RESOLVED"


class Alert(DomainModel):
    """A monitoring alert, denormalised with the supplier's name."""

    id: str
    supplier_id: str
    supplier_name: str
    type: AlertType
    severity: int = Field(..., ge=0, le=10)
    title: str
    message: str
    status: AlertStatus = AlertStatus.UNREAD
    created_at: datetime

    def __repr__(self) -> str:
        return f"<Alert {self.id} supplier={self.supplier_id} {self.status.value}>"
