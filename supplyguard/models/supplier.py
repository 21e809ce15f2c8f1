"""Supplier model — core entity for SupplyGuard."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import Field

from supplyguard.models.base import DomainModel, new_id, utcnow
from supplyguard.models.questionnaire import Questionnaire


class RiskLevel(str, Enum):
    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class SupplierStatus(str, Enum):
    ACTIVE = "ACTIVE"
    WATCHLIST = "WATCHLIST"
    BLOCKED = "BLOCKED"


class NewsArticle(DomainModel):
    """A news item screened for a supplier."""

    id: str
    title: str
    url: str
    source: str
    published_at: datetime
    summary: str | None = None
    is_relevant: bool = True
    severity: int = Field(default=0, ge=0, le=10)
    risks: list[str] = Field(default_factory=list)


class Supplier(DomainModel):
    """An external organisation being monitored.

    ``risk_score`` is conventionally 0-100 but is not clamped; the classifier
    places out-of-range values in the extreme tier.
    """

    id: str = Field(default_factory=lambda: new_id("s"))
    name: str
    legal_name: str | None = None
    country: str
    city: str | None = None
    industry: str
    website: str | None = None
    risk_score: int
    sanctions_hit: bool = False
    status: SupplierStatus = SupplierStatus.ACTIVE
    last_screened_at: datetime = Field(default_factory=utcnow)
    news: list[NewsArticle] = Field(default_factory=list)
    questionnaire: Questionnaire | None = None

    def __repr__(self) -> str:
        return f"<Supplier {self.id} score={self.risk_score}>"
