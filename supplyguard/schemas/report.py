"""Schemas for reporting endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from supplyguard.models import RiskDistribution, RiskLevel


class TopRisk(BaseModel):
    id: str
    name: str
    country: str
    industry: str
    risk_score: int
    risk_level: RiskLevel
    risk_label: str


class ExecutiveReportResponse(BaseModel):
    """Executive compliance report for the current reporting period."""

    generated_at: datetime
    reporting_period: str
    total_suppliers: int
    compliant_suppliers: int
    compliant_share_pct: int = Field(..., ge=0, le=100)
    critical_suppliers: int
    compliance_score: int
    risk_distribution: RiskDistribution
    top_risks: list[TopRisk]
    summary: str
    recommendations: list[str]
