"""Compliance statistics — aggregate snapshot for the dashboard."""

from __future__ import annotations

from supplyguard.models.base import DomainModel


class RiskDistribution(DomainModel):
    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0


class ComplianceStats(DomainModel):
    """Portfolio-level compliance figures."""

    total_suppliers: int
    critical_alerts: int
    compliance_score: int
    risk_distribution: RiskDistribution
