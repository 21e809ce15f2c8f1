"""Reporting — compliance statistics upkeep and the executive report."""

from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from supplyguard.models import ComplianceStats, RiskDistribution, Supplier, utcnow
from supplyguard.services.risk_classifier import classify, risk_distribution, risk_label, top_risks


def add_suppliers(stats: ComplianceStats, suppliers: Iterable[Supplier]) -> ComplianceStats:
    """Return *stats* with newly onboarded suppliers counted in the total and tiers."""
    suppliers = list(suppliers)
    added = risk_distribution(suppliers)
    dist = stats.risk_distribution
    return stats.model_copy(update={
        "total_suppliers": stats.total_suppliers + len(suppliers),
        "risk_distribution": RiskDistribution(
            critical=dist.critical + added.critical,
            high=dist.high + added.high,
            medium=dist.medium + added.medium,
            low=dist.low + added.low,
        ),
    })


def move_supplier(stats: ComplianceStats, old_score: int, new_score: int) -> ComplianceStats:
    """Return *stats* with one supplier moved from its old risk tier to its new one."""
    old_tier, new_tier = classify(old_score), classify(new_score)
    if old_tier == new_tier:
        return stats
    counts = stats.risk_distribution.model_dump()
    old_key, new_key = old_tier.value.lower(), new_tier.value.lower()
    counts[old_key] = max(counts[old_key] - 1, 0)
    counts[new_key] += 1
    return stats.model_copy(update={"risk_distribution": RiskDistribution(**counts)})


def compliant_share(stats: ComplianceStats) -> int:
    """Percentage of suppliers without a critical risk flag, rounded half up."""
    if stats.total_suppliers <= 0:
        return 0
    compliant = stats.total_suppliers - stats.risk_distribution.critical
    return math.floor(compliant / stats.total_suppliers * 100 + 0.5)


def summarise_supplier(supplier: Supplier) -> dict[str, Any]:
    return {
        "id": supplier.id,
        "name": supplier.name,
        "country": supplier.country,
        "industry": supplier.industry,
        "risk_score": supplier.risk_score,
        "risk_level": classify(supplier.risk_score),
        "risk_label": risk_label(supplier.risk_score),
    }


def build_executive_report(
    stats: ComplianceStats,
    suppliers: list[Supplier],
    now: datetime | None = None,
) -> dict[str, Any]:
    """Assemble the executive compliance report.

    Args:
        stats: Current portfolio statistics.
        suppliers: Suppliers in the session, used for the top-risk list.
        now: Report timestamp, defaults to the current time.

    Returns:
        Dict matching ``ExecutiveReportResponse``.
    """
    now = now or utcnow()
    critical = stats.risk_distribution.critical
    compliant = max(stats.total_suppliers - critical, 0)
    share = compliant_share(stats)

    summary = (
        f"{share}% of suppliers ({compliant}/{stats.total_suppliers}) are currently "
        f"operating without critical risk flags. {critical} supplier(s) require "
        "immediate management intervention due to high severity news alerts or "
        "sanctions list matches."
    )
    recommendations = []
    if critical:
        recommendations.append("Initiate secondary audits for all Critical tier entities.")
    if stats.critical_alerts:
        recommendations.append(
            f"Review {stats.critical_alerts} open critical alert(s) in the alert inbox."
        )

    return {
        "generated_at": now,
        "reporting_period": now.strftime("%b %Y"),
        "total_suppliers": stats.total_suppliers,
        "compliant_suppliers": compliant,
        "compliant_share_pct": share,
        "critical_suppliers": critical,
        "compliance_score": stats.compliance_score,
        "risk_distribution": stats.risk_distribution.model_dump(),
        "top_risks": [summarise_supplier(s) for s in top_risks(suppliers)],
        "summary": summary,
        "recommendations": recommendations,
    }
