"""Risk classifier — map numeric risk scores to tiers and labels."""

from __future__ import annotations

from collections.abc import Iterable

from supplyguard.models import QuestionnaireTier, RiskDistribution, RiskLevel, Supplier


# Risk tier lower bounds, evaluated highest first (ties go to the higher tier)
RISK_THRESHOLDS = [
    (80, RiskLevel.CRITICAL),
    (60, RiskLevel.HIGH),
    (30, RiskLevel.MEDIUM),
]

RISK_LABELS = {
    RiskLevel.CRITICAL: "Critical",
    RiskLevel.HIGH: "High",
    RiskLevel.MEDIUM: "Medium",
    RiskLevel.LOW: "Low",
}

# Suppliers above this score are listed as top risks in the executive report
TOP_RISK_THRESHOLD = 60

# Baseline industry risk (0-100)
INDUSTRY_RISK = {
    "Textiles": 70,
    "Electronics": 45,
    "Automotive": 40,
    "Chemicals": 60,
    "Logistics": 30,
    "Software": 15,
}

# Baseline country risk (0-100), keyed by ISO 3166 alpha-2 code
COUNTRY_RISK = {
    "DE": 5, "CH": 5, "NO": 5,
    "US": 10, "FR": 10, "JP": 10,
    "CN": 55, "IN": 50, "VN": 45,
    "BD": 75, "MM": 85, "KP": 95,
}

DEFAULT_COUNTRY_RISK = 50
DEFAULT_INDUSTRY_RISK = 40


def classify(score: int) -> RiskLevel:
    """Return the risk tier for a score.

    Total over all integers: anything below 30 is LOW, anything from 80 up
    is CRITICAL.
    """
    for lower_bound, level in RISK_THRESHOLDS:
        if score >= lower_bound:
            return level
    return RiskLevel.LOW


def questionnaire_tier(score: int) -> QuestionnaireTier:
    """Return the audit depth for a score.

    The COMPREHENSIVE boundary is strict (> 60), so a score of exactly 60 is
    HIGH risk but still gets a STANDARD questionnaire.
    """
    if score > 60:
        return QuestionnaireTier.COMPREHENSIVE
    if score >= 30:
        return QuestionnaireTier.STANDARD
    return QuestionnaireTier.BASIC


def risk_label(score: int) -> str:
    """Human-readable badge label for a score."""
    return RISK_LABELS[classify(score)]


def risk_distribution(suppliers: Iterable[Supplier]) -> RiskDistribution:
    """Count suppliers per risk tier."""
    counts = {level: 0 for level in RiskLevel}
    for supplier in suppliers:
        counts[classify(supplier.risk_score)] += 1
    return RiskDistribution(
        critical=counts[RiskLevel.CRITICAL],
        high=counts[RiskLevel.HIGH],
        medium=counts[RiskLevel.MEDIUM],
        low=counts[RiskLevel.LOW],
    )


def filter_suppliers(suppliers: Iterable[Supplier], query: str | None) -> list[Supplier]:
    """Case-insensitive match of *query* against name or industry."""
    needle = (query or "").strip().lower()
    if not needle:
        return list(suppliers)
    return [
        s for s in suppliers
        if needle in s.name.lower() or needle in s.industry.lower()
    ]


def top_risks(suppliers: Iterable[Supplier], limit: int = 3) -> list[Supplier]:
    """Highest-scoring suppliers above the top-risk threshold."""
    risky = [s for s in suppliers if s.risk_score > TOP_RISK_THRESHOLD]
    risky.sort(key=lambda s: s.risk_score, reverse=True)
    return risky[:limit]


def baseline_risk_score(country: str | None, industry: str | None) -> int:
    """Initial risk score for a newly ingested supplier.

    Mean of the country and industry baselines. Unknown countries and
    industries fall back to the defaults.
    """
    country_risk = COUNTRY_RISK.get((country or "").strip().upper(), DEFAULT_COUNTRY_RISK)
    industry_risk = INDUSTRY_RISK.get((industry or "").strip().title(), DEFAULT_INDUSTRY_RISK)
    return round((country_risk + industry_risk) / 2)
