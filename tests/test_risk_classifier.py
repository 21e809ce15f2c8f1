"""Risk classifier tests — tiers, labels, boundaries and portfolio helpers."""

from __future__ import annotations

import pytest

from supplyguard.models import QuestionnaireTier, RiskLevel, Supplier
from supplyguard.services.risk_classifier import (
    DEFAULT_COUNTRY_RISK,
    DEFAULT_INDUSTRY_RISK,
    baseline_risk_score,
    classify,
    filter_suppliers,
    questionnaire_tier,
    risk_distribution,
    risk_label,
    top_risks,
)

SEVERITY_ORDER = [RiskLevel.LOW, RiskLevel.MEDIUM, RiskLevel.HIGH, RiskLevel.CRITICAL]


def _supplier(sid: str, score: int, name: str = "Supplier", industry: str = "General") -> Supplier:
    return Supplier(id=sid, name=name, country="DE", industry=industry, risk_score=score)


# ─── classify ────────────────────────────────────────────────────────────────

class TestClassify:
    """Tests for risk tier boundaries."""

    @pytest.mark.parametrize("score,expected", [
        (29, RiskLevel.LOW),
        (30, RiskLevel.MEDIUM),
        (59, RiskLevel.MEDIUM),
        (60, RiskLevel.HIGH),
        (79, RiskLevel.HIGH),
        (80, RiskLevel.CRITICAL),
    ])
    def test_boundaries(self, score, expected):
        assert classify(score) == expected

    @pytest.mark.parametrize("score,expected", [
        (-50, RiskLevel.LOW),
        (0, RiskLevel.LOW),
        (100, RiskLevel.CRITICAL),
        (250, RiskLevel.CRITICAL),
    ])
    def test_out_of_range_goes_to_extreme_tier(self, score, expected):
        assert classify(score) == expected

    def test_monotonic_in_severity(self):
        """A higher score never produces a lower tier."""
        previous = SEVERITY_ORDER.index(classify(-10))
        for score in range(-10, 121):
            current = SEVERITY_ORDER.index(classify(score))
            assert current >= previous
            previous = current

    def test_always_one_of_four_tiers(self):
        assert {classify(s) for s in range(-10, 121)} == set(RiskLevel)


# ─── questionnaire_tier ─────────────────────────────────────────────────────

class TestQuestionnaireTier:
    """Tests for audit depth selection."""

    @pytest.mark.parametrize("score,expected", [
        (29, QuestionnaireTier.BASIC),
        (30, QuestionnaireTier.STANDARD),
        (60, QuestionnaireTier.STANDARD),
        (61, QuestionnaireTier.COMPREHENSIVE),
    ])
    def test_boundaries(self, score, expected):
        assert questionnaire_tier(score) == expected

    def test_sixty_is_high_risk_but_standard_questionnaire(self):
        """The two tables disagree at exactly 60."""
        assert classify(60) == RiskLevel.HIGH
        assert questionnaire_tier(60) == QuestionnaireTier.STANDARD

    def test_extreme_scores(self):
        assert questionnaire_tier(-1) == QuestionnaireTier.BASIC
        assert questionnaire_tier(1000) == QuestionnaireTier.COMPREHENSIVE


# ─── Labels and portfolio helpers ───────────────────────────────────────────

class TestRiskLabel:

    @pytest.mark.parametrize("score,label", [
        (92, "Critical"),
        (78, "High"),
        (55, "Medium"),
        (10, "Low"),
    ])
    def test_labels(self, score, label):
        assert risk_label(score) == label


class TestRiskDistribution:

    def test_counts_each_tier(self):
        suppliers = [
            _supplier("a", 92), _supplier("b", 80),
            _supplier("c", 78),
            _supplier("d", 55), _supplier("e", 30),
            _supplier("f", 5),
        ]
        dist = risk_distribution(suppliers)
        assert (dist.critical, dist.high, dist.medium, dist.low) == (2, 1, 2, 1)

    def test_empty(self):
        dist = risk_distribution([])
        assert (dist.critical, dist.high, dist.medium, dist.low) == (0, 0, 0, 0)


class TestFilterSuppliers:

    def setup_method(self):
        self.suppliers = [
            _supplier("s1", 78, "Acme Textiles Ltd", "Textiles"),
            _supplier("s2", 55, "TechParts Shenzhen", "Electronics"),
            _supplier("s3", 92, "Global LogiCorp", "Logistics"),
        ]

    def test_matches_name_case_insensitive(self):
        result = filter_suppliers(self.suppliers, "acme")
        assert [s.id for s in result] == ["s1"]

    def test_matches_industry(self):
        result = filter_suppliers(self.suppliers, "ELECTRON")
        assert [s.id for s in result] == ["s2"]

    def test_blank_query_returns_all(self):
        assert len(filter_suppliers(self.suppliers, "  ")) == 3
        assert len(filter_suppliers(self.suppliers, None)) == 3

    def test_no_match(self):
        assert filter_suppliers(self.suppliers, "pharma") == []


class TestTopRisks:

    def test_sorted_descending_above_sixty(self):
        suppliers = [
            _supplier("a", 61), _supplier("b", 95), _supplier("c", 60),
            _supplier("d", 78), _supplier("e", 88),
        ]
        assert [s.id for s in top_risks(suppliers)] == ["b", "e", "d"]

    def test_sixty_is_not_a_top_risk(self):
        assert top_risks([_supplier("a", 60)]) == []

    def test_custom_limit(self):
        suppliers = [_supplier(str(i), 70 + i) for i in range(5)]
        assert len(top_risks(suppliers, limit=5)) == 5


class TestBaselineRiskScore:

    def test_known_country_and_industry(self):
        assert baseline_risk_score("CN", "Electronics") == 50
        assert baseline_risk_score("DE", "Software") == 10

    def test_normalises_case_and_whitespace(self):
        assert baseline_risk_score(" cn ", "electronics") == 50

    def test_unknown_values_use_defaults(self):
        expected = round((DEFAULT_COUNTRY_RISK + DEFAULT_INDUSTRY_RISK) / 2)
        assert baseline_risk_score("Unknown", "General") == expected
        assert baseline_risk_score(None, None) == expected
