"""Domain models for SupplyGuard."""

from supplyguard.models.alert import Alert, AlertStatus, AlertType
from supplyguard.models.base import DomainModel, new_id, utcnow
from supplyguard.models.questionnaire import (
    OPEN_STATUSES,
    CompletedQuestionnaire,
    Language,
    NotSentQuestionnaire,
    OpenQuestionnaire,
    Questionnaire,
    QuestionnaireStatus,
    QuestionnaireTier,
)
from supplyguard.models.stats import ComplianceStats, RiskDistribution
from supplyguard.models.supplier import NewsArticle, RiskLevel, Supplier, SupplierStatus

__all__ = [
    "DomainModel",
    "new_id",
    "utcnow",
    "Alert",
    "AlertStatus",
    "AlertType",
    "OPEN_STATUSES",
    "CompletedQuestionnaire",
    "Language",
    "NotSentQuestionnaire",
    "OpenQuestionnaire",
    "Questionnaire",
    "QuestionnaireStatus",
    "QuestionnaireTier",
    "ComplianceStats",
    "RiskDistribution",
    "NewsArticle",
    "RiskLevel",
    "Supplier",
    "SupplierStatus",
]
