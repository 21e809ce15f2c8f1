"""Schemas for supplier endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field

from supplyguard.models import QuestionnaireTier, RiskLevel, Supplier


class SupplierView(BaseModel):
    """A supplier together with its derived risk classification."""

    supplier: Supplier
    risk_level: RiskLevel
    risk_label: str
    questionnaire_tier: QuestionnaireTier


class SupplierListResponse(BaseModel):
    query: str | None = None
    count: int
    suppliers: list[SupplierView]


class RiskScoreUpdate(BaseModel):
    """Request to change a supplier's risk score."""

    risk_score: int = Field(..., description="Conventionally 0-100; values outside are not clamped")


class NewsAnalysisResponse(BaseModel):
    supplier_id: str
    text: str
    sources: list[dict] = []


class DeepAssessmentResponse(BaseModel):
    supplier_id: str
    assessment: str
