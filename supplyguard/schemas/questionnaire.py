"""Schemas for questionnaire workflow endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field

from supplyguard.models import Language, Questionnaire, QuestionnaireTier, RiskLevel


class QuestionnaireState(BaseModel):
    """Current questionnaire state and the actions the UI may offer."""

    supplier_id: str
    risk_score: int
    risk_level: RiskLevel
    recommended_tier: QuestionnaireTier
    questionnaire: Questionnaire
    available_actions: list[str]


class SendRequest(BaseModel):
    """Request to send a questionnaire. Omitted fields use the recommended tier and default language."""

    tier: QuestionnaireTier | None = None
    language: Language | None = None


class ResponsesRequest(BaseModel):
    """Answers received from the supplier, keyed by question."""

    responses: dict[str, str] = Field(..., min_length=1)


class TransitionRejected(BaseModel):
    """Body returned when a transition does not apply to the current state."""

    detail: str
    state: QuestionnaireState
