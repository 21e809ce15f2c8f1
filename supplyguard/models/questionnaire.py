"""Questionnaire model — one compliance-audit cycle for a supplier.

Each status has its own record shape, so fields that only make sense after a
transition (``sent_at``, ``completed_at``, the AI score) cannot appear before
it has happened.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import Field

from supplyguard.models.base import DomainModel, new_id


class QuestionnaireStatus(str, Enum):
    NOT_SENT = "NOT_SENT"
    SENT = "SENT"
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    OVERDUE = "OVERDUE"


class QuestionnaireTier(str, Enum):
    """Audit depth sent to a supplier."""

    BASIC = "BASIC"
    STANDARD = "STANDARD"
    COMPREHENSIVE = "COMPREHENSIVE"


class Language(str, Enum):
    EN = "EN"
    DE = "DE"
    CN = "CN"
    ES = "ES"
    FR = "FR"


# Statuses in which the supplier still owes us an answer
OPEN_STATUSES = frozenset({
    QuestionnaireStatus.SENT,
    QuestionnaireStatus.PENDING,
    QuestionnaireStatus.OVERDUE,
})


class _QuestionnaireFields(DomainModel):
    id: str = Field(default_factory=lambda: new_id("q"))
    tier: QuestionnaireTier
    language: Language = Language.EN


class NotSentQuestionnaire(_QuestionnaireFields):
    """Tier has been determined but nothing has gone out yet."""

    status: Literal["NOT_SENT"] = "NOT_SENT"


class OpenQuestionnaire(_QuestionnaireFields):
    """Sent and awaiting the supplier's answers."""

    status: Literal["SENT", "PENDING", "OVERDUE"] = "SENT"
    sent_at: datetime
    last_reminder_at: datetime | None = None


class CompletedQuestionnaire(_QuestionnaireFields):
    """Answers received and scored by the AI validator."""

    status: Literal["COMPLETED"] = "COMPLETED"
    sent_at: datetime
    completed_at: datetime
    responses: dict[str, str]
    ai_score: int = Field(..., ge=0, le=100)
    ai_feedback: str


Questionnaire = Annotated[
    Union[NotSentQuestionnaire, OpenQuestionnaire, CompletedQuestionnaire],
    Field(discriminator="status"),
]
