"""Questionnaire lifecycle — send, remind and score supplier questionnaires.

State machine::

    NOT_SENT --send--> SENT --receive_response--> COMPLETED
                        |  ^
                        +--+ remind

PENDING and OVERDUE behave like SENT for every operation here, although no
transition currently produces them.

Every operation takes a ``Supplier`` and returns a ``TransitionResult`` holding
the (possibly new) supplier and an optional error. Inputs are never mutated;
a rejected or failed operation returns the input supplier untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

import structlog

from supplyguard.models import (
    OPEN_STATUSES,
    CompletedQuestionnaire,
    Language,
    NotSentQuestionnaire,
    OpenQuestionnaire,
    Questionnaire,
    QuestionnaireStatus,
    QuestionnaireTier,
    Supplier,
    new_id,
    utcnow,
)
from supplyguard.services.ai_client import AIServiceError, ComplianceCapability
from supplyguard.services.risk_classifier import questionnaire_tier

logger = structlog.get_logger()


class InvalidTransitionError(Exception):
    """Raised when an operation does not apply to the questionnaire's status."""

    def __init__(self, action: str, status: QuestionnaireStatus) -> None:
        self.action = action
        self.status = QuestionnaireStatus(status)
        super().__init__(f"Cannot {action} a questionnaire in status {self.status.value}")


@dataclass(frozen=True)
class TransitionResult:
    """Outcome of a lifecycle operation."""

    supplier: Supplier
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def questionnaire(self) -> Questionnaire:
        return current_questionnaire(self.supplier)


def current_questionnaire(supplier: Supplier) -> Questionnaire:
    """The supplier's questionnaire, or an unsent one at the classified tier."""
    if supplier.questionnaire is not None:
        return supplier.questionnaire
    return NotSentQuestionnaire(tier=questionnaire_tier(supplier.risk_score))


def current_status(supplier: Supplier) -> QuestionnaireStatus:
    return QuestionnaireStatus(current_questionnaire(supplier).status)


def available_actions(status: QuestionnaireStatus | str) -> list[str]:
    """Operations that are legal from *status*."""
    status = QuestionnaireStatus(status)
    if status == QuestionnaireStatus.NOT_SENT:
        return ["send"]
    if status in OPEN_STATUSES:
        return ["remind", "receive_response"]
    return []


def _reject(supplier: Supplier, action: str) -> TransitionResult:
    status = current_status(supplier)
    logger.info("questionnaire_transition_rejected", supplier_id=supplier.id, action=action, status=status.value)
    return TransitionResult(supplier=supplier, error=InvalidTransitionError(action, status))


def send(
    supplier: Supplier,
    tier: QuestionnaireTier | None = None,
    language: Language | None = None,
    now: datetime | None = None,
) -> TransitionResult:
    """Send the questionnaire to the supplier.

    Only legal from NOT_SENT. Calling it again on a sent or completed
    questionnaire is rejected rather than resetting it.
    """
    current = current_questionnaire(supplier)
    if current.status != QuestionnaireStatus.NOT_SENT:
        return _reject(supplier, "send")

    sent = OpenQuestionnaire(
        id=supplier.questionnaire.id if supplier.questionnaire is not None else new_id("q"),
        tier=tier or current.tier,
        language=language or current.language,
        status="SENT",
        sent_at=now or utcnow(),
    )
    logger.info("questionnaire_sent", supplier_id=supplier.id, tier=sent.tier.value, language=sent.language.value)
    return TransitionResult(supplier=supplier.model_copy(update={"questionnaire": sent}))


def remind(supplier: Supplier, now: datetime | None = None) -> TransitionResult:
    """Record a reminder on an open questionnaire. Status is unchanged."""
    current = current_questionnaire(supplier)
    if not isinstance(current, OpenQuestionnaire):
        return _reject(supplier, "remind")

    reminded = current.model_copy(update={"last_reminder_at": now or utcnow()})
    logger.info("questionnaire_reminder_sent", supplier_id=supplier.id, status=current.status)
    return TransitionResult(supplier=supplier.model_copy(update={"questionnaire": reminded}))


async def receive_response(
    supplier: Supplier,
    responses: dict[str, str],
    capability: ComplianceCapability,
    now: datetime | None = None,
) -> TransitionResult:
    """Score the supplier's answers and complete the questionnaire.

    If the AI validation fails the questionnaire stays open and the
    capability error is returned; nothing is retried.
    """
    current = current_questionnaire(supplier)
    if not isinstance(current, OpenQuestionnaire):
        return _reject(supplier, "receive_response")

    try:
        result = await capability.validate_responses(dict(responses))
    except AIServiceError as exc:
        logger.warning(
            "questionnaire_validation_failed",
            supplier_id=supplier.id,
            error_type=type(exc).__name__,
            error=str(exc),
        )
        return TransitionResult(supplier=supplier, error=exc)

    completed = CompletedQuestionnaire(
        id=current.id,
        tier=current.tier,
        language=current.language,
        sent_at=current.sent_at,
        completed_at=now or utcnow(),
        responses=dict(responses),
        ai_score=result.score,
        ai_feedback=result.feedback,
    )
    logger.info(
        "questionnaire_completed",
        supplier_id=supplier.id,
        ai_score=result.score,
        inconsistencies=len(result.inconsistencies),
    )
    return TransitionResult(supplier=supplier.model_copy(update={"questionnaire": completed}))


def rescore(supplier: Supplier, score: int) -> Supplier:
    """Return *supplier* with a new risk score.

    An unsent questionnaire follows the new score's tier; once sent, the tier
    is fixed for the cycle.
    """
    update: dict = {"risk_score": score}
    if isinstance(supplier.questionnaire, NotSentQuestionnaire):
        update["questionnaire"] = supplier.questionnaire.model_copy(
            update={"tier": questionnaire_tier(score)}
        )
    return supplier.model_copy(update=update)
