"""Questionnaire workflow API endpoints."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from supplyguard.config import Settings
from supplyguard.dependencies import get_app_settings, get_capability, get_supplier_or_404
from supplyguard.models import Language, Supplier
from supplyguard.schemas.questionnaire import (
    QuestionnaireState,
    ResponsesRequest,
    SendRequest,
    TransitionRejected,
)
from supplyguard.services.ai_client import AIServiceError, ComplianceCapability, MalformedResultError
from supplyguard.services.questionnaire_lifecycle import (
    InvalidTransitionError,
    TransitionResult,
    available_actions,
    current_questionnaire,
    receive_response,
    remind,
    send,
)
from supplyguard.services.risk_classifier import classify, questionnaire_tier
from supplyguard.store import data_store

logger = structlog.get_logger()

router = APIRouter(prefix="/api/suppliers", tags=["questionnaires"])

_REJECTED = {409: {"model": TransitionRejected}}


def questionnaire_state(supplier: Supplier) -> QuestionnaireState:
    questionnaire = current_questionnaire(supplier)
    return QuestionnaireState(
        supplier_id=supplier.id,
        risk_score=supplier.risk_score,
        risk_level=classify(supplier.risk_score),
        recommended_tier=questionnaire_tier(supplier.risk_score),
        questionnaire=questionnaire,
        available_actions=available_actions(questionnaire.status),
    )


def _apply(result: TransitionResult) -> QuestionnaireState | JSONResponse:
    """Store a successful transition, or translate its error into a response."""
    error = result.error
    if isinstance(error, InvalidTransitionError):
        body = TransitionRejected(detail=str(error), state=questionnaire_state(result.supplier))
        return JSONResponse(status_code=409, content=body.model_dump(mode="json"))
    if isinstance(error, MalformedResultError):
        raise HTTPException(status_code=502, detail="AI validation returned an unreadable result")
    if isinstance(error, AIServiceError):
        raise HTTPException(status_code=502, detail="AI validation unavailable")

    data_store.put_supplier(result.supplier)
    return questionnaire_state(result.supplier)


@router.get("/{supplier_id}/questionnaire", response_model=QuestionnaireState)
async def get_questionnaire(supplier: Supplier = Depends(get_supplier_or_404)) -> QuestionnaireState:
    """Current questionnaire state and legal next actions."""
    return questionnaire_state(supplier)


@router.post("/{supplier_id}/questionnaire/send", response_model=QuestionnaireState, responses=_REJECTED)
async def send_questionnaire(
    request: SendRequest | None = None,
    supplier: Supplier = Depends(get_supplier_or_404),
    settings: Settings = Depends(get_app_settings),
):
    """Send the questionnaire at the requested or recommended tier."""
    if request is None:
        request = SendRequest()
    language = request.language or Language(settings.default_questionnaire_language)
    return _apply(send(supplier, tier=request.tier, language=language))


@router.post("/{supplier_id}/questionnaire/remind", response_model=QuestionnaireState, responses=_REJECTED)
async def remind_supplier(supplier: Supplier = Depends(get_supplier_or_404)):
    """Send a reminder for an outstanding questionnaire."""
    return _apply(remind(supplier))


@router.post("/{supplier_id}/questionnaire/responses", response_model=QuestionnaireState, responses=_REJECTED)
async def submit_responses(
    request: ResponsesRequest,
    supplier: Supplier = Depends(get_supplier_or_404),
    capability: ComplianceCapability = Depends(get_capability),
):
    """Record the supplier's answers and score them with the AI validator."""
    if supplier.id in data_store.validations_in_flight:
        raise HTTPException(
            status_code=409,
            detail=f"Responses for '{supplier.id}' are already being validated",
        )

    data_store.validations_in_flight.add(supplier.id)
    try:
        result = await receive_response(supplier, request.responses, capability)
    finally:
        data_store.validations_in_flight.discard(supplier.id)

    return _apply(result)
