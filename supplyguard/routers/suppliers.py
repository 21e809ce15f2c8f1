"""Supplier API endpoints."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query

from supplyguard.dependencies import get_capability, get_supplier_or_404
from supplyguard.models import Supplier
from supplyguard.schemas.supplier import (
    DeepAssessmentResponse,
    NewsAnalysisResponse,
    RiskScoreUpdate,
    SupplierListResponse,
    SupplierView,
)
from supplyguard.services.ai_client import AIServiceError, ComplianceCapability
from supplyguard.services.questionnaire_lifecycle import rescore
from supplyguard.services.reporting import move_supplier
from supplyguard.services.risk_classifier import (
    classify,
    filter_suppliers,
    questionnaire_tier,
    risk_label,
)
from supplyguard.store import data_store

logger = structlog.get_logger()

router = APIRouter(prefix="/api/suppliers", tags=["suppliers"])


def supplier_view(supplier: Supplier) -> SupplierView:
    return SupplierView(
        supplier=supplier,
        risk_level=classify(supplier.risk_score),
        risk_label=risk_label(supplier.risk_score),
        questionnaire_tier=questionnaire_tier(supplier.risk_score),
    )


@router.get("", response_model=SupplierListResponse)
async def list_suppliers(
    q: str | None = Query(default=None, description="Filter by name or industry"),
) -> SupplierListResponse:
    """List suppliers in the session, optionally filtered."""
    suppliers = filter_suppliers(data_store.list_suppliers(), q)
    return SupplierListResponse(
        query=q,
        count=len(suppliers),
        suppliers=[supplier_view(s) for s in suppliers],
    )


@router.get("/{supplier_id}", response_model=SupplierView)
async def get_supplier(supplier: Supplier = Depends(get_supplier_or_404)) -> SupplierView:
    """Get a supplier with its risk classification."""
    return supplier_view(supplier)


@router.put("/{supplier_id}/risk-score", response_model=SupplierView)
async def update_risk_score(
    update: RiskScoreUpdate,
    supplier: Supplier = Depends(get_supplier_or_404),
) -> SupplierView:
    """Change a supplier's risk score and reclassify it."""
    updated = rescore(supplier, update.risk_score)
    data_store.put_supplier(updated)
    data_store.stats = move_supplier(data_store.stats, supplier.risk_score, updated.risk_score)
    logger.info(
        "supplier_rescored",
        supplier_id=supplier.id,
        old_score=supplier.risk_score,
        new_score=updated.risk_score,
    )
    return supplier_view(updated)


@router.post("/{supplier_id}/news-analysis", response_model=NewsAnalysisResponse)
async def analyze_news(
    supplier: Supplier = Depends(get_supplier_or_404),
    capability: ComplianceCapability = Depends(get_capability),
) -> NewsAnalysisResponse:
    """Run an AI news screen for the supplier."""
    try:
        analysis = await capability.analyze_news(supplier.name)
    except AIServiceError as exc:
        logger.warning("news_analysis_failed", supplier_id=supplier.id, error=str(exc))
        raise HTTPException(status_code=502, detail="AI news analysis unavailable") from exc

    return NewsAnalysisResponse(
        supplier_id=supplier.id,
        text=analysis.text,
        sources=analysis.sources,
    )


@router.post("/{supplier_id}/deep-assessment", response_model=DeepAssessmentResponse)
async def deep_assessment(
    supplier: Supplier = Depends(get_supplier_or_404),
    capability: ComplianceCapability = Depends(get_capability),
) -> DeepAssessmentResponse:
    """Run a long-form CSDDD risk assessment for the supplier."""
    try:
        assessment = await capability.deep_risk_assessment(supplier.model_dump(mode="json"))
    except AIServiceError as exc:
        logger.warning("deep_assessment_failed", supplier_id=supplier.id, error=str(exc))
        raise HTTPException(status_code=502, detail="AI risk assessment unavailable") from exc

    return DeepAssessmentResponse(supplier_id=supplier.id, assessment=assessment)
