"""Reporting API endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from supplyguard.models import ComplianceStats
from supplyguard.schemas.report import ExecutiveReportResponse
from supplyguard.services.reporting import build_executive_report
from supplyguard.store import data_store

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("/stats", response_model=ComplianceStats)
async def get_stats() -> ComplianceStats:
    """Portfolio compliance statistics."""
    return data_store.stats


@router.get("/executive", response_model=ExecutiveReportResponse)
async def get_executive_report() -> ExecutiveReportResponse:
    """Executive compliance report."""
    report = build_executive_report(data_store.stats, data_store.list_suppliers())
    return ExecutiveReportResponse(**report)
