"""Supplier ingestion API endpoints."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from supplyguard.dependencies import get_capability
from supplyguard.schemas.ingestion import IngestionResponse
from supplyguard.services.ai_client import AIServiceError, ComplianceCapability
from supplyguard.services.ingestion import ingest_csv, ingest_document, is_tabular_upload
from supplyguard.services.reporting import add_suppliers
from supplyguard.store import data_store

logger = structlog.get_logger()

router = APIRouter(prefix="/api/ingestion", tags=["ingestion"])


@router.post("/upload", response_model=IngestionResponse)
async def upload_suppliers(
    file: UploadFile = File(...),
    capability: ComplianceCapability = Depends(get_capability),
) -> IngestionResponse:
    """Import suppliers from a CSV list or a single business document."""
    raw = await file.read()
    if not raw:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")

    tabular = is_tabular_upload(file.filename, file.content_type)
    try:
        if tabular:
            suppliers = await ingest_csv(raw.decode("utf-8-sig", errors="replace"), capability)
        else:
            mime_type = file.content_type or "application/octet-stream"
            suppliers = [await ingest_document(raw, mime_type, capability)]
    except AIServiceError as exc:
        logger.warning("ingestion_failed", filename=file.filename, error=str(exc))
        raise HTTPException(
            status_code=502,
            detail="Failed to process file. Please ensure it is a valid format.",
        ) from exc

    data_store.prepend_suppliers(suppliers)
    data_store.stats = add_suppliers(data_store.stats, suppliers)
    logger.info("suppliers_ingested", filename=file.filename, created=len(suppliers), tabular=tabular)

    return IngestionResponse(
        source="csv" if tabular else "document",
        created=len(suppliers),
        total_suppliers=data_store.stats.total_suppliers,
        suppliers=suppliers,
    )
