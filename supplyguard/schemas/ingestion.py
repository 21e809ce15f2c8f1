"""Schemas for supplier ingestion endpoints."""

from __future__ import annotations

from pydantic import BaseModel

from supplyguard.models import Supplier


class IngestionResponse(BaseModel):
    """Suppliers created from an upload."""

    source: str
    created: int
    total_suppliers: int
    suppliers: list[Supplier]
