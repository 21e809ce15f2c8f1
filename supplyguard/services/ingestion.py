"""Supplier ingestion — turn AI-extracted records into Supplier values."""

from __future__ import annotations

from datetime import datetime

from supplyguard.models import Supplier, SupplierStatus, new_id, utcnow
from supplyguard.schemas.capability import ExtractedSupplier, TabularSupplierRow
from supplyguard.services.ai_client import ComplianceCapability
from supplyguard.services.risk_classifier import baseline_risk_score

UNKNOWN_NAME = "Unknown Company"
UNKNOWN_COUNTRY = "Unknown"
DEFAULT_INDUSTRY = "General"

CSV_MIME_TYPES = {"text/csv", "application/csv", "application/vnd.ms-excel"}


def is_tabular_upload(filename: str | None, content_type: str | None) -> bool:
    """True if an upload should go through CSV parsing rather than extraction."""
    return (filename or "").lower().endswith(".csv") or (content_type or "") in CSV_MIME_TYPES


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def build_supplier(
    name: str | None,
    country: str | None,
    industry: str | None,
    legal_name: str | None = None,
    city: str | None = None,
    now: datetime | None = None,
) -> Supplier:
    """Create a freshly screened ACTIVE supplier with a baseline risk score."""
    name = _clean(name) or UNKNOWN_NAME
    country = _clean(country) or UNKNOWN_COUNTRY
    industry = _clean(industry) or DEFAULT_INDUSTRY
    return Supplier(
        id=new_id("s"),
        name=name,
        legal_name=_clean(legal_name),
        country=country,
        city=_clean(city),
        industry=industry,
        risk_score=baseline_risk_score(country, industry),
        sanctions_hit=False,
        status=SupplierStatus.ACTIVE,
        last_screened_at=now or utcnow(),
        news=[],
    )


def supplier_from_document(data: ExtractedSupplier, now: datetime | None = None) -> Supplier:
    return build_supplier(
        name=data.name,
        country=data.country,
        industry=data.industry,
        legal_name=data.legal_name,
        now=now,
    )


def suppliers_from_rows(rows: list[TabularSupplierRow], now: datetime | None = None) -> list[Supplier]:
    return [
        build_supplier(
            name=row.name,
            country=row.country,
            industry=row.industry,
            legal_name=row.legal_name,
            city=row.city,
            now=now,
        )
        for row in rows
    ]


async def ingest_document(
    data: bytes,
    mime_type: str,
    capability: ComplianceCapability,
) -> Supplier:
    """Extract one supplier from an uploaded image or PDF."""
    extracted = await capability.extract_from_document(data, mime_type)
    return supplier_from_document(extracted)


async def ingest_csv(raw_text: str, capability: ComplianceCapability) -> list[Supplier]:
    """Parse a CSV upload into suppliers. Malformed rows are skipped."""
    rows = await capability.parse_tabular_list(raw_text)
    return suppliers_from_rows(rows)
