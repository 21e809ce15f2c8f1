"""Shared base for SupplyGuard domain models."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)


def new_id(prefix: str) -> str:
    """Return a short random identifier such as ``q-1f3a9c2b``."""
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


class DomainModel(BaseModel):
    """Immutable domain record. Updates go through ``model_copy(update=...)``."""

    model_config = ConfigDict(frozen=True)
