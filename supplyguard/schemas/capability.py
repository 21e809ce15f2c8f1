"""Result shapes returned by the AI capability.

Field aliases follow the camelCase keys the model is asked to produce.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NewsAnalysis(BaseModel):
    """Free-text news analysis with the search results it was grounded on."""

    text: str
    sources: list[dict[str, Any]] = Field(default_factory=list)


class ValidationResult(BaseModel):
    """AI audit of a set of questionnaire responses."""

    score: int = Field(..., ge=0, le=100)
    feedback: str
    inconsistencies: list[str]


class ExtractedSupplier(_CamelModel):
    """Business details read from an uploaded document."""

    name: str | None = None
    legal_name: str | None = None
    country: str | None = None
    address: str | None = None
    industry: str | None = None
    registration_number: str | None = None


class TabularSupplierRow(_CamelModel):
    """One supplier row mapped from an uploaded CSV."""

    name: str
    legal_name: str | None = None
    country: str
    industry: str
    address: str | None = None
    city: str | None = None
    annual_volume: float | None = None


class ChatMessage(BaseModel):
    """A single turn in an assistant conversation."""

    role: Literal["user", "model"]
    content: str
