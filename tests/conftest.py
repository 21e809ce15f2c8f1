"""Shared test fixtures for SupplyGuard test suite."""

from __future__ import annotations

import base64
from datetime import datetime, timezone
from typing import Any

import numpy as np
import pytest
from fastapi.testclient import TestClient

from supplyguard.app import create_app
from supplyguard.config import Settings
from supplyguard.models import OpenQuestionnaire, QuestionnaireTier, Supplier
from supplyguard.schemas.capability import (
    ChatMessage,
    ExtractedSupplier,
    NewsAnalysis,
    TabularSupplierRow,
    ValidationResult,
)
from supplyguard.store import data_store

SENT_AT = datetime(2025, 1, 6, 9, 0, tzinfo=timezone.utc)

SPEECH_SAMPLES = np.array([0, 16384, -16384, 32767, -32768], dtype="<i2")


class FakeCapability:
    """Deterministic stand-in for the Gemini client.

    Set ``fail_with`` to an exception instance to make every call raise it.
    """

    is_configured = True

    def __init__(self) -> None:
        self.fail_with: Exception | None = None
        self.calls: list[tuple[str, Any]] = []
        self.validation = ValidationResult(score=85, feedback="ok", inconsistencies=[])
        self.news = NewsAnalysis(
            text="No material compliance news in the last 90 days.",
            sources=[{"web": {"uri": "https://news.example.com/a", "title": "Example"}}],
        )
        self.extracted = ExtractedSupplier(
            name="Nordic Parts AB",
            legal_name="Nordic Parts Aktiebolag",
            country="DE",
            industry="Automotive",
            registration_number="HRB 12345",
        )
        self.rows = [
            TabularSupplierRow(name="Dhaka Knitwear", country="BD", industry="Textiles", city="Dhaka"),
            TabularSupplierRow(name="Zurich Soft AG", country="CH", industry="Software"),
        ]
        self.assessment = "1. Commission an on-site labour audit."
        self.speech = base64.b64encode(SPEECH_SAMPLES.tobytes()).decode("ascii")
        self.chat_reply = "CSDDD applies to companies above the employee threshold."

    def _record(self, name: str, payload: Any) -> None:
        self.calls.append((name, payload))
        if self.fail_with is not None:
            raise self.fail_with

    async def analyze_news(self, supplier_name: str) -> NewsAnalysis:
        self._record("analyze_news", supplier_name)
        return self.news

    async def validate_responses(self, responses: dict[str, str]) -> ValidationResult:
        self._record("validate_responses", responses)
        return self.validation

    async def extract_from_document(self, data: bytes, mime_type: str) -> ExtractedSupplier:
        self._record("extract_from_document", mime_type)
        return self.extracted

    async def parse_tabular_list(self, raw_text: str) -> list[TabularSupplierRow]:
        self._record("parse_tabular_list", raw_text)
        return self.rows

    async def deep_risk_assessment(self, supplier: dict[str, Any]) -> str:
        self._record("deep_risk_assessment", supplier)
        return self.assessment

    async def generate_alert_speech(self, text: str) -> str:
        self._record("generate_alert_speech", text)
        return self.speech

    async def chat(self, history: list[ChatMessage], message: str) -> str:
        self._record("chat", (list(history), message))
        return self.chat_reply


def _test_settings() -> Settings:
    """Return settings suitable for testing."""
    return Settings(
        environment="development",
        debug=True,
        log_format="console",
        rate_limit_default="1000/minute",
        allowed_origins="http://localhost:3000,http://localhost:5173",
        gemini_api_key="",
    )


@pytest.fixture
def settings():
    """Test settings."""
    return _test_settings()


@pytest.fixture
def capability():
    """Fake AI capability."""
    return FakeCapability()


@pytest.fixture
def app(settings, capability):
    """Create a fresh FastAPI app wired to the fake capability."""
    return create_app(settings, capability=capability)


@pytest.fixture
def client(app):
    """HTTP test client."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def reset_store():
    """Reset the global data store to the mock session before each test."""
    data_store.reset()
    data_store.seed()
    yield
    data_store.reset()


@pytest.fixture
def new_supplier():
    """A supplier with no questionnaire yet, scored in the COMPREHENSIVE band."""
    return Supplier(
        id="s-test",
        name="Acme Textiles Ltd",
        country="BD",
        industry="Textiles",
        risk_score=78,
    )


@pytest.fixture
def sent_supplier(new_supplier):
    """The same supplier with a questionnaire awaiting answers."""
    return new_supplier.model_copy(update={
        "questionnaire": OpenQuestionnaire(
            id="q-test",
            tier=QuestionnaireTier.COMPREHENSIVE,
            sent_at=SENT_AT,
        ),
    })
