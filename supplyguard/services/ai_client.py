"""Client for the generative-AI capability (Gemini REST API)."""

from __future__ import annotations

import base64
import json
from typing import Any, Protocol

import httpx
import structlog
from pydantic import BaseModel, ValidationError

from supplyguard.config import Settings
from supplyguard.schemas.capability import (
    ChatMessage,
    ExtractedSupplier,
    NewsAnalysis,
    TabularSupplierRow,
    ValidationResult,
)

logger = structlog.get_logger()


ASSISTANT_INSTRUCTION = (
    "You are SupplyGuard Assistant, a professional ESG and supply chain compliance "
    "expert. You help users navigate CSDDD and other EU regulations. Be precise, "
    "professional, and focus on risk mitigation."
)

SPEECH_PREFIX = "Attention compliance officer: "

VALIDATION_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "score": {"type": "INTEGER", "description": "Compliance score from 0-100"},
        "feedback": {"type": "STRING", "description": "Summary of red flags or positive findings"},
        "inconsistencies": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "List of identified inconsistencies",
        },
    },
    "required": ["score", "feedback", "inconsistencies"],
}

DOCUMENT_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "name": {"type": "STRING"},
        "legalName": {"type": "STRING"},
        "country": {"type": "STRING"},
        "address": {"type": "STRING"},
        "industry": {"type": "STRING"},
        "registrationNumber": {"type": "STRING"},
    },
}

TABULAR_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "name": {"type": "STRING"},
            "legalName": {"type": "STRING"},
            "country": {"type": "STRING"},
            "industry": {"type": "STRING"},
            "address": {"type": "STRING"},
            "city": {"type": "STRING"},
            "annualVolume": {"type": "NUMBER"},
        },
        "required": ["name", "country", "industry"],
    },
}


class AIServiceError(Exception):
    """Base class for AI capability failures."""


class CapabilityError(AIServiceError):
    """Raised when the AI service is unreachable, unauthorised or errors."""


class MalformedResultError(AIServiceError):
    """Raised when the AI service answers with a payload of the wrong shape."""


class ComplianceCapability(Protocol):
    """Operations the compliance core needs from the AI service."""

    async def analyze_news(self, supplier_name: str) -> NewsAnalysis: ...

    async def validate_responses(self, responses: dict[str, str]) -> ValidationResult: ...

    async def extract_from_document(self, data: bytes, mime_type: str) -> ExtractedSupplier: ...

    async def parse_tabular_list(self, raw_text: str) -> list[TabularSupplierRow]: ...

    async def deep_risk_assessment(self, supplier: dict[str, Any]) -> str: ...

    async def generate_alert_speech(self, text: str) -> str: ...

    async def chat(self, history: list[ChatMessage], message: str) -> str: ...


class GeminiClient:
    """HTTP client for the Gemini ``generateContent`` API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        fast_model: str = "gemini-3-flash-preview",
        pro_model: str = "gemini-3-pro-preview",
        tts_model: str = "gemini-2.5-flash-preview-tts",
        voice: str = "Kore",
        thinking_budget: int = 32768,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.fast_model = fast_model
        self.pro_model = pro_model
        self.tts_model = tts_model
        self.voice = voice
        self.thinking_budget = thinking_budget
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> GeminiClient:
        return cls(
            api_key=settings.gemini_api_key,
            base_url=settings.gemini_base_url,
            fast_model=settings.gemini_fast_model,
            pro_model=settings.gemini_pro_model,
            tts_model=settings.gemini_tts_model,
            voice=settings.gemini_tts_voice,
            thinking_budget=settings.deep_assessment_thinking_budget,
            timeout=settings.ai_timeout_seconds,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def _generate(
        self,
        model: str,
        contents: list[dict[str, Any]],
        generation_config: dict[str, Any] | None = None,
        tools: list[dict[str, Any]] | None = None,
        system_instruction: str | None = None,
    ) -> dict[str, Any]:
        """POST a generateContent request and return the decoded body."""
        if not self.api_key:
            raise CapabilityError("Gemini API key is not configured")

        payload: dict[str, Any] = {"contents": contents}
        if generation_config:
            payload["generationConfig"] = generation_config
        if tools:
            payload["tools"] = tools
        if system_instruction:
            payload["systemInstruction"] = {"parts": [{"text": system_instruction}]}

        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        ) as client:
            try:
                response = await client.post(
                    f"/models/{model}:generateContent",
                    json=payload,
                    headers={"x-goog-api-key": self.api_key},
                )
            except httpx.HTTPError as exc:
                logger.warning("ai_request_failed", model=model, error=str(exc))
                raise CapabilityError(f"Gemini request failed: {exc}") from exc

        if response.status_code != 200:
            logger.warning("ai_request_rejected", model=model, status_code=response.status_code)
            raise CapabilityError(
                f"Gemini returned {response.status_code}: {response.text[:200]}"
            )
        try:
            return response.json()
        except ValueError as exc:
            raise MalformedResultError("Gemini response body is not JSON") from exc

    async def analyze_news(self, supplier_name: str) -> NewsAnalysis:
        """Search-grounded compliance and ESG news analysis."""
        prompt = (
            f'Analyze the latest compliance and ESG related news for the company "{supplier_name}". '
            "Identify potential risks such as labor violations, environmental issues, "
            "corruption, or sanctions."
        )
        data = await self._generate(
            self.fast_model,
            [_user_text(prompt)],
            tools=[{"google_search": {}}],
        )
        candidate = _first_candidate(data)
        metadata = candidate.get("groundingMetadata") or {}
        chunks = metadata.get("groundingChunks") if isinstance(metadata, dict) else None
        sources = [c for c in chunks if isinstance(c, dict)] if isinstance(chunks, list) else []
        return NewsAnalysis(text=_response_text(data), sources=sources)

    async def validate_responses(self, responses: dict[str, str]) -> ValidationResult:
        """Score questionnaire answers for truthfulness, consistency and risk."""
        prompt = (
            "As an ESG compliance auditor, evaluate these questionnaire responses for "
            "truthfulness, consistency, and risk.\n\n"
            f"Responses:\n{json.dumps(responses, indent=2)}\n\n"
            "Provide an overall compliance score (0-100) and highlight any red flags "
            "or inconsistencies."
        )
        data = await self._generate(
            self.pro_model,
            [_user_text(prompt)],
            generation_config=_json_config(VALIDATION_SCHEMA),
        )
        return _parse_model(_response_text(data) or "{}", ValidationResult)

    async def extract_from_document(self, data: bytes, mime_type: str) -> ExtractedSupplier:
        """Read business details from an image or PDF."""
        contents = [{
            "role": "user",
            "parts": [
                {"inlineData": {"mimeType": mime_type, "data": base64.b64encode(data).decode("ascii")}},
                {"text": (
                    "Extract all business information from this document. Return JSON with "
                    "fields: name, legalName, country, address, industry, registrationNumber."
                )},
            ],
        }]
        body = await self._generate(
            self.pro_model,
            contents,
            generation_config=_json_config(DOCUMENT_SCHEMA),
        )
        return _parse_model(_response_text(body) or "{}", ExtractedSupplier)

    async def parse_tabular_list(self, raw_text: str) -> list[TabularSupplierRow]:
        """Map free-form CSV text onto supplier rows.

        Rows that do not fit the expected shape are dropped and logged; only a
        payload that is not a JSON array fails the whole batch.
        """
        prompt = (
            "Parse the following CSV data into a JSON array of supplier objects.\n"
            "Required fields: name, country, industry.\n"
            "Optional fields: legalName, address, city, annualVolume.\n\n"
            f"CSV Data:\n{raw_text}\n\n"
            "Return ONLY a valid JSON array."
        )
        data = await self._generate(
            self.fast_model,
            [_user_text(prompt)],
            generation_config=_json_config(TABULAR_SCHEMA),
        )
        items = _load_json(_response_text(data) or "[]")
        if not isinstance(items, list):
            raise MalformedResultError("Expected a JSON array of supplier rows")

        rows: list[TabularSupplierRow] = []
        for index, item in enumerate(items):
            try:
                rows.append(TabularSupplierRow.model_validate(item))
            except ValidationError as exc:
                logger.warning("tabular_row_dropped", row=index, errors=exc.error_count())
        return rows

    async def deep_risk_assessment(self, supplier: dict[str, Any]) -> str:
        """Long-form CSDDD risk assessment using extended thinking."""
        prompt = (
            "As a professional supply chain compliance officer, perform a deep risk "
            f"assessment for the following supplier:\n{json.dumps(supplier, indent=2, default=str)}\n\n"
            "Evaluate potential CSDDD violations and provide 3-5 concrete action recommendations."
        )
        data = await self._generate(
            self.pro_model,
            [_user_text(prompt)],
            generation_config={"thinkingConfig": {"thinkingBudget": self.thinking_budget}},
        )
        return _response_text(data)

    async def generate_alert_speech(self, text: str) -> str:
        """Return base64 encoded 16-bit PCM speech for *text*."""
        data = await self._generate(
            self.tts_model,
            [_user_text(f"{SPEECH_PREFIX}{text}")],
            generation_config={
                "responseModalities": ["AUDIO"],
                "speechConfig": {
                    "voiceConfig": {"prebuiltVoiceConfig": {"voiceName": self.voice}},
                },
            },
        )
        parts = _candidate_parts(data)
        inline = parts[0].get("inlineData") if parts else None
        audio = inline.get("data") if isinstance(inline, dict) else None
        if not audio or not isinstance(audio, str):
            raise MalformedResultError("Audio generation failed: no inline audio in response")
        return audio

    async def chat(self, history: list[ChatMessage], message: str) -> str:
        """Continue an assistant conversation with a new user message."""
        contents = [
            {"role": turn.role, "parts": [{"text": turn.content}]}
            for turn in history
        ]
        contents.append(_user_text(message))
        data = await self._generate(
            self.pro_model,
            contents,
            system_instruction=ASSISTANT_INSTRUCTION,
        )
        return _response_text(data)


# ---------------------------------------------------------------------------
# Response helpers
# ---------------------------------------------------------------------------


def _user_text(text: str) -> dict[str, Any]:
    return {"role": "user", "parts": [{"text": text}]}


def _json_config(schema: dict[str, Any]) -> dict[str, Any]:
    return {"responseMimeType": "application/json", "responseSchema": schema}


def _first_candidate(data: Any) -> dict[str, Any]:
    candidates = data.get("candidates") if isinstance(data, dict) else None
    if not candidates or not isinstance(candidates, list):
        raise MalformedResultError("Gemini response contained no candidates")
    if not isinstance(candidates[0], dict):
        raise MalformedResultError("Gemini candidate is not an object")
    return candidates[0]


def _candidate_parts(data: Any) -> list[dict[str, Any]]:
    """Content parts of the first candidate; every part must be an object."""
    content = _first_candidate(data).get("content") or {}
    parts = content.get("parts", []) if isinstance(content, dict) else None
    if not isinstance(parts, list) or not all(isinstance(p, dict) for p in parts):
        raise MalformedResultError("Gemini candidate content has unexpected parts")
    return parts


def _response_text(data: Any) -> str:
    """Concatenate the text parts of the first candidate."""
    texts = []
    for part in _candidate_parts(data):
        if part.get("thought") or "text" not in part:
            continue
        if not isinstance(part["text"], str):
            raise MalformedResultError("Gemini text part is not a string")
        texts.append(part["text"])
    return "".join(texts)


def _load_json(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedResultError(f"Gemini returned invalid JSON: {exc.msg}") from exc


def _parse_model(text: str, model_cls: type[BaseModel]) -> Any:
    payload = _load_json(text)
    try:
        return model_cls.model_validate(payload)
    except ValidationError as exc:
        raise MalformedResultError(
            f"Gemini result does not match {model_cls.__name__}: {exc.error_count()} error(s)"
        ) from exc
