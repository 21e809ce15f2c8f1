"""Gemini client tests — request shape, result parsing and failure mapping."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from supplyguard.config import Settings
from supplyguard.schemas.capability import ChatMessage
from supplyguard.services.ai_client import (
    ASSISTANT_INSTRUCTION,
    CapabilityError,
    GeminiClient,
    MalformedResultError,
)


def _text_response(text: str, **candidate_extra) -> dict:
    candidate = {"content": {"role": "model", "parts": [{"text": text}]}}
    candidate.update(candidate_extra)
    return {"candidates": [candidate]}


class Recorder:
    """Mock transport handler that records requests and replays a canned reply."""

    def __init__(self, body=None, status_code: int = 200, raise_exc: Exception | None = None) -> None:
        self.body = body if body is not None else _text_response("")
        self.status_code = status_code
        self.raise_exc = raise_exc
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.raise_exc is not None:
            raise self.raise_exc
        if isinstance(self.body, (bytes, str)):
            return httpx.Response(self.status_code, content=self.body)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def payload(self) -> dict:
        return json.loads(self.requests[-1].content)


def _client(recorder: Recorder, api_key: str = "test-key") -> GeminiClient:
    return GeminiClient(api_key=api_key, transport=httpx.MockTransport(recorder))


# ─── Transport and status handling ──────────────────────────────────────────

class TestTransport:

    def test_missing_api_key_is_capability_error(self):
        recorder = Recorder()
        client = _client(recorder, api_key="")
        with pytest.raises(CapabilityError):
            asyncio.run(client.analyze_news("Acme"))
        assert recorder.requests == []

    def test_sends_key_header_and_model_path(self):
        recorder = Recorder(_text_response("fine"))
        asyncio.run(_client(recorder).analyze_news("Acme"))
        request = recorder.requests[0]
        assert request.headers["x-goog-api-key"] == "test-key"
        assert request.url.path.endswith("/models/gemini-3-flash-preview:generateContent")

    def test_http_error_status_is_capability_error(self):
        recorder = Recorder({"error": {"message": "denied"}}, status_code=403)
        with pytest.raises(CapabilityError):
            asyncio.run(_client(recorder).analyze_news("Acme"))

    def test_network_failure_is_capability_error(self):
        recorder = Recorder(raise_exc=httpx.ConnectError("unreachable"))
        with pytest.raises(CapabilityError):
            asyncio.run(_client(recorder).analyze_news("Acme"))

    def test_non_json_body_is_malformed(self):
        recorder = Recorder(b"<html>oops</html>")
        with pytest.raises(MalformedResultError):
            asyncio.run(_client(recorder).analyze_news("Acme"))

    def test_no_candidates_is_malformed(self):
        recorder = Recorder({"candidates": []})
        with pytest.raises(MalformedResultError):
            asyncio.run(_client(recorder).analyze_news("Acme"))

    def test_from_settings(self):
        settings = Settings(gemini_api_key="abc", gemini_pro_model="pro-x", ai_timeout_seconds=5)
        client = GeminiClient.from_settings(settings)
        assert client.is_configured
        assert client.pro_model == "pro-x"
        assert client.timeout == 5


class TestUnexpectedResponseShape:
    """Well-formed JSON in the wrong shape is a malformed result, never a crash."""

    BODIES = [
        [],
        {"candidates": ["oops"]},
        {"candidates": {"content": {}}},
        {"candidates": [{"content": "text"}]},
        {"candidates": [{"content": {"parts": "text"}}]},
        {"candidates": [{"content": {"parts": ["text"]}}]},
        {"candidates": [{"content": {"parts": [{"text": None}]}}]},
        {"candidates": [{"content": {"parts": [{"text": 42}]}}]},
    ]

    @pytest.mark.parametrize("body", BODIES)
    def test_validate_responses(self, body):
        recorder = Recorder(body)
        with pytest.raises(MalformedResultError):
            asyncio.run(_client(recorder).validate_responses({"q1": "yes"}))

    @pytest.mark.parametrize("body", BODIES)
    def test_chat(self, body):
        recorder = Recorder(body)
        with pytest.raises(MalformedResultError):
            asyncio.run(_client(recorder).chat([], "Hello"))

    @pytest.mark.parametrize("part", [
        {"inlineData": "AAAA"},
        {"inlineData": {"data": None}},
        {"inlineData": {"data": 7}},
    ])
    def test_alert_speech(self, part):
        recorder = Recorder({"candidates": [{"content": {"parts": [part]}}]})
        with pytest.raises(MalformedResultError):
            asyncio.run(_client(recorder).generate_alert_speech("Sanctions hit"))

    def test_news_ignores_bad_grounding_metadata(self):
        recorder = Recorder(_text_response("Nothing found.", groundingMetadata="n/a"))
        result = asyncio.run(_client(recorder).analyze_news("Acme"))
        assert result.text == "Nothing found."
        assert result.sources == []

    def test_news_keeps_only_object_sources(self):
        chunks = [{"web": {"uri": "https://example.com"}}, "stray", None]
        recorder = Recorder(_text_response("ok", groundingMetadata={"groundingChunks": chunks}))
        result = asyncio.run(_client(recorder).analyze_news("Acme"))
        assert result.sources == [{"web": {"uri": "https://example.com"}}]


# ─── Operations ─────────────────────────────────────────────────────────────

class TestAnalyzeNews:

    def test_returns_text_and_grounding_sources(self):
        chunks = [{"web": {"uri": "https://example.com", "title": "Example"}}]
        recorder = Recorder(_text_response(
            "Labor violations reported.",
            groundingMetadata={"groundingChunks": chunks},
        ))
        result = asyncio.run(_client(recorder).analyze_news("Acme Textiles"))
        assert result.text == "Labor violations reported."
        assert result.sources == chunks
        assert recorder.payload["tools"] == [{"google_search": {}}]
        assert "Acme Textiles" in recorder.payload["contents"][0]["parts"][0]["text"]


class TestValidateResponses:

    def test_parses_structured_result(self):
        body = json.dumps({"score": 72, "feedback": "Mostly consistent", "inconsistencies": ["q2 vs q3"]})
        recorder = Recorder(_text_response(body))
        result = asyncio.run(_client(recorder).validate_responses({"q1": "yes"}))
        assert result.score == 72
        assert result.inconsistencies == ["q2 vs q3"]
        config = recorder.payload["generationConfig"]
        assert config["responseMimeType"] == "application/json"
        assert config["responseSchema"]["required"] == ["score", "feedback", "inconsistencies"]

    def test_invalid_json_is_malformed(self):
        recorder = Recorder(_text_response("score: high"))
        with pytest.raises(MalformedResultError):
            asyncio.run(_client(recorder).validate_responses({"q1": "yes"}))

    def test_missing_fields_are_malformed(self):
        recorder = Recorder(_text_response(json.dumps({"score": 50})))
        with pytest.raises(MalformedResultError):
            asyncio.run(_client(recorder).validate_responses({"q1": "yes"}))

    def test_out_of_range_score_is_malformed(self):
        body = json.dumps({"score": 140, "feedback": "x", "inconsistencies": []})
        recorder = Recorder(_text_response(body))
        with pytest.raises(MalformedResultError):
            asyncio.run(_client(recorder).validate_responses({"q1": "yes"}))

    def test_empty_text_is_malformed(self):
        recorder = Recorder(_text_response(""))
        with pytest.raises(MalformedResultError):
            asyncio.run(_client(recorder).validate_responses({"q1": "yes"}))


class TestExtractFromDocument:

    def test_maps_camel_case_fields(self):
        body = json.dumps({
            "name": "Nordic Parts",
            "legalName": "Nordic Parts AB",
            "country": "SE",
            "industry": "Automotive",
            "registrationNumber": "556000-0000",
        })
        recorder = Recorder(_text_response(body))
        result = asyncio.run(_client(recorder).extract_from_document(b"%PDF-1.4", "application/pdf"))
        assert result.legal_name == "Nordic Parts AB"
        assert result.registration_number == "556000-0000"
        inline = recorder.payload["contents"][0]["parts"][0]["inlineData"]
        assert inline["mimeType"] == "application/pdf"
        assert inline["data"] == "JVBERi0xLjQ="


class TestParseTabularList:

    def test_drops_malformed_rows(self):
        rows = [
            {"name": "Dhaka Knitwear", "country": "BD", "industry": "Textiles", "annualVolume": 120000},
            {"name": "No Country Ltd", "industry": "Textiles"},
            "not an object",
            {"name": "Zurich Soft", "country": "CH", "industry": "Software", "city": "Zurich"},
        ]
        recorder = Recorder(_text_response(json.dumps(rows)))
        result = asyncio.run(_client(recorder).parse_tabular_list("name,country\n..."))
        assert [r.name for r in result] == ["Dhaka Knitwear", "Zurich Soft"]
        assert result[0].annual_volume == 120000
        assert result[1].city == "Zurich"

    def test_non_array_is_malformed(self):
        recorder = Recorder(_text_response(json.dumps({"name": "Solo"})))
        with pytest.raises(MalformedResultError):
            asyncio.run(_client(recorder).parse_tabular_list("name\nSolo"))

    def test_empty_text_gives_empty_list(self):
        recorder = Recorder(_text_response(""))
        assert asyncio.run(_client(recorder).parse_tabular_list("")) == []


class TestDeepAssessment:

    def test_uses_thinking_budget_and_skips_thought_parts(self):
        body = {"candidates": [{"content": {"parts": [
            {"text": "internal reasoning", "thought": True},
            {"text": "Recommendation: audit."},
        ]}}]}
        recorder = Recorder(body)
        result = asyncio.run(_client(recorder).deep_risk_assessment({"name": "Acme"}))
        assert result == "Recommendation: audit."
        assert recorder.payload["generationConfig"]["thinkingConfig"]["thinkingBudget"] == 32768


class TestAlertSpeech:

    def test_returns_inline_audio(self):
        body = {"candidates": [{"content": {"parts": [
            {"inlineData": {"mimeType": "audio/L16;rate=24000", "data": "AAAA"}},
        ]}}]}
        recorder = Recorder(body)
        assert asyncio.run(_client(recorder).generate_alert_speech("Sanctions hit")) == "AAAA"
        payload = recorder.payload
        assert payload["contents"][0]["parts"][0]["text"].startswith("Attention compliance officer: ")
        voice = payload["generationConfig"]["speechConfig"]["voiceConfig"]["prebuiltVoiceConfig"]
        assert voice["voiceName"] == "Kore"

    def test_missing_audio_is_malformed(self):
        recorder = Recorder(_text_response("no audio"))
        with pytest.raises(MalformedResultError):
            asyncio.run(_client(recorder).generate_alert_speech("Sanctions hit"))


class TestChat:

    def test_sends_history_and_system_instruction(self):
        recorder = Recorder(_text_response("Article 6 covers due diligence."))
        history = [
            ChatMessage(role="user", content="What is CSDDD?"),
            ChatMessage(role="model", content="An EU directive."),
        ]
        reply = asyncio.run(_client(recorder).chat(history, "Which article?"))
        assert reply == "Article 6 covers due diligence."
        payload = recorder.payload
        assert [c["role"] for c in payload["contents"]] == ["user", "model", "user"]
        assert payload["contents"][-1]["parts"][0]["text"] == "Which article?"
        assert payload["systemInstruction"]["parts"][0]["text"] == ASSISTANT_INSTRUCTION
