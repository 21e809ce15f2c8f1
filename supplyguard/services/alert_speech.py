"""
Alert speech — spoken alert summaries for compliance officers.

The AI service returns raw 16-bit little-endian mono PCM at 24 kHz, base64
encoded. It is decoded here into a WAV file the browser can play directly.
"""

from __future__ import annotations

import base64
import binascii
import io

import numpy as np
import soundfile as sf

from supplyguard.services.ai_client import ComplianceCapability, MalformedResultError

SAMPLE_RATE = 24000
MAX_SPEECH_CHARS = 500


def pcm16_to_samples(pcm: bytes) -> np.ndarray:
    """Convert 16-bit PCM bytes into float32 samples in [-1.0, 1.0)."""
    if len(pcm) % 2:
        raise MalformedResultError("PCM payload has an odd number of bytes")
    return np.frombuffer(pcm, dtype="<i2").astype(np.float32) / 32768.0


def decode_speech(payload: str) -> bytes:
    """Decode a base64 PCM payload into WAV bytes."""
    try:
        pcm = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise MalformedResultError("Speech payload is not valid base64") from exc

    buf = io.BytesIO()
    sf.write(buf, pcm16_to_samples(pcm), SAMPLE_RATE, format="WAV", subtype="PCM_16")
    return buf.getvalue()


async def speak_alert(text: str, capability: ComplianceCapability) -> bytes:
    """Synthesise *text* as WAV audio.

    Text beyond ``MAX_SPEECH_CHARS`` is cut off before it is sent.
    """
    payload = await capability.generate_alert_speech(text[:MAX_SPEECH_CHARS])
    return decode_speech(payload)


def alert_speech_text(title: str, message: str) -> str:
    """Text read out for an alert."""
    return f"{title}. {message}"
