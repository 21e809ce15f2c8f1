"""Compliance assistant chat endpoints."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException

from supplyguard.dependencies import get_capability
from supplyguard.models import new_id
from supplyguard.schemas.capability import ChatMessage
from supplyguard.schemas.chat import GREETING, ChatReply, ChatRequest, ChatSessionResponse
from supplyguard.services.ai_client import AIServiceError, ComplianceCapability
from supplyguard.store import data_store

logger = structlog.get_logger()

router = APIRouter(prefix="/api/chat", tags=["chat"])


def _transcript_or_404(session_id: str) -> list[ChatMessage]:
    transcript = data_store.get_chat(session_id)
    if transcript is None:
        raise HTTPException(status_code=404, detail=f"Chat session '{session_id}' not found")
    return transcript


@router.post("/sessions", response_model=ChatSessionResponse)
async def start_session() -> ChatSessionResponse:
    """Open a new assistant conversation."""
    session_id = new_id("chat")
    data_store.append_chat(session_id, ChatMessage(role="model", content=GREETING))
    return ChatSessionResponse(session_id=session_id, messages=data_store.get_chat(session_id))


@router.get("/sessions/{session_id}", response_model=ChatSessionResponse)
async def get_session(session_id: str) -> ChatSessionResponse:
    return ChatSessionResponse(session_id=session_id, messages=_transcript_or_404(session_id))


@router.post("/sessions/{session_id}/messages", response_model=ChatReply)
async def send_message(
    session_id: str,
    request: ChatRequest,
    capability: ComplianceCapability = Depends(get_capability),
) -> ChatReply:
    """Send a message to the assistant and return its reply."""
    transcript = _transcript_or_404(session_id)
    message = request.message.strip()
    if not message:
        raise HTTPException(status_code=422, detail="Message must not be blank")

    if session_id in data_store.chats_in_flight:
        raise HTTPException(
            status_code=409,
            detail="The assistant is still answering the previous message",
        )

    # The greeting is shown to the user only, never sent to the model
    history = transcript[1:]
    data_store.chats_in_flight.add(session_id)
    try:
        text = await capability.chat(history, message)
    except AIServiceError as exc:
        logger.warning("chat_failed", session_id=session_id, error=str(exc))
        raise HTTPException(
            status_code=502,
            detail="An error occurred. Please verify your API key and network connection.",
        ) from exc
    finally:
        data_store.chats_in_flight.discard(session_id)

    reply = ChatMessage(role="model", content=text or "I'm sorry, I couldn't process that.")
    data_store.append_chat(session_id, ChatMessage(role="user", content=message), reply)
    return ChatReply(session_id=session_id, reply=reply)
