"""Schemas for the compliance assistant endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field

from supplyguard.schemas.capability import ChatMessage

GREETING = (
    "Hello! I am your SupplyGuard AI assistant. How can I help you with supply "
    "chain compliance or CSDDD regulations today?"
)


class ChatSessionResponse(BaseModel):
    session_id: str
    messages: list[ChatMessage]


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=4000)


class ChatReply(BaseModel):
    session_id: str
    reply: ChatMessage
