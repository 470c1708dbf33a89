from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr


# RAG
class RagRequest(BaseModel):
    """Question to retrieve syllabus context for."""

    model_config = ConfigDict(populate_by_name=True)

    question: StrictStr = Field(..., min_length=1, description="User question")
    top_k: StrictInt | None = Field(
        default=None,
        gt=0,
        alias="topK",
        description="Override the number of chunks to return",
    )


class RetrievedChunk(BaseModel):
    chunk_id: int
    text: str
    similarity: float


class RagResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    top_chunks: List[RetrievedChunk] = Field(..., alias="topChunks")
    context: str
    question: str


class CorpusStatus(BaseModel):
    available: bool
    path: str
    chunk_count: int = Field(..., ge=0)
    dimension: int | None = None
    message: str | None = None


class ErrorResponse(BaseModel):
    error: str
    detail: str


# Chat
class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    messages: List[ChatMessage] = Field(..., min_length=1)
    model: str | None = Field(default=None, description="Override the chat model")


class ChatResponse(BaseModel):
    answer: str
    context_used: bool
    rag_error: str | None = None


__all__ = [
    "RagRequest",
    "RetrievedChunk",
    "RagResponse",
    "CorpusStatus",
    "ErrorResponse",
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
]
