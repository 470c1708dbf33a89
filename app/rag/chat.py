"""
Chat turn with optional syllabus context.

Retrieval is best effort here: any ``RetrievalError`` is logged and the turn is
answered without injected context.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

from app.errors import RetrievalError
from app.llm.client import ChatModel
from app.models.schemas import ChatMessage
from app.rag.pipeline import RetrievalService
from app.rag.prompts import SYSTEM_PROMPT, build_context_suffix

logger = logging.getLogger(__name__)


@dataclass
class ChatReply:
    answer: str
    context_used: bool
    rag_error: str | None = None


class ChatService:
    def __init__(
        self,
        retrieval_service: RetrievalService,
        llm_client: ChatModel,
        system_prompt: str = SYSTEM_PROMPT,
    ) -> None:
        self.retrieval_service = retrieval_service
        self.llm_client = llm_client
        self.system_prompt = system_prompt

    def reply(self, messages: Sequence[ChatMessage], model: str | None = None) -> ChatReply:
        question = self.last_user_text(messages)
        context, rag_error = self._retrieve_context(question)

        system = self.system_prompt + build_context_suffix(context)
        payload: List[Dict[str, Any]] = [{"role": "system", "content": system}]
        payload.extend({"role": m.role, "content": m.content} for m in messages if m.role != "system")

        answer = self.llm_client.chat(payload, model=model)
        return ChatReply(answer=answer, context_used=bool(context), rag_error=rag_error)

    @staticmethod
    def last_user_text(messages: Sequence[ChatMessage]) -> str:
        for message in reversed(messages):
            if message.role == "user":
                return message.content
        return ""

    def _retrieve_context(self, question: str) -> tuple[str, str | None]:
        if not question.strip():
            logger.info("User message is empty, skipping RAG")
            return "", None

        try:
            result = self.retrieval_service.retrieve(question)
        except RetrievalError as exc:
            logger.warning("RAG unavailable, answering without context", extra={"kind": exc.kind, "error": exc.message})
            return "", exc.kind

        if not result.context:
            logger.info("RAG returned no context")
        return result.context, None


__all__ = ["ChatReply", "ChatService"]
