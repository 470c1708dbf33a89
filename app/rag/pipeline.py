"""
Retrieval pipeline: validate question, load corpus, embed, rank, assemble context.
"""

from __future__ import annotations

import logging
from typing import Any

from app.config import settings
from app.corpus.base import CorpusStore
from app.embeddings.client import Embedder
from app.errors import EmbeddingServiceError, InvalidInput
from app.models.schemas import RagResponse
from app.rag.context import assemble_context
from app.rag.similarity import rank_chunks

logger = logging.getLogger(__name__)


class RetrievalService:
    """Stateless top-K retrieval over the precomputed syllabus corpus."""

    def __init__(
        self,
        corpus_store: CorpusStore,
        embedder: Embedder,
        logger_: logging.Logger | None = None,
        request_id: str | None = None,
    ) -> None:
        self.corpus_store = corpus_store
        self.embedder = embedder
        self.logger = logger_ or logging.getLogger(__name__)
        self.request_id = request_id

    # --- Public API ---
    def retrieve(self, question: Any, top_k: Any = None) -> RagResponse:
        """
        Return the ``top_k`` chunks most similar to ``question`` and their joined context.

        Raises ``InvalidInput`` before any remote call when the question is not a
        non-empty string or ``top_k`` is not a positive integer.
        """
        question = self.validate_question(question)
        top_k = self.validate_top_k(top_k)

        chunks = self.corpus_store.load()
        query_vector = self.embedder.embed_text(question)

        try:
            ranked = rank_chunks(query_vector, chunks, top_k=top_k)
        except ValueError as exc:
            raise EmbeddingServiceError(f"Unusable query embedding: {exc}") from exc

        self.logger.info(
            "Retrieved chunks",
            extra={
                "requested": top_k,
                "corpus_size": len(chunks),
                "returned": len(ranked),
                "top_score": round(ranked[0].similarity, 3) if ranked else None,
                "request_id": self.request_id,
                "results": [
                    {"chunk_id": r.chunk.chunk_id, "score": round(r.similarity, 3)} for r in ranked
                ],
            },
        )
        return assemble_context(question, ranked)

    # --- Steps ---
    @staticmethod
    def validate_question(question: Any) -> str:
        if not isinstance(question, str) or not question.strip():
            raise InvalidInput("Missing or invalid question")
        return question

    @staticmethod
    def validate_top_k(top_k: Any) -> int:
        if top_k is None:
            return settings.default_top_k
        if isinstance(top_k, bool) or not isinstance(top_k, int) or top_k <= 0:
            raise InvalidInput("topK must be a positive integer")
        return top_k


__all__ = ["RetrievalService"]
