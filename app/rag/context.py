"""
Context assembly: ranked chunks -> prompt-ready context string.
"""

from __future__ import annotations

from typing import Sequence

from app.models.schemas import RagResponse, RetrievedChunk
from app.rag.similarity import ScoredChunk

CONTEXT_SEPARATOR = "\n---\n"


def assemble_context(question: str, ranked: Sequence[ScoredChunk]) -> RagResponse:
    """Join chunk texts in ranked order; embeddings are not carried into the result."""
    top_chunks = [
        RetrievedChunk(chunk_id=item.chunk.chunk_id, text=item.chunk.text, similarity=item.similarity)
        for item in ranked
    ]
    context = CONTEXT_SEPARATOR.join(chunk.text for chunk in top_chunks)
    return RagResponse(top_chunks=top_chunks, context=context, question=question)


__all__ = ["CONTEXT_SEPARATOR", "assemble_context"]
