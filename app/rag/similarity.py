"""
Brute-force cosine similarity ranking over the in-memory corpus.

A zero-magnitude vector (query or chunk) scores 0.0 instead of producing NaN.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from app.config import settings
from app.corpus.base import Chunk


@dataclass(frozen=True)
class ScoredChunk:
    chunk: Chunk
    similarity: float


def _cosine_scores(query_vector: Sequence[float], matrix: np.ndarray) -> np.ndarray:
    """Cosine similarity of ``query_vector`` against every row of ``matrix``."""
    query = np.asarray(query_vector, dtype=np.float64)
    if query.ndim != 1 or query.shape[0] != matrix.shape[1]:
        raise ValueError(
            f"Query embedding dimension {query.shape[-1] if query.ndim else 0} "
            f"does not match corpus dimension {matrix.shape[1]}"
        )

    denominators = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
    dots = matrix @ query
    scores = np.divide(dots, denominators, out=np.zeros_like(dots), where=denominators != 0.0)
    return np.clip(scores, -1.0, 1.0)


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    row = np.asarray(b, dtype=np.float64).reshape(1, -1)
    return float(_cosine_scores(a, row)[0])


def rank_chunks(query_vector: Sequence[float], chunks: Sequence[Chunk], top_k: int | None = None) -> List[ScoredChunk]:
    """
    Score every chunk against the query and return the best ``top_k``.

    Sorting is stable, so chunks with equal similarity keep their corpus order.
    A ``top_k`` larger than the corpus returns the whole corpus, sorted.
    """
    if top_k is None:
        top_k = settings.default_top_k
    if not chunks or top_k <= 0:
        return []

    matrix = np.asarray([chunk.embedding for chunk in chunks], dtype=np.float64)
    scores = _cosine_scores(query_vector, matrix)

    order = np.argsort(-scores, kind="stable")[:top_k]
    return [ScoredChunk(chunk=chunks[i], similarity=float(scores[i])) for i in order]


__all__ = ["ScoredChunk", "cosine_similarity", "rank_chunks"]
