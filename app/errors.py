"""
Error taxonomy of the retrieval core.

Every failure raised by the corpus loader, the embedder or the pipeline is a
``RetrievalError`` subclass, so callers that want to degrade gracefully can
catch one type and still tell the kinds apart.
"""

from __future__ import annotations

from typing import Dict


class RetrievalError(Exception):
    kind: str = "retrieval_error"
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_payload(self) -> Dict[str, str]:
        return {"error": self.kind, "detail": self.message}


class InvalidInput(RetrievalError):
    """Missing, empty or non-string question, or a non-positive top_k."""

    kind = "invalid_input"
    status_code = 400


class ConfigurationError(RetrievalError):
    """A required setting (the embedding API credential) is absent."""

    kind = "configuration_error"
    status_code = 500


class EmbeddingServiceError(RetrievalError):
    """The remote embedding call failed or returned an unusable vector."""

    kind = "embedding_service_error"
    status_code = 502


class CorpusUnavailable(RetrievalError):
    """The corpus file is missing, unreadable or malformed."""

    kind = "corpus_unavailable"
    status_code = 500


__all__ = [
    "RetrievalError",
    "InvalidInput",
    "ConfigurationError",
    "EmbeddingServiceError",
    "CorpusUnavailable",
]
