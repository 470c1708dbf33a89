"""
OpenAI embeddings client.
"""

from __future__ import annotations

import logging
import math
from typing import List, Protocol, Sequence

from openai import OpenAI, OpenAIError

from app.config import settings
from app.errors import ConfigurationError, EmbeddingServiceError

DEFAULT_EMBEDDING_MODEL = settings.embedding_model_name
DEFAULT_EMBED_BATCH_SIZE = 64

logger = logging.getLogger(__name__)


class Embedder(Protocol):
    def embed_text(self, text: str) -> List[float]:
        ...


class EmbeddingsClient:
    def __init__(
        self,
        model: str = DEFAULT_EMBEDDING_MODEL,
        batch_size: int = DEFAULT_EMBED_BATCH_SIZE,
        client: OpenAI | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
    ) -> None:
        self.model = model
        self.batch_size = batch_size
        self.timeout = timeout if timeout is not None else settings.embedding_timeout_sec
        self.max_retries = max_retries if max_retries is not None else settings.embedding_max_retries
        self._client = client

    @property
    def client(self) -> OpenAI:
        # Built on first use so a missing key surfaces only when an embedding is requested.
        if self._client is None:
            if not settings.openai_api_key:
                raise ConfigurationError("OPENAI_API_KEY not set in environment")
            self._client = OpenAI(
                api_key=settings.openai_api_key.get_secret_value(),
                timeout=self.timeout,
                max_retries=self.max_retries,
            )
        return self._client

    def embed_texts(self, texts: Sequence[str]) -> List[List[float]]:
        if not texts:
            return []

        client = self.client
        embeddings: List[List[float]] = []
        for i in range(0, len(texts), self.batch_size):
            batch = list(texts[i : i + self.batch_size])
            try:
                response = client.embeddings.create(model=self.model, input=batch)
            except OpenAIError as exc:
                logger.warning("Embedding request failed", extra={"model": self.model, "error": str(exc)})
                raise EmbeddingServiceError(f"Failed to get embedding: {exc}") from exc

            data = getattr(response, "data", None) or []
            if len(data) != len(batch):
                raise EmbeddingServiceError(
                    f"Embedding service returned {len(data)} vectors for {len(batch)} inputs"
                )
            for item in data:
                vector = getattr(item, "embedding", None)
                if not vector:
                    raise EmbeddingServiceError("Embedding service returned an empty vector")
                values = [float(v) for v in vector]
                if not all(math.isfinite(v) for v in values):
                    raise EmbeddingServiceError("Embedding service returned non-finite values")
                embeddings.append(values)
        return embeddings

    def embed_text(self, text: str) -> List[float]:
        return self.embed_texts([text])[0]


__all__ = ["Embedder", "EmbeddingsClient", "DEFAULT_EMBEDDING_MODEL"]
