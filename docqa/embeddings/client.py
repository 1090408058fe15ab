"""
OpenAI embeddings client.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from openai import OpenAI, OpenAIError

from docqa.config import Settings
from docqa.errors import EmbeddingProviderError

DEFAULT_EMBEDDING_MODEL = "text-embedding-3-small"
DEFAULT_EMBED_BATCH_SIZE = 64

logger = logging.getLogger(__name__)


class EmbeddingsClient:
    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_EMBEDDING_MODEL,
        batch_size: int = DEFAULT_EMBED_BATCH_SIZE,
        timeout: float | None = None,
        client: OpenAI | None = None,
    ) -> None:
        self.model = model
        self.batch_size = batch_size
        self.client = client or OpenAI(api_key=api_key, timeout=timeout)

    @classmethod
    def from_settings(cls, settings: Settings) -> "EmbeddingsClient":
        api_key = settings.openai_api_key.get_secret_value() if settings.openai_api_key else None
        return cls(
            api_key=api_key,
            model=settings.embedding_model_name,
            batch_size=settings.embedding_batch_size,
            timeout=settings.provider_timeout_sec,
        )

    def embed_documents(self, texts: Sequence[str]) -> List[List[float]]:
        """
        Embed all texts, batching requests. Either every text gets a vector or
        EmbeddingProviderError is raised; partial results are never returned.
        """
        if not texts:
            return []

        embeddings: List[List[float]] = []
        for i in range(0, len(texts), self.batch_size):
            batch = list(texts[i : i + self.batch_size])
            try:
                response = self.client.embeddings.create(model=self.model, input=batch)
            except OpenAIError as exc:
                logger.error("Embedding request failed", extra={"offset": i, "batch": len(batch)})
                raise EmbeddingProviderError(f"Embedding request failed: {exc}") from exc
            embeddings.extend([item.embedding for item in response.data])

        if len(embeddings) != len(texts):
            raise EmbeddingProviderError(
                f"Embedding provider returned {len(embeddings)} vectors for {len(texts)} texts"
            )
        return embeddings

    def embed_query(self, text: str) -> List[float]:
        vectors = self.embed_documents([text])
        return vectors[0]


__all__ = ["EmbeddingsClient", "DEFAULT_EMBEDDING_MODEL"]
