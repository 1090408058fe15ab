"""
Embedding provider interface.
"""

from __future__ import annotations

from typing import List, Protocol, Sequence


class EmbeddingProvider(Protocol):
    def embed_documents(self, texts: Sequence[str]) -> List[List[float]]:
        ...

    def embed_query(self, text: str) -> List[float]:
        ...


__all__ = ["EmbeddingProvider"]
