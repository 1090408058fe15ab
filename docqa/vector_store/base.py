"""
Vector store interface and shared types.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Protocol, Sequence, Tuple


@dataclass
class StoredChunk:
    id: str
    content: str
    embedding: List[float]
    metadata: Dict[str, Any]

    @property
    def document_id(self) -> str:
        return self.metadata["documentId"]


def make_chunk_id(document_id: str, index: int) -> str:
    return f"{document_id}-chunk-{index}"


class ChunkStore(Protocol):
    def upsert_chunks(
        self,
        document_id: str,
        chunks: Sequence[Tuple[str, List[float]]],
        metadata: Dict[str, Any] | None = None,
    ) -> int:
        ...

    def delete_by_document(self, document_id: str) -> int:
        ...

    def size(self) -> int:
        ...

    def all(self) -> List[StoredChunk]:
        ...

    def clear(self) -> None:
        ...


__all__ = ["StoredChunk", "ChunkStore", "make_chunk_id"]
