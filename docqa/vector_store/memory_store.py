"""
Process-resident chunk store.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List, Sequence, Tuple

from docqa.vector_store.base import ChunkStore, StoredChunk, make_chunk_id

logger = logging.getLogger(__name__)


class InMemoryChunkStore(ChunkStore):
    """
    Holds embedded chunks keyed by chunk id, in insertion order.

    All access goes through a single lock so a search snapshot never sees a
    half-applied batch and a delete never races an enumeration.
    """

    def __init__(self) -> None:
        self._chunks: Dict[str, StoredChunk] = {}
        self._lock = threading.Lock()

    def upsert_chunks(
        self,
        document_id: str,
        chunks: Sequence[Tuple[str, List[float]]],
        metadata: Dict[str, Any] | None = None,
    ) -> int:
        """
        Store `(content, embedding)` pairs under ids `{document_id}-chunk-{index}`.

        An existing id is removed before the new record is inserted, so a
        replaced chunk moves to the end of the insertion order. Chunks of the
        same document beyond the new batch length are dropped, so the document
        ends up with exactly `len(chunks)` chunks. Returns the number of ids
        that were not present before.
        """
        extra = metadata or {}
        records: List[StoredChunk] = []
        for index, (content, embedding) in enumerate(chunks):
            chunk_metadata: Dict[str, Any] = {**extra, "documentId": document_id, "chunkIndex": index}
            original_name = extra.get("originalName")
            if original_name is not None:
                chunk_metadata["source"] = f"{original_name}#chunk-{index}"
            records.append(
                StoredChunk(
                    id=make_chunk_id(document_id, index),
                    content=content,
                    embedding=list(embedding),
                    metadata=chunk_metadata,
                )
            )

        inserted = 0
        with self._lock:
            stale = [
                chunk_id
                for chunk_id, chunk in self._chunks.items()
                if chunk.document_id == document_id and chunk.metadata["chunkIndex"] >= len(records)
            ]
            for chunk_id in stale:
                del self._chunks[chunk_id]
            for record in records:
                if self._chunks.pop(record.id, None) is None:
                    inserted += 1
                self._chunks[record.id] = record
            total = len(self._chunks)

        logger.info(
            "Upserted chunks",
            extra={
                "document_id": document_id,
                "count": len(records),
                "inserted": inserted,
                "replaced": len(records) - inserted,
                "dropped": len(stale),
                "total": total,
            },
        )
        return inserted

    def delete_by_document(self, document_id: str) -> int:
        with self._lock:
            doomed = [chunk_id for chunk_id, chunk in self._chunks.items() if chunk.document_id == document_id]
            for chunk_id in doomed:
                del self._chunks[chunk_id]

        logger.info("Deleted document chunks", extra={"document_id": document_id, "removed": len(doomed)})
        return len(doomed)

    def size(self) -> int:
        with self._lock:
            return len(self._chunks)

    def all(self) -> List[StoredChunk]:
        """Snapshot of every stored chunk, in insertion order."""
        with self._lock:
            return list(self._chunks.values())

    def clear(self) -> None:
        with self._lock:
            self._chunks.clear()
        logger.info("In-memory chunk store cleared")


__all__ = ["InMemoryChunkStore"]
