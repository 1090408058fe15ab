"""
Retrieval service: the single entry point to the chunk store.

One instance is built by the composition root and shared by every request
handler of the process.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, List, Sequence

from docqa.config import Settings
from docqa.embeddings.base import EmbeddingProvider
from docqa.embeddings.client import EmbeddingsClient
from docqa.errors import DocQAError, EmbeddingProviderError
from docqa.models.schemas import CollectionInfo, ResultChunk, ResultChunkMetadata
from docqa.vector_store import get_vector_store
from docqa.vector_store.base import ChunkStore, StoredChunk
from docqa.vector_store.similarity import DEFAULT_TOP_K, rank_chunks

DEFAULT_COLLECTION_NAME = "rag-documents"

logger = logging.getLogger(__name__)


class RetrievalService:
    def __init__(
        self,
        embeddings: EmbeddingProvider,
        store: ChunkStore,
        collection_name: str = DEFAULT_COLLECTION_NAME,
        logger_: logging.Logger | None = None,
    ) -> None:
        self.embeddings = embeddings
        self.store = store
        self.collection_name = collection_name
        self.logger = logger_ or logger

    @classmethod
    def from_settings(cls, settings: Settings) -> "RetrievalService":
        return cls(
            embeddings=EmbeddingsClient.from_settings(settings),
            store=get_vector_store(settings.vector_store_backend),
            collection_name=settings.collection_name,
        )

    def add_document_chunks(
        self,
        document_id: str,
        chunks: Sequence[str],
        metadata: Dict[str, str],
    ) -> int:
        """
        Embed `chunks` in one provider call and store them with indices 0..n-1.

        The store is only touched after every chunk has an embedding, so a
        provider failure leaves it unchanged.
        """
        started = time.time()
        embeddings = self._embed(self.embeddings.embed_documents, list(chunks))
        if len(embeddings) != len(chunks):
            raise EmbeddingProviderError(
                f"Embedding provider returned {len(embeddings)} vectors for {len(chunks)} chunks"
            )

        self.store.upsert_chunks(
            document_id,
            list(zip(chunks, embeddings)),
            metadata={"filename": metadata["filename"], "originalName": metadata["originalName"]},
        )
        self.logger.info(
            "Added document chunks",
            extra={
                "document_id": document_id,
                "chunks": len(chunks),
                "elapsed_sec": round(time.time() - started, 2),
            },
        )
        return len(chunks)

    def search_similar_chunks(self, query: str, top_k: int = DEFAULT_TOP_K) -> List[ResultChunk]:
        snapshot = self.store.all()
        if not snapshot:
            # nothing to rank, skip the query embedding
            self.logger.info("Search on empty store", extra={"query_len": len(query)})
            return []

        query_embedding = self._embed(self.embeddings.embed_query, query)
        ranked = rank_chunks(query_embedding, snapshot, top_k=top_k)
        results = [self._to_result(chunk, score) for chunk, score in ranked]

        self.logger.info(
            "Found similar chunks",
            extra={
                "requested": top_k,
                "returned": len(results),
                "top_score": round(results[0].score, 3) if results else None,
                "results": [{"chunk_id": r.id, "score": round(r.score, 3)} for r in results],
            },
        )
        return results

    def delete_document(self, document_id: str) -> int:
        return self.store.delete_by_document(document_id)

    def get_collection_info(self) -> CollectionInfo:
        return CollectionInfo(count=self.store.size(), collection_name=self.collection_name)

    @staticmethod
    def _embed(call: Callable[[Any], Any], payload: Any) -> Any:
        try:
            return call(payload)
        except DocQAError:
            raise
        except Exception as exc:
            raise EmbeddingProviderError(f"Embedding provider failed: {exc}") from exc

    @staticmethod
    def _to_result(chunk: StoredChunk, score: float) -> ResultChunk:
        return ResultChunk(
            id=chunk.id,
            content=chunk.content,
            metadata=ResultChunkMetadata(
                document_id=chunk.metadata["documentId"],
                chunk_index=chunk.metadata["chunkIndex"],
                start_index=0,
                end_index=len(chunk.content),
            ),
            score=score,
        )


__all__ = ["RetrievalService", "DEFAULT_COLLECTION_NAME"]
