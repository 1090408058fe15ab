"""
Vector store abstractions and factories.
"""

from docqa.vector_store.base import ChunkStore, StoredChunk
from docqa.vector_store.memory_store import InMemoryChunkStore

DEFAULT_VECTOR_STORE_BACKEND = "memory"


def get_vector_store(backend: str = DEFAULT_VECTOR_STORE_BACKEND) -> ChunkStore:
    """
    Factory to obtain a ChunkStore instance.
    Currently supports only the in-memory backend.
    """
    backend = backend.lower()
    if backend == "memory":
        return InMemoryChunkStore()
    raise ValueError(f"Unsupported vector store backend: {backend}")


__all__ = ["DEFAULT_VECTOR_STORE_BACKEND", "get_vector_store", "ChunkStore", "StoredChunk", "InMemoryChunkStore"]
