"""
Cosine similarity and brute-force top-K ranking.

Every stored chunk is scored against the query; there is no index structure.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from docqa.errors import DimensionMismatch
from docqa.vector_store.base import StoredChunk

DEFAULT_TOP_K = 5


def cosine_similarity(query: Sequence[float], vector: Sequence[float]) -> float:
    q = np.asarray(query, dtype=np.float64)
    v = np.asarray(vector, dtype=np.float64)
    if q.shape != v.shape:
        raise DimensionMismatch(expected=q.size, actual=v.size)

    q_norm = np.linalg.norm(q)
    v_norm = np.linalg.norm(v)
    if q_norm == 0.0 or v_norm == 0.0:
        return 0.0
    return float(np.dot(q, v) / (q_norm * v_norm))


def rank_chunks(
    query_embedding: Sequence[float],
    chunks: Sequence[StoredChunk],
    top_k: int = DEFAULT_TOP_K,
) -> List[Tuple[StoredChunk, float]]:
    """
    Score every chunk and return the `top_k` best, highest score first.
    Equal scores keep the order of `chunks`.
    """
    if not chunks or top_k <= 0:
        return []

    scored = [(chunk, cosine_similarity(query_embedding, chunk.embedding)) for chunk in chunks]
    scored.sort(key=lambda pair: pair[1], reverse=True)
    return scored[:top_k]


__all__ = ["cosine_similarity", "rank_chunks", "DEFAULT_TOP_K"]
