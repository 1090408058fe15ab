"""
Embedding providers.
"""

from docqa.embeddings.base import EmbeddingProvider
from docqa.embeddings.client import EmbeddingsClient

__all__ = ["EmbeddingProvider", "EmbeddingsClient"]
