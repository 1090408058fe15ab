"""
Error taxonomy shared by the service layers and the HTTP routes.
"""

from __future__ import annotations


class DocQAError(Exception):
    """Base class for all service errors."""


class ValidationError(DocQAError):
    """Malformed caller input: missing query, unsupported file type, oversized upload."""


class EmbeddingProviderError(DocQAError):
    """The embedding backend failed, timed out or returned an unusable response."""


class CompletionProviderError(DocQAError):
    """The chat completion backend failed or timed out."""


class DimensionMismatch(DocQAError):
    """Query and chunk vectors have different lengths."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"Embedding dimension mismatch: expected {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


__all__ = [
    "DocQAError",
    "ValidationError",
    "EmbeddingProviderError",
    "CompletionProviderError",
    "DimensionMismatch",
]
