from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serialises with camelCase keys, accepts either naming on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Retrieval
class ResultChunkMetadata(CamelModel):
    document_id: str
    chunk_index: int
    start_index: int = 0
    end_index: int


class ResultChunk(CamelModel):
    id: str
    content: str
    metadata: ResultChunkMetadata
    score: float = Field(..., description="Cosine similarity, higher is more similar")


class CollectionInfo(CamelModel):
    count: int = Field(..., ge=0)
    collection_name: str


class DeleteDocumentResponse(CamelModel):
    document_id: str
    deleted: int = Field(..., ge=0, description="How many chunks were removed")


# Upload
class UploadResponse(CamelModel):
    success: bool = True
    document_id: str
    filename: str
    chunks: int = Field(..., ge=0)
    message: str


class UploadErrorResponse(CamelModel):
    success: bool = False
    message: str


# QA
class QAResponse(CamelModel):
    answer: str
    sources: List[ResultChunk]
    query: str


class ErrorResponse(CamelModel):
    error: str


__all__ = [
    "ResultChunkMetadata",
    "ResultChunk",
    "CollectionInfo",
    "DeleteDocumentResponse",
    "UploadResponse",
    "UploadErrorResponse",
    "QAResponse",
    "ErrorResponse",
]
