"""
Document processing: extract text from an uploaded file and split it into chunks.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List

from docqa.config import Settings
from docqa.indexing.chunker import DEFAULT_CHUNK_OVERLAP, DEFAULT_CHUNK_SIZE, split_text
from docqa.indexing.parser import extract_text

logger = logging.getLogger(__name__)


@dataclass
class ProcessedDocument:
    content: str
    chunks: List[str]


class DocumentProcessor:
    def __init__(
        self,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        chunk_overlap: int = DEFAULT_CHUNK_OVERLAP,
        logger_: logging.Logger | None = None,
    ) -> None:
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self.logger = logger_ or logger

    @classmethod
    def from_settings(cls, settings: Settings) -> "DocumentProcessor":
        return cls(chunk_size=settings.chunk_size_chars, chunk_overlap=settings.chunk_overlap_chars)

    def process_document(self, path: str | Path, filename: str) -> ProcessedDocument:
        content = extract_text(path, filename)
        chunks = split_text(content, chunk_size=self.chunk_size, chunk_overlap=self.chunk_overlap)
        self.logger.info(
            "Processed document",
            extra={"document_name": filename, "chars": len(content), "chunks": len(chunks)},
        )
        return ProcessedDocument(content=content, chunks=chunks)


__all__ = ["DocumentProcessor", "ProcessedDocument"]
