"""
Document parser utilities: extracting plain text from uploaded files.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict

from pypdf import PdfReader

from docqa.errors import ValidationError

SUPPORTED_EXTENSIONS = (".pdf", ".txt")


def file_extension(filename: str) -> str:
    return Path(filename).suffix.lower()


def is_supported(filename: str) -> bool:
    return file_extension(filename) in SUPPORTED_EXTENSIONS


def extract_text_from_pdf(path: str | Path) -> str:
    reader = PdfReader(str(path))
    pages = [page.extract_text() or "" for page in reader.pages]
    return "\n\n".join(pages)


def extract_text_from_txt(path: str | Path) -> str:
    return Path(path).read_text(encoding="utf-8")


EXTRACTORS: Dict[str, Callable[[str | Path], str]] = {
    ".pdf": extract_text_from_pdf,
    ".txt": extract_text_from_txt,
}


def extract_text(path: str | Path, filename: str) -> str:
    """
    Extract text from the file at `path`. The type is decided by the extension
    of `filename` (the client-side name), not by the stored path.
    """
    extension = file_extension(filename)
    extractor = EXTRACTORS.get(extension)
    if extractor is None:
        raise ValidationError(f"Unsupported file type: {extension or '<none>'}")
    return extractor(path)


__all__ = [
    "SUPPORTED_EXTENSIONS",
    "file_extension",
    "is_supported",
    "extract_text",
    "extract_text_from_pdf",
    "extract_text_from_txt",
]
