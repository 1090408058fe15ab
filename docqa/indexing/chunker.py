"""
Text chunking utilities.

Recursive character splitting: try the coarsest separator first (paragraphs),
fall back to lines, words and finally single characters for pieces that are
still too long, then merge neighbouring pieces back up to `chunk_size` with
`chunk_overlap` characters carried over between consecutive chunks.
"""

from __future__ import annotations

from typing import List, Sequence

DEFAULT_CHUNK_SIZE = 1000
DEFAULT_CHUNK_OVERLAP = 200
DEFAULT_SEPARATORS = ("\n\n", "\n", " ", "")


def _join(parts: Sequence[str], separator: str) -> str | None:
    text = separator.join(parts).strip()
    return text or None


def _merge_splits(splits: Sequence[str], separator: str, chunk_size: int, chunk_overlap: int) -> List[str]:
    sep_len = len(separator)
    merged: List[str] = []
    current: List[str] = []
    total = 0

    for piece in splits:
        piece_len = len(piece)
        if total + piece_len + (sep_len if current else 0) > chunk_size:
            if current:
                text = _join(current, separator)
                if text is not None:
                    merged.append(text)
                # drop from the front until only the overlap is left and the new piece fits
                while total > chunk_overlap or (
                    total + piece_len + (sep_len if current else 0) > chunk_size and total > 0
                ):
                    total -= len(current[0]) + (sep_len if len(current) > 1 else 0)
                    current.pop(0)
        current.append(piece)
        total += piece_len + (sep_len if len(current) > 1 else 0)

    text = _join(current, separator)
    if text is not None:
        merged.append(text)
    return merged


def _split_recursive(
    text: str,
    separators: Sequence[str],
    chunk_size: int,
    chunk_overlap: int,
) -> List[str]:
    separator = separators[-1]
    remaining: Sequence[str] = []
    for i, candidate in enumerate(separators):
        if candidate == "":
            separator = candidate
            break
        if candidate in text:
            separator = candidate
            remaining = separators[i + 1 :]
            break

    pieces = text.split(separator) if separator else list(text)
    pieces = [p for p in pieces if p != ""]

    chunks: List[str] = []
    pending: List[str] = []
    for piece in pieces:
        if len(piece) < chunk_size:
            pending.append(piece)
            continue
        if pending:
            chunks.extend(_merge_splits(pending, separator, chunk_size, chunk_overlap))
            pending = []
        if remaining:
            chunks.extend(_split_recursive(piece, remaining, chunk_size, chunk_overlap))
        else:
            chunks.append(piece)

    if pending:
        chunks.extend(_merge_splits(pending, separator, chunk_size, chunk_overlap))
    return chunks


def split_text(
    text: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    chunk_overlap: int = DEFAULT_CHUNK_OVERLAP,
    separators: Sequence[str] = DEFAULT_SEPARATORS,
) -> List[str]:
    if chunk_overlap >= chunk_size:
        raise ValueError(f"chunk_overlap ({chunk_overlap}) must be smaller than chunk_size ({chunk_size})")
    if not text.strip():
        return []
    return _split_recursive(text, separators, chunk_size, chunk_overlap)


__all__ = ["split_text", "DEFAULT_CHUNK_SIZE", "DEFAULT_CHUNK_OVERLAP", "DEFAULT_SEPARATORS"]
