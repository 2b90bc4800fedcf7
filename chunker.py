# chunker.py — overlapping, boundary-aligned document chunks
from __future__ import annotations

import math
import re
from typing import List

from models import DocumentChunk

# ─────────────────────────── tunables ────────────────────────────
DEFAULT_MAX_CHUNK_SIZE = 5000
DEFAULT_OVERLAP_SIZE   = 200
MIN_CHUNK_SIZE         = 2000
MAX_CHUNK_SIZE         = 5000
STRUCTURE_HEADINGS     = 5      # more than this many headings → structured
DENSE_LINE_LENGTH      = 80     # average trimmed line length above → dense
# ──────────────────────────────────────────────────────────────────

_HEADING_RE = re.compile(r"^#+\s", re.M)


def _break_before(text: str, sep: str, end: int, lower: int, floor: float) -> int:
    """Last `sep` starting at or before `end`, if it lies past both bounds."""
    pos = text.rfind(sep, 0, end + len(sep))
    return pos if pos > lower and pos > floor else -1


def chunk_document(text: str,
                   max_chunk_size: int = DEFAULT_MAX_CHUNK_SIZE,
                   overlap_size: int = DEFAULT_OVERLAP_SIZE) -> List[DocumentChunk]:
    """
    Split `text` into chunks of at most `max_chunk_size` source characters,
    preferring paragraph, then line boundaries in the back half of the window.

    Every chunk after the first is prefixed with the last `overlap_size`
    characters of the previous chunk's final text and a blank line. The
    overlap never moves the cursor.
    """
    if max_chunk_size <= 0:
        raise ValueError(f"max_chunk_size must be positive, got {max_chunk_size}")
    if overlap_size < 0:
        raise ValueError(f"overlap_size must be >= 0, got {overlap_size}")

    trimmed = text.strip()
    size = len(trimmed)
    if size <= max_chunk_size:
        return [DocumentChunk(trimmed, 0, 1, size)]

    chunks: List[DocumentChunk] = []
    current = 0
    while current < size:
        chunk_end = min(current + max_chunk_size, size)
        floor = chunk_end - max_chunk_size / 2

        brk = _break_before(trimmed, "\n\n", chunk_end, current, floor)
        if brk < 0:
            brk = _break_before(trimmed, "\n", chunk_end, current, floor)
        if brk >= 0:
            chunk_end = brk

        body = trimmed[current:chunk_end].strip()
        current = chunk_end
        if not body:
            continue

        if chunks:
            prev = chunks[-1].text
            body = f"{prev[max(0, len(prev) - overlap_size):]}\n\n{body}"
        chunks.append(DocumentChunk(body, len(chunks), 0, size))

    for chunk in chunks:
        chunk.chunk_total = len(chunks)
    return chunks


def recommend_chunk_size(text: str,
                         min_size: int = MIN_CHUNK_SIZE,
                         max_size: int = MAX_CHUNK_SIZE) -> int:
    """
    Structured, short-lined text gets `min_size`; dense prose gets `max_size`
    (density wins over structure); anything else the rounded midpoint.
    """
    if min_size <= 0 or max_size < min_size:
        raise ValueError(f"need 0 < min_size <= max_size, got {min_size}, {max_size}")

    has_structure = len(_HEADING_RE.findall(text)) > STRUCTURE_HEADINGS
    lines = text.split("\n")
    avg_line = sum(len(line.strip()) for line in lines) / max(len(lines), 1)
    is_dense = avg_line > DENSE_LINE_LENGTH

    if has_structure and not is_dense:
        return min_size
    if is_dense:
        return max_size
    return math.floor((min_size + max_size) / 2 + 0.5)
