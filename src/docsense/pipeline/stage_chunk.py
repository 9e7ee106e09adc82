"""Chunking Stage - Split text into backend-size-bounded chunks.

Chunks follow sentence/line boundaries. A sentence longer than the limit is
hard-split into fixed-length slices so nothing is ever dropped and every
chunk stays within ``max_chunk_size``.
"""

from typing import Optional

from docsense.config import settings
from docsense.models import Chunk

from .stage_normalize import split_sentences

CHUNK_SEPARATOR = " "


def hard_split(unit: str, size: int) -> list[str]:
    """Cut a unit into successive slices of at most ``size`` characters."""
    return [unit[i:i + size] for i in range(0, len(unit), size)]


class TextChunker:
    """Packs sentences greedily into chunks up to a size limit."""

    def __init__(self, max_chunk_size: Optional[int] = None):
        self.max_chunk_size = max_chunk_size or settings.max_chunk_size

    def chunk(self, text: str, max_chunk_size: Optional[int] = None) -> list[Chunk]:
        """Split text into ordered chunks.

        Args:
            text: Normalized text.
            max_chunk_size: Per-call override of the size limit.

        Returns:
            Chunks with consecutive indexes, each no longer than the limit.
        """
        limit = self.max_chunk_size if max_chunk_size is None else max_chunk_size
        if limit <= 0:
            raise ValueError(f"max_chunk_size must be positive, got {limit}")

        pieces: list[str] = []
        current = ""

        for unit in split_sentences(text):
            if len(unit) > limit:
                if current:
                    pieces.append(current)
                    current = ""
                pieces.extend(hard_split(unit, limit))
            elif not current:
                current = unit
            elif len(current) + len(CHUNK_SEPARATOR) + len(unit) <= limit:
                current = f"{current}{CHUNK_SEPARATOR}{unit}"
            else:
                pieces.append(current)
                current = unit

        if current:
            pieces.append(current)

        return [Chunk(index=i, text=piece) for i, piece in enumerate(pieces)]
