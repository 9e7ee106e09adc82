"""Chunk model for size-bounded translation calls."""

from pydantic import Field

from .base import FrozenModel


class Chunk(FrozenModel):
    """
    Size-bounded slice of normalized text.

    Chunks are produced in order by the chunker; ``index`` is the position in
    that sequence and is the order in which chunks are translated and
    reassembled.
    """

    index: int = Field(..., ge=0, description="Position in the chunk sequence")
    text: str = Field(..., description="Chunk text sent to the backend")
