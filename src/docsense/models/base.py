"""Base models and common types for the DocSense pipeline."""

from enum import Enum

from pydantic import BaseModel, Field


class BlockType(str, Enum):
    """Types of OCR primitives returned by the OCR provider."""

    PAGE = "PAGE"
    LINE = "LINE"
    WORD = "WORD"
    TABLE = "TABLE"
    CELL = "CELL"
    KEY_VALUE_SET = "KEY_VALUE_SET"


class RelationshipType(str, Enum):
    """Edge kinds between blocks."""

    CHILD = "CHILD"
    VALUE = "VALUE"


class EntityKind(str, Enum):
    """Role of a KEY_VALUE_SET block within a form field."""

    KEY = "KEY"
    VALUE = "VALUE"


class AnalysisType(str, Enum):
    """What to produce from the extracted text."""

    TRANSLATE = "translate"
    SUMMARIZE = "summarize"


class SummaryLength(str, Enum):
    """Requested summary size."""

    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


class Sentiment(str, Enum):
    """Sentence-level sentiment label."""

    POSITIVE = "POSITIVE"
    NEGATIVE = "NEGATIVE"
    NEUTRAL = "NEUTRAL"
    MIXED = "MIXED"


class BoundingBox(BaseModel):
    """Bounding box in page-normalized coordinates (0-1)."""

    top: float = Field(default=0.0, description="Top edge Y coordinate")
    left: float = Field(default=0.0, description="Left edge X coordinate")
    width: float = Field(default=0.0, ge=0.0, description="Box width")
    height: float = Field(default=0.0, ge=0.0, description="Box height")

    @property
    def right(self) -> float:
        """Right edge X coordinate."""
        return self.left + self.width

    @property
    def bottom(self) -> float:
        """Bottom edge Y coordinate."""
        return self.top + self.height

    def same_row(self, other: "BoundingBox", tolerance: float) -> bool:
        """Whether two boxes sit on the same visual row.

        Tops are compared within a band proportional to the taller box.
        """
        band = tolerance * max(self.height, other.height)
        return abs(self.top - other.top) < band

    class Config:
        frozen = True


class FrozenModel(BaseModel):
    """Base class for request-scoped, immutable pipeline values."""

    class Config:
        frozen = True
