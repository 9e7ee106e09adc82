"""Data models for the DocSense pipeline.

All request-scoped values are frozen Pydantic models: they are produced once
per analysis request and discarded when the request ends.

Model Hierarchy:
- BlockGraph → Blocks (OCR primitives, related by id)
- Normalized text → Chunks (translation path)
- Normalized text → SentenceAnalysis → AnalysisOutcome (summarization path)
- AnalysisResult (returned to the caller)
"""

from .analysis import (
    BALANCED_SCORE,
    ZERO_SIGNAL_SCORE,
    AnalysisOutcome,
    AnalysisResult,
    LanguageDetection,
    OutcomeStatus,
    SentenceAnalysis,
    SentimentResult,
    SentimentScore,
)
from .base import (
    AnalysisType,
    BlockType,
    BoundingBox,
    EntityKind,
    FrozenModel,
    RelationshipType,
    Sentiment,
    SummaryLength,
)
from .block import (
    Block,
    BlockGraph,
    Relationship,
    blocks_from_textract,
)
from .chunk import Chunk

__all__ = [
    # Base types
    "AnalysisType",
    "BlockType",
    "BoundingBox",
    "EntityKind",
    "FrozenModel",
    "RelationshipType",
    "Sentiment",
    "SummaryLength",
    # Blocks
    "Block",
    "BlockGraph",
    "Relationship",
    "blocks_from_textract",
    # Chunks
    "Chunk",
    # Analysis
    "AnalysisOutcome",
    "AnalysisResult",
    "BALANCED_SCORE",
    "LanguageDetection",
    "OutcomeStatus",
    "SentenceAnalysis",
    "SentimentResult",
    "SentimentScore",
    "ZERO_SIGNAL_SCORE",
]
