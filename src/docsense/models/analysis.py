"""Sentence analysis and final result models."""

from enum import Enum
from typing import Optional

from pydantic import Field

from docsense.errors import AnalysisBackendSoftFailure, LanguageDetectionSoftFailure

from .base import AnalysisType, FrozenModel, Sentiment


class SentimentScore(FrozenModel):
    """Per-label sentiment confidences."""

    positive: float = Field(default=0.0, ge=0.0, le=1.0)
    negative: float = Field(default=0.0, ge=0.0, le=1.0)
    neutral: float = Field(default=0.0, ge=0.0, le=1.0)
    mixed: float = Field(default=0.0, ge=0.0, le=1.0)

    @property
    def polarity(self) -> float:
        """Strength of opinion regardless of direction."""
        return self.positive + self.negative


# Empty sentences carry no signal at all.
ZERO_SIGNAL_SCORE = SentimentScore(neutral=1.0)

# Substituted when the backend fails for a sentence.
BALANCED_SCORE = SentimentScore(positive=0.5, negative=0.5, neutral=0.5, mixed=0.0)


class SentimentResult(FrozenModel):
    """Sentiment returned by the language service."""

    label: Sentiment = Sentiment.NEUTRAL
    scores: SentimentScore = Field(default_factory=SentimentScore)


class SentenceAnalysis(FrozenModel):
    """
    Features of one sentence, used only for summary ranking.

    ``importance_score`` stays None until the summarizer scores the sentence;
    scoring produces a copy rather than mutating the analysis.
    """

    text: str
    index: int = Field(default=0, ge=0, description="Position in the document")
    sentiment: Sentiment = Sentiment.NEUTRAL
    sentiment_score: SentimentScore = Field(default_factory=SentimentScore)
    key_phrases: list[str] = Field(default_factory=list)
    entities: list[str] = Field(default_factory=list)
    importance_score: Optional[float] = Field(None, ge=0.0)

    @property
    def word_count(self) -> int:
        """Whitespace token count, never below one."""
        return max(1, len(self.text.split()))

    def with_score(self, score: float) -> "SentenceAnalysis":
        """Copy of this analysis with an importance score attached."""
        return self.model_copy(update={"importance_score": score})


class OutcomeStatus(str, Enum):
    """How a sentence analysis was obtained."""

    OK = "ok"
    FALLBACK = "fallback"
    SKIPPED = "skipped"


class AnalysisOutcome(FrozenModel):
    """Sentence analysis plus whether the backend actually produced it."""

    analysis: SentenceAnalysis
    status: OutcomeStatus = OutcomeStatus.OK
    failure: Optional[AnalysisBackendSoftFailure] = None

    @property
    def is_fallback(self) -> bool:
        return self.status == OutcomeStatus.FALLBACK

    class Config:
        frozen = True
        arbitrary_types_allowed = True


class LanguageDetection(FrozenModel):
    """Detected language, or the default substituted after a soft failure."""

    language: str
    fallback: bool = False
    failure: Optional[LanguageDetectionSoftFailure] = None

    class Config:
        frozen = True
        arbitrary_types_allowed = True


class AnalysisResult(FrozenModel):
    """Final output handed back to the caller."""

    analysis_type: AnalysisType
    source_language: str
    target_language: Optional[str] = None
    result_text: str
    original_text: str = Field(default="", description="Normalized extracted text")
