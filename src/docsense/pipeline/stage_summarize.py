"""Summarization Stage - Feature-scored extractive summarization.

Sentences are scored from their sentiment polarity and key phrase/entity
density, boosted by position and numeric content, ranked, cut to a length
derived from the requested summary size, put back in document order and
stripped of near-duplicates by Jaccard word overlap.

Weights and the similarity threshold are empirical and exposed through
settings for tuning.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional, Union

from docsense.config import settings
from docsense.errors import AnalysisRequestError
from docsense.models import SentenceAnalysis, SummaryLength

from .stage_normalize import split_sentences
from .stage_sentence import SentenceAnalyzer

logger = logging.getLogger(__name__)

_RE_WORD = re.compile(r"\w+")
_RE_DIGIT = re.compile(r"\d")
_RE_DOUBLE_PERIOD = re.compile(r"\.{2,}")


@dataclass(frozen=True)
class LengthProfile:
    """How many sentences a summary size keeps."""

    fraction: float
    min_sentences: int

    def target_count(self, total: int) -> int:
        return min(total, max(self.min_sentences, int(total * self.fraction)))


LENGTH_PROFILES = {
    SummaryLength.SHORT: LengthProfile(fraction=0.10, min_sentences=2),
    SummaryLength.MEDIUM: LengthProfile(fraction=0.20, min_sentences=5),
    SummaryLength.LONG: LengthProfile(fraction=0.35, min_sentences=10),
}


@dataclass(frozen=True)
class ScoringWeights:
    """Weights and multipliers for sentence importance."""

    sentiment: float = 0.1
    key_phrase: float = 0.5
    entity: float = 0.4
    first_sentence_boost: float = 1.5
    last_sentence_boost: float = 1.2
    numeric_boost: float = 1.1

    @classmethod
    def from_settings(cls) -> "ScoringWeights":
        return cls(
            sentiment=settings.sentiment_weight,
            key_phrase=settings.key_phrase_weight,
            entity=settings.entity_weight,
            first_sentence_boost=settings.first_sentence_boost,
            last_sentence_boost=settings.last_sentence_boost,
            numeric_boost=settings.numeric_boost,
        )


def tokenize(sentence: str) -> set[str]:
    """Lower-cased word tokens."""
    return {token for token in _RE_WORD.findall(sentence.lower()) if token}


def jaccard_similarity(a: str, b: str) -> float:
    """Word-overlap similarity of two sentences, 0 when both are empty."""
    words_a, words_b = tokenize(a), tokenize(b)
    union = words_a | words_b
    if not union:
        return 0.0
    return len(words_a & words_b) / len(union)


def parse_summary_length(value: Union[str, SummaryLength, None]) -> SummaryLength:
    """Resolve a summary length, defaulting to medium."""
    if value is None:
        return SummaryLength.MEDIUM
    try:
        return SummaryLength(value)
    except ValueError:
        valid = ", ".join(s.value for s in SummaryLength)
        raise AnalysisRequestError(
            f"Unknown summary length '{value}' (expected {valid})"
        ) from None


def join_sentences(sentences: list[str]) -> str:
    """Join sentences with '. ', leaving a single trailing terminator."""
    parts = []
    for sentence in sentences:
        sentence = sentence.strip()
        if sentence.endswith(("!", "?")):
            parts.append(sentence)
        else:
            parts.append(sentence.rstrip(".") + ".")
    return _RE_DOUBLE_PERIOD.sub(".", " ".join(parts))


class Summarizer:
    """Extractive summarizer over per-sentence language features."""

    def __init__(
        self,
        analyzer: SentenceAnalyzer,
        weights: Optional[ScoringWeights] = None,
        dedup_threshold: Optional[float] = None,
    ):
        """Initialize summarizer.

        Args:
            analyzer: Sentence analyzer used for feature extraction.
            weights: Scoring weights (default from settings).
            dedup_threshold: Jaccard similarity at or above which a sentence
                counts as a near-duplicate of one already kept.
        """
        self.analyzer = analyzer
        self.weights = weights or ScoringWeights.from_settings()
        self.dedup_threshold = (
            dedup_threshold if dedup_threshold is not None else settings.dedup_threshold
        )

    def summarize(
        self,
        text: str,
        source_language: str,
        summary_length: Union[str, SummaryLength, None] = SummaryLength.MEDIUM,
    ) -> str:
        """Summarize text by selecting its most important sentences.

        Args:
            text: Normalized document text.
            source_language: Language code for sentence analysis.
            summary_length: short, medium or long.

        Returns:
            Summary built only from sentences of the input, in document order.
        """
        profile = LENGTH_PROFILES[parse_summary_length(summary_length)]
        sentences = split_sentences(text)

        if len(sentences) <= profile.min_sentences:
            logger.debug("Document has %d sentences, returning as-is", len(sentences))
            return " ".join(sentences)

        outcomes = self.analyzer.analyze_many(sentences, source_language)
        scored = self.score([o.analysis for o in outcomes])

        count = profile.target_count(len(scored))
        ranked = sorted(scored, key=lambda a: (-a.importance_score, a.index))
        selected = sorted(ranked[:count], key=lambda a: a.index)
        kept = self.deduplicate([a.text for a in selected])

        logger.info(
            "Summary: %d sentences -> %d selected -> %d kept",
            len(sentences),
            count,
            len(kept),
        )
        return join_sentences(kept)

    def importance(self, analysis: SentenceAnalysis, total: int) -> float:
        """Weighted feature score with positional and numeric boosts."""
        words = analysis.word_count
        score = (
            self.weights.sentiment * analysis.sentiment_score.polarity
            + self.weights.key_phrase * (len(analysis.key_phrases) / words)
            + self.weights.entity * (len(analysis.entities) / words)
        )
        if analysis.index == 0:
            score *= self.weights.first_sentence_boost
        if analysis.index == total - 1:
            score *= self.weights.last_sentence_boost
        if _RE_DIGIT.search(analysis.text):
            score *= self.weights.numeric_boost
        return max(0.0, score)

    def score(self, analyses: list[SentenceAnalysis]) -> list[SentenceAnalysis]:
        """Attach importance scores to a document's sentence analyses."""
        total = len(analyses)
        return [a.with_score(self.importance(a, total)) for a in analyses]

    def deduplicate(self, sentences: list[str]) -> list[str]:
        """Keep sentences below the similarity threshold to all kept ones."""
        kept: list[str] = []
        for sentence in sentences:
            if all(jaccard_similarity(sentence, other) < self.dedup_threshold for other in kept):
                kept.append(sentence)
        return kept
