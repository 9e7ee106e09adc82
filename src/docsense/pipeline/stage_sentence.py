"""Sentence Analysis Stage - Per-sentence sentiment, key phrases and entities.

Each sentence is analyzed independently, so a document's sentences are fanned
out over a thread pool and gathered back by index. A backend failure on one
sentence substitutes a neutral analysis instead of failing the document.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Optional, Sequence, TypeVar

from docsense.backends.base import LanguageAnnotator
from docsense.config import settings
from docsense.errors import AnalysisBackendSoftFailure, BackendError
from docsense.models import (
    BALANCED_SCORE,
    ZERO_SIGNAL_SCORE,
    AnalysisOutcome,
    OutcomeStatus,
    SentenceAnalysis,
    Sentiment,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


def fan_out(func: Callable[[int, T], R], items: Sequence[T], max_workers: int) -> list[R]:
    """Run ``func(index, item)`` concurrently and return results in input order.

    Completion order is irrelevant; results are placed by index once all
    tasks finish. Exceptions raised by ``func`` propagate.
    """
    if not items:
        return []

    results: list[Optional[R]] = [None] * len(items)
    workers = max(1, min(max_workers, len(items)))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="sentence") as executor:
        futures = {executor.submit(func, i, item): i for i, item in enumerate(items)}
        for future in as_completed(futures):
            results[futures[future]] = future.result()
    return results


def neutral_analysis(sentence: str, index: int = 0) -> SentenceAnalysis:
    """Zero-signal analysis for an empty sentence."""
    return SentenceAnalysis(
        text=sentence,
        index=index,
        sentiment=Sentiment.NEUTRAL,
        sentiment_score=ZERO_SIGNAL_SCORE,
    )


def fallback_analysis(sentence: str, index: int = 0) -> SentenceAnalysis:
    """Neutral analysis substituted after a backend failure."""
    return SentenceAnalysis(
        text=sentence,
        index=index,
        sentiment=Sentiment.NEUTRAL,
        sentiment_score=BALANCED_SCORE,
    )


class SentenceAnalyzer:
    """Extracts ranking features for sentences through the language service."""

    def __init__(
        self,
        annotator: LanguageAnnotator,
        max_workers: Optional[int] = None,
    ):
        """Initialize analyzer.

        Args:
            annotator: Sentiment/key phrase/entity service.
            max_workers: Thread pool size for ``analyze_many``.
        """
        self.annotator = annotator
        self.max_workers = max_workers or settings.max_workers

    def analyze(self, sentence: str, language: str) -> SentenceAnalysis:
        """Analyze a single sentence, never raising on backend failure."""
        return self.analyze_outcome(sentence, language).analysis

    def analyze_outcome(self, sentence: str, language: str, index: int = 0) -> AnalysisOutcome:
        """Analyze a sentence and report how the analysis was obtained.

        Args:
            sentence: Sentence text.
            language: Language code for the backend.
            index: Sentence position in the document.

        Returns:
            AnalysisOutcome with status OK, FALLBACK or SKIPPED.
        """
        if not sentence or not sentence.strip():
            return AnalysisOutcome(
                analysis=neutral_analysis(sentence or "", index),
                status=OutcomeStatus.SKIPPED,
            )

        try:
            sentiment = self.annotator.detect_sentiment(sentence, language)
            key_phrases = self.annotator.detect_key_phrases(sentence, language)
            entities = self.annotator.detect_entities(sentence, language)
        except BackendError as exc:
            failure = AnalysisBackendSoftFailure(index, str(exc))
            logger.warning("%s; using neutral fallback", failure)
            return AnalysisOutcome(
                analysis=fallback_analysis(sentence, index),
                status=OutcomeStatus.FALLBACK,
                failure=failure,
            )

        return AnalysisOutcome(
            analysis=SentenceAnalysis(
                text=sentence,
                index=index,
                sentiment=sentiment.label,
                sentiment_score=sentiment.scores,
                key_phrases=list(key_phrases),
                entities=list(entities),
            ),
        )

    def analyze_many(self, sentences: Sequence[str], language: str) -> list[AnalysisOutcome]:
        """Analyze all sentences concurrently, results in sentence order."""
        outcomes = fan_out(
            lambda i, sentence: self.analyze_outcome(sentence, language, index=i),
            sentences,
            self.max_workers,
        )
        fallbacks = sum(1 for o in outcomes if o.is_fallback)
        if fallbacks:
            logger.info("%d of %d sentences used fallback analysis", fallbacks, len(outcomes))
        return outcomes
