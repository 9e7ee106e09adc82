"""Tests for extractive summarization."""

import pytest

from docsense.errors import AnalysisRequestError
from docsense.models import (
    BALANCED_SCORE,
    ZERO_SIGNAL_SCORE,
    SentenceAnalysis,
    SentimentScore,
    SummaryLength,
)
from docsense.pipeline.stage_normalize import split_sentences
from docsense.pipeline.stage_sentence import SentenceAnalyzer
from docsense.pipeline.stage_summarize import (
    LENGTH_PROFILES,
    ScoringWeights,
    Summarizer,
    jaccard_similarity,
    join_sentences,
)


def make_summarizer(annotator, threshold=0.55):
    return Summarizer(
        SentenceAnalyzer(annotator, max_workers=4),
        weights=ScoringWeights(),
        dedup_threshold=threshold,
    )


class TestJaccardSimilarity:
    """Tests for word-overlap similarity."""

    def test_identical(self):
        assert jaccard_similarity("The cat sat.", "the CAT sat") == 1.0

    def test_partial_overlap(self):
        """Intersection over union of lower-cased word sets."""
        assert jaccard_similarity("It works well.", "It works fine.") == pytest.approx(0.5)

    def test_empty(self):
        """Two empty sentences are not similar."""
        assert jaccard_similarity("", "...") == 0.0


class TestScoring:
    """Tests for importance scoring."""

    @pytest.fixture
    def summarizer(self, fake_annotator):
        return make_summarizer(fake_annotator)

    def test_weighted_sum(self, summarizer):
        """Middle sentences get the plain weighted feature sum."""
        analysis = SentenceAnalysis(
            text="Alpha beta gamma delta.",
            index=1,
            sentiment_score=SentimentScore(positive=0.8, negative=0.1),
            key_phrases=["alpha", "gamma"],
            entities=["Delta"],
        )
        # 0.1*0.9 + 0.5*(2/4) + 0.4*(1/4)
        assert summarizer.importance(analysis, total=3) == pytest.approx(0.44)

    def test_first_sentence_and_numeric_boost(self, summarizer):
        """First position and digits multiply the score."""
        analysis = SentenceAnalysis(
            text="Revenue was 5 million.",
            index=0,
            key_phrases=["Revenue"],
        )
        base = 0.5 * (1 / 4)
        assert summarizer.importance(analysis, total=3) == pytest.approx(base * 1.5 * 1.1)

    def test_last_sentence_boost(self, summarizer):
        """Last position multiplies the score."""
        analysis = SentenceAnalysis(text="Closing words", index=2, entities=["Closing"])
        assert summarizer.importance(analysis, total=3) == pytest.approx(0.4 * 0.5 * 1.2)

    def test_zero_signal_sentence_scores_zero(self, summarizer):
        """No phrases, no entities, neutral sentiment still yields a valid score."""
        analysis = SentenceAnalysis(text="Nothing here.", index=1, sentiment_score=ZERO_SIGNAL_SCORE)
        score = summarizer.importance(analysis, total=3)
        assert score == 0.0

    def test_fallback_sentence_scores_non_negative(self, summarizer):
        """Fallback scores are computable and non-negative."""
        analysis = SentenceAnalysis(text="Unknown.", index=1, sentiment_score=BALANCED_SCORE)
        assert summarizer.importance(analysis, total=3) == pytest.approx(0.1)

    def test_score_does_not_mutate(self, summarizer):
        """Scoring returns new analyses."""
        analyses = [SentenceAnalysis(text="One.", index=0), SentenceAnalysis(text="Two.", index=1)]
        scored = summarizer.score(analyses)
        assert all(a.importance_score is None for a in analyses)
        assert all(s.importance_score is not None for s in scored)


class TestSummarize:
    """Tests for Summarizer.summarize."""

    def test_short_document_returned_as_is(self, fake_annotator):
        """Documents at or below the length minimum skip scoring."""
        summary = make_summarizer(fake_annotator).summarize("One. Two.", "en", "short")

        assert summary == "One. Two."
        assert fake_annotator.calls == []

    def test_near_duplicates_removed(self, annotator_factory):
        """At most one of two near-identical sentences survives."""
        text = "This costs $5. It works well. It works fine. The end result is great."
        annotator = annotator_factory(
            key_phrases={
                "This costs $5.": ["costs"],
                "It works well.": ["works"],
                "It works fine.": ["works"],
                "The end result is great.": ["end result"],
            }
        )

        summary = make_summarizer(annotator).summarize(text, "en", SummaryLength.SHORT)

        assert not ("It works well." in summary and "It works fine." in summary)
        assert summary.startswith("This costs $5.")

    def test_dedup_threshold_applied(self, fake_annotator):
        """Sentences at or above the threshold against a kept one are dropped."""
        summarizer = make_summarizer(fake_annotator)
        kept = summarizer.deduplicate([
            "The cat sat on the mat.",
            "The cat sat on the mat today.",
            "Dogs bark loudly.",
        ])
        assert kept == ["The cat sat on the mat.", "Dogs bark loudly."]

    def test_dedup_can_leave_single_sentence(self, fake_annotator):
        """Degenerate selections reduce to one sentence."""
        summarizer = make_summarizer(fake_annotator)
        kept = summarizer.deduplicate(["Same words here.", "same words HERE", "Same, words, here!"])
        assert kept == ["Same words here."]

    def test_output_is_ordered_subset(self, annotator_factory):
        """Selected sentences come from the input, in order, without near-duplicates."""
        sentences = [
            "Revenue grew 12 percent in 2023.",
            "The company hired several engineers.",
            "Revenue grew 12 percent in 2023 overall.",
            "Customers praised the redesigned product line.",
            "Weather was mild.",
            "Operating expenses declined significantly.",
            "The board approved a dividend increase.",
            "Nothing else happened.",
            "Management expects continued expansion internationally.",
            "Analysts remained cautious.",
            "Inventory levels normalized.",
            "The outlook remains positive for shareholders.",
        ]
        long_words = {s: [w for w in s.split() if len(w) > 7] for s in sentences}
        annotator = annotator_factory(key_phrases=long_words)
        summarizer = make_summarizer(annotator)

        summary = summarizer.summarize(" ".join(sentences), "en", "medium")
        selected = split_sentences(summary)

        assert 1 <= len(selected) <= LENGTH_PROFILES[SummaryLength.MEDIUM].target_count(12)
        positions = [sentences.index(s) for s in selected]
        assert positions == sorted(positions)
        for i, a in enumerate(selected):
            for b in selected[i + 1:]:
                assert jaccard_similarity(a, b) < 0.55

    def test_failed_sentences_do_not_abort(self, annotator_factory):
        """Backend failures on some sentences still produce a summary."""
        sentences = [f"Statement {word} number." for word in "abcdefgh"]
        annotator = annotator_factory(failing=tuple(sentences[:4]))

        summary = make_summarizer(annotator).summarize(" ".join(sentences), "en", "short")

        assert summary
        assert all(s in sentences for s in split_sentences(summary))

    def test_unknown_length_rejected(self, fake_annotator):
        """Summary lengths outside short/medium/long are errors."""
        with pytest.raises(AnalysisRequestError):
            make_summarizer(fake_annotator).summarize("A. B. C.", "en", "tiny")


class TestLengthProfiles:
    """Tests for summary size selection."""

    @pytest.mark.parametrize(
        "length,total,expected",
        [
            (SummaryLength.SHORT, 4, 2),
            (SummaryLength.SHORT, 50, 5),
            (SummaryLength.MEDIUM, 12, 5),
            (SummaryLength.MEDIUM, 100, 20),
            (SummaryLength.LONG, 20, 10),
            (SummaryLength.LONG, 6, 6),
        ],
    )
    def test_target_count(self, length, total, expected):
        """Fraction of sentences with a floor, capped at the total."""
        assert LENGTH_PROFILES[length].target_count(total) == expected


class TestJoinSentences:
    """Tests for summary assembly."""

    def test_single_trailing_period(self):
        assert join_sentences(["First.", "Second"]) == "First. Second."

    def test_double_periods_collapsed(self):
        assert join_sentences(["Ends twice..", "Next."]) == "Ends twice. Next."

    def test_other_terminators_kept(self):
        assert join_sentences(["Really?", "Yes!"]) == "Really? Yes!"
