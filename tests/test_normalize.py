"""Tests for text normalization and sentence splitting."""

import pytest

from docsense.pipeline.stage_normalize import TextNormalizer, split_sentences


@pytest.fixture
def normalizer():
    """Normalizer that collapses all whitespace."""
    return TextNormalizer(keep_chars="|", keep_newlines=False)


class TestNormalize:
    """Tests for TextNormalizer.normalize."""

    def test_collapses_whitespace(self, normalizer):
        """Runs of whitespace become a single space and ends are trimmed."""
        assert normalizer.normalize("  Hello \t\n  world  ") == "Hello world"

    def test_removes_symbols(self, normalizer):
        """Characters outside letter/number/punctuation classes are dropped."""
        assert normalizer.normalize("Great 👍 job ★ today") == "Great job today"
        assert normalizer.normalize("This costs $5.") == "This costs 5."

    def test_space_after_terminators(self, normalizer):
        """Exactly one space follows sentence terminators."""
        assert normalizer.normalize("One.Two!Three?Four") == "One. Two! Three? Four"
        assert normalizer.normalize("One.    Two") == "One. Two"

    def test_decimals_and_runs_untouched(self, normalizer):
        """Decimal points and terminator runs are not split."""
        assert normalizer.normalize("Pi is 3.14 today?!Yes") == "Pi is 3.14 today?! Yes"

    def test_keeps_diacritics_and_scripts(self, normalizer):
        """Accented letters and non-Latin scripts survive."""
        text = "Tiếng Việt có dấu. 日本語のテキスト。"
        assert normalizer.normalize(text) == text

    def test_keeps_table_delimiter(self, normalizer):
        """The configured keep characters are preserved."""
        assert normalizer.normalize("a | b") == "a | b"

    def test_keep_newlines(self):
        """Line-break runs collapse to one newline when requested."""
        normalizer = TextNormalizer(keep_newlines=True)
        assert normalizer.normalize("a  b \n\n  c\r\nd") == "a b\nc\nd"

    def test_empty(self, normalizer):
        """Empty and blank input normalize to empty text."""
        assert normalizer.normalize("") == ""
        assert normalizer.normalize("   \n ") == ""

    @pytest.mark.parametrize(
        "text",
        [
            "Hello.World",
            "  spaced   out . text !next",
            "Price: $4.50...really?!Yes.",
            "Tabs\tand\nnewlines\r\n\r\nmixed",
            "Emoji 🎉 and ★ symbols | pipes",
            "e.g.this.is.odd",
            "...",
            ". . .",
            "Trailing terminator!",
            "\x00control\x07chars",
        ],
    )
    @pytest.mark.parametrize("keep_newlines", [False, True])
    def test_idempotent(self, text, keep_newlines):
        """Normalizing twice equals normalizing once."""
        normalizer = TextNormalizer(keep_newlines=keep_newlines)
        once = normalizer.normalize(text)
        assert normalizer.normalize(once) == once


class TestSplitSentences:
    """Tests for the shared sentence boundary rule."""

    def test_terminator_followed_by_whitespace(self):
        """Sentences split after terminators followed by whitespace."""
        assert split_sentences("A. B! C? D") == ["A.", "B!", "C?", "D"]

    def test_newlines_split(self):
        """Line breaks are boundaries even without terminators."""
        assert split_sentences("Header\nBody text. More") == ["Header", "Body text.", "More"]

    def test_no_split_inside_numbers(self):
        """Decimal points are not boundaries."""
        assert split_sentences("It costs 3.50 now. Done.") == ["It costs 3.50 now.", "Done."]

    def test_empty_units_dropped(self):
        """Blank units are removed."""
        assert split_sentences("A.\n\n   \nB.") == ["A.", "B."]
        assert split_sentences("") == []
