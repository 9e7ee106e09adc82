"""Normalization Stage - Clean reconstructed or raw text.

Removes characters outside the letter/mark/number/punctuation/whitespace
classes, collapses whitespace and puts exactly one space after sentence
terminators. Normalization is idempotent.

Also home of the sentence boundary rule shared by the chunker and the
summarizer.
"""

import re
import unicodedata
from typing import Optional

from docsense.config import settings

# Sentence terminator followed by whitespace, or a line break.
SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+|\n")

_RE_WHITESPACE = re.compile(r"\s+")
_RE_HORIZONTAL_SPACE = re.compile(r"[^\S\n]+")
_RE_LINE_BREAKS = re.compile(r" ?\n[\s]*")
# Terminator glued to the next word; digits (3.14) and runs (?!) stay intact.
_RE_TERMINATOR_SPACING = re.compile(r"([.!?])(?=[^\s\d.!?])")

_ALLOWED_CATEGORIES = ("L", "M", "N", "P")


def split_sentences(text: str) -> list[str]:
    """Split text into stripped, non-empty sentence/line units."""
    if not text:
        return []
    return [unit.strip() for unit in SENTENCE_BOUNDARY.split(text) if unit and unit.strip()]


class TextNormalizer:
    """Cleans text before chunking or sentence analysis."""

    def __init__(
        self,
        keep_chars: Optional[str] = None,
        keep_newlines: Optional[bool] = None,
    ):
        """Initialize normalizer.

        Args:
            keep_chars: Extra characters to keep even though their Unicode
                class is filtered (defaults to the table delimiter).
            keep_newlines: Collapse line-break runs to a single newline
                instead of a space.
        """
        if keep_chars is None:
            keep_chars = settings.table_delimiter.strip()
        self.keep_chars = frozenset(keep_chars)
        self.keep_newlines = (
            settings.normalize_keep_newlines if keep_newlines is None else keep_newlines
        )

    def _is_allowed(self, char: str) -> bool:
        return (
            char.isspace()
            or char in self.keep_chars
            or unicodedata.category(char)[0] in _ALLOWED_CATEGORIES
        )

    def filter_characters(self, text: str) -> str:
        """Replace disallowed characters with a space."""
        return "".join(c if self._is_allowed(c) else " " for c in text)

    def collapse_whitespace(self, text: str) -> str:
        """Collapse whitespace runs to a single separator."""
        if not self.keep_newlines:
            return _RE_WHITESPACE.sub(" ", text)
        text = _RE_HORIZONTAL_SPACE.sub(" ", text)
        return _RE_LINE_BREAKS.sub("\n", text)

    def normalize(self, text: str) -> str:
        """Normalize text.

        Args:
            text: Raw or reconstructed text.

        Returns:
            Cleaned text; ``normalize(normalize(x)) == normalize(x)``.
        """
        if not text:
            return ""
        text = self.filter_characters(text)
        text = self.collapse_whitespace(text)
        text = _RE_TERMINATOR_SPACING.sub(r"\1 ", text)
        return text.strip()
