"""Contracts for the external collaborators consumed by the pipeline.

Implementations signal any call failure by raising ``BackendError``;
translation backends additionally raise ``UnsupportedLanguagePairError``
when a language combination is rejected.
"""

from typing import Optional, Protocol, runtime_checkable

from docsense.models import Block, SentimentResult


@runtime_checkable
class OCRProvider(Protocol):
    """Turns raw document bytes into a flat list of typed blocks."""

    def detect_layout(self, document_bytes: bytes, analyze_layout: bool = True) -> list[Block]:
        """Run OCR on a document.

        Args:
            document_bytes: Raw file content.
            analyze_layout: Also detect tables and form fields. Plain text
                detection is cheaper but yields only PAGE/LINE/WORD blocks.
        """
        ...


@runtime_checkable
class TranslationBackend(Protocol):
    """Machine translation with a hard per-call text length limit."""

    def translate_chunk(self, text: str, source_language: str, target_language: str) -> str:
        ...


@runtime_checkable
class LanguageClassifier(Protocol):
    """Dominant-language classification."""

    def detect_dominant_language(self, text_sample: str) -> Optional[str]:
        ...


@runtime_checkable
class LanguageAnnotator(Protocol):
    """Per-sentence sentiment, key phrase and entity annotation."""

    def detect_sentiment(self, text: str, language: str) -> SentimentResult:
        ...

    def detect_key_phrases(self, text: str, language: str) -> list[str]:
        ...

    def detect_entities(self, text: str, language: str) -> list[str]:
        ...
