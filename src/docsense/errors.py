"""Exception taxonomy for the analysis pipeline.

Hard failures propagate to the caller and abort the request with no partial
result. Soft failures are instantiated and recorded by the component that
absorbs them, but never raised past that component.

Collaborators (OCR, translation, language service) signal trouble with
``BackendError``; core components translate it into one of the types below.
"""

from typing import Optional


class DocSenseError(Exception):
    """Base class for all pipeline errors."""


class BackendError(DocSenseError):
    """An external collaborator call failed."""

    def __init__(self, message: str, service: Optional[str] = None):
        super().__init__(message)
        self.service = service


class AnalysisRequestError(DocSenseError):
    """The analysis request itself is invalid (missing or unknown parameters)."""


class ExtractionError(DocSenseError):
    """OCR or layout reconstruction failed, or produced no usable text."""


# Name used by the layout stage contract.
DocumentProcessingError = ExtractionError


class TranslationError(DocSenseError):
    """A chunk translation call failed; the whole translation is discarded."""

    def __init__(self, chunk_index: int, detail: str):
        super().__init__(f"Translation failed at chunk {chunk_index}: {detail}")
        self.chunk_index = chunk_index
        self.detail = detail


class UnsupportedLanguagePairError(DocSenseError):
    """The translation backend rejects the source/target combination."""

    def __init__(self, source_language: str, target_language: str, detail: str = ""):
        message = f"Unsupported language pair: {source_language} -> {target_language}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        self.source_language = source_language
        self.target_language = target_language


class SoftFailure(DocSenseError):
    """A recoverable failure, replaced locally by a fallback value."""


class AnalysisBackendSoftFailure(SoftFailure):
    """Sentiment/key-phrase/entity analysis failed for one sentence."""

    def __init__(self, sentence_index: int, detail: str):
        super().__init__(f"Sentence {sentence_index} analysis failed: {detail}")
        self.sentence_index = sentence_index
        self.detail = detail


class LanguageDetectionSoftFailure(SoftFailure):
    """Dominant-language detection failed; a default language was used."""

    def __init__(self, default_language: str, detail: str):
        super().__init__(
            f"Language detection failed, using '{default_language}': {detail}"
        )
        self.default_language = default_language
        self.detail = detail
