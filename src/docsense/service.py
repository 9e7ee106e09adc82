"""Document analysis entry point consumed by the HTTP layer.

Hard failures (``ExtractionError``, ``TranslationError``,
``UnsupportedLanguagePairError``, ``AnalysisRequestError``) propagate to the
caller, which maps them to status codes. Soft failures never leave the
pipeline.
"""

import logging
from typing import Optional, Union

from docsense.backends.base import (
    LanguageAnnotator,
    LanguageClassifier,
    OCRProvider,
    TranslationBackend,
)
from docsense.errors import AnalysisRequestError
from docsense.models import AnalysisResult, AnalysisType, SummaryLength
from docsense.pipeline import (
    DocumentExtractor,
    LanguageDetector,
    SentenceAnalyzer,
    Summarizer,
    TranslationOrchestrator,
)
from docsense.pipeline.stage_summarize import parse_summary_length

logger = logging.getLogger(__name__)

# Target languages offered to users
SUPPORTED_LANGUAGES = {
    "vi": "Tiếng Việt",
    "en": "English",
    "ja": "日本語",
    "ko": "한국어",
    "zh": "中文",
    "fr": "Français",
    "de": "Deutsch",
    "es": "Español",
    "ru": "Русский",
}


def parse_analysis_type(value: Union[str, AnalysisType]) -> AnalysisType:
    try:
        return AnalysisType(value)
    except ValueError:
        valid = ", ".join(t.value for t in AnalysisType)
        raise AnalysisRequestError(
            f"Unknown analysis type '{value}' (expected {valid})"
        ) from None


class DocumentAnalyzer:
    """Runs extraction, language detection and translation or summarization."""

    def __init__(
        self,
        ocr_provider: OCRProvider,
        translation_backend: TranslationBackend,
        language_classifier: LanguageClassifier,
        language_annotator: LanguageAnnotator,
    ):
        self.extractor = DocumentExtractor(ocr_provider)
        self.detector = LanguageDetector(language_classifier)
        self.translator = TranslationOrchestrator(translation_backend)
        self.summarizer = Summarizer(SentenceAnalyzer(language_annotator))

    @classmethod
    def from_aws(cls, region_name: Optional[str] = None) -> "DocumentAnalyzer":
        """Build an analyzer wired to Textract, Translate and Comprehend."""
        from docsense.backends.aws import (
            AWSTranslateBackend,
            ComprehendLanguageService,
            TextractOCRProvider,
        )

        comprehend = ComprehendLanguageService(region_name=region_name)
        return cls(
            ocr_provider=TextractOCRProvider(region_name=region_name),
            translation_backend=AWSTranslateBackend(region_name=region_name),
            language_classifier=comprehend,
            language_annotator=comprehend,
        )

    def analyze(
        self,
        file_bytes: bytes,
        mime_type: str,
        analysis_type: Union[str, AnalysisType],
        target_language: Optional[str] = None,
        summary_length: Union[str, SummaryLength, None] = None,
    ) -> AnalysisResult:
        """Analyze an uploaded document.

        Args:
            file_bytes: Raw file content.
            mime_type: Declared content type.
            analysis_type: "translate" or "summarize".
            target_language: Required for translation.
            summary_length: short, medium (default) or long.

        Returns:
            Immutable AnalysisResult.
        """
        kind = parse_analysis_type(analysis_type)
        if kind == AnalysisType.TRANSLATE and not target_language:
            raise AnalysisRequestError("Target language is required for translation")
        length = parse_summary_length(summary_length) if kind == AnalysisType.SUMMARIZE else None

        text = self.extractor.extract(file_bytes, mime_type)
        source_language = self.detector.detect(text)
        logger.info("Detected source language: %s", source_language)

        if kind == AnalysisType.TRANSLATE:
            result = self.translator.translate(text, source_language, target_language)
        else:
            result = self.summarizer.summarize(text, source_language, length)

        return AnalysisResult(
            analysis_type=kind,
            source_language=source_language,
            target_language=target_language if kind == AnalysisType.TRANSLATE else None,
            result_text=result,
            original_text=text,
        )
