"""Language Detection Stage - Dominant-language detection with a soft fallback."""

import logging
from typing import Optional

from docsense.backends.base import LanguageClassifier
from docsense.config import settings
from docsense.errors import BackendError, LanguageDetectionSoftFailure
from docsense.models import LanguageDetection

logger = logging.getLogger(__name__)


class LanguageDetector:
    """Detects the dominant language from a bounded text sample.

    Detection failure is not fatal: the default language is returned and
    the failure recorded on the detection result.
    """

    def __init__(
        self,
        classifier: LanguageClassifier,
        sample_chars: Optional[int] = None,
        default_language: Optional[str] = None,
    ):
        self.classifier = classifier
        self.sample_chars = sample_chars or settings.language_sample_chars
        self.default_language = default_language or settings.default_language

    def detect(self, text: str) -> str:
        """Return the dominant language code of the text."""
        return self.detect_detailed(text).language

    def detect_detailed(self, text: str) -> LanguageDetection:
        """Detect the language, reporting whether the default was substituted."""
        sample = (text or "")[: self.sample_chars]
        if not sample.strip():
            return LanguageDetection(language=self.default_language, fallback=True)

        try:
            language = self.classifier.detect_dominant_language(sample)
        except BackendError as exc:
            failure = LanguageDetectionSoftFailure(self.default_language, str(exc))
            logger.warning("%s", failure)
            return LanguageDetection(language=self.default_language, fallback=True, failure=failure)

        if not language:
            logger.warning("No language detected, using '%s'", self.default_language)
            return LanguageDetection(language=self.default_language, fallback=True)

        logger.debug("Detected language: %s", language)
        return LanguageDetection(language=language)
