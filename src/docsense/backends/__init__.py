"""External collaborators: contracts and AWS implementations."""

from .aws import (
    AWSTranslateBackend,
    ComprehendLanguageService,
    TextractOCRProvider,
)
from .base import (
    LanguageAnnotator,
    LanguageClassifier,
    OCRProvider,
    TranslationBackend,
)

__all__ = [
    # Contracts
    "LanguageAnnotator",
    "LanguageClassifier",
    "OCRProvider",
    "TranslationBackend",
    # AWS
    "AWSTranslateBackend",
    "ComprehendLanguageService",
    "TextractOCRProvider",
]
