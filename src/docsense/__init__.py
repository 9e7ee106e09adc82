"""DocSense - OCR layout reconstruction, translation and extractive summarization."""

from docsense.errors import (
    AnalysisRequestError,
    DocSenseError,
    ExtractionError,
    TranslationError,
    UnsupportedLanguagePairError,
)
from docsense.models import AnalysisResult
from docsense.service import SUPPORTED_LANGUAGES, DocumentAnalyzer

__version__ = "0.1.0"

__all__ = [
    "AnalysisRequestError",
    "AnalysisResult",
    "DocSenseError",
    "DocumentAnalyzer",
    "ExtractionError",
    "SUPPORTED_LANGUAGES",
    "TranslationError",
    "UnsupportedLanguagePairError",
]
