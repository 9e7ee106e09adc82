"""Extraction Stage - Turn uploaded file bytes into normalized text.

Routing by MIME type:
- PDF: OCR with table and form analysis
- Images: plain text detection, retried with table/form analysis when the
  result is suspiciously short
- Anything else: decoded as UTF-8 text
"""

import logging
from typing import Optional

from docsense.backends.base import OCRProvider
from docsense.config import settings
from docsense.errors import BackendError, ExtractionError

from .stage_layout import LayoutReconstructor
from .stage_normalize import TextNormalizer

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"


class DocumentExtractor:
    """Extracts normalized text from a document through the OCR provider."""

    def __init__(
        self,
        ocr_provider: OCRProvider,
        reconstructor: Optional[LayoutReconstructor] = None,
        normalizer: Optional[TextNormalizer] = None,
        min_image_text_length: Optional[int] = None,
    ):
        """Initialize extractor.

        Args:
            ocr_provider: OCR backend.
            reconstructor: Layout reconstructor for OCR output.
            normalizer: Normalizer for plain text files.
            min_image_text_length: Below this many characters, image text
                detection is retried with full layout analysis.
        """
        self.ocr_provider = ocr_provider
        self.normalizer = normalizer or TextNormalizer()
        self.reconstructor = reconstructor or LayoutReconstructor(normalizer=self.normalizer)
        self.min_image_text_length = (
            min_image_text_length
            if min_image_text_length is not None
            else settings.min_image_text_length
        )

    def extract(self, file_bytes: bytes, mime_type: str) -> str:
        """Extract normalized text from a document.

        Args:
            file_bytes: Raw file content.
            mime_type: Declared content type of the file.

        Returns:
            Non-empty normalized text.

        Raises:
            ExtractionError: OCR failed, decoding failed, or no text was found.
        """
        mime_type = (mime_type or "").lower()
        if mime_type == PDF_MIME_TYPE:
            text = self._ocr(file_bytes, analyze_layout=True)
        elif mime_type.startswith("image/"):
            text = self._extract_image(file_bytes)
        else:
            text = self._extract_plain_text(file_bytes)

        if not text.strip():
            raise ExtractionError("No text could be extracted from the file")

        logger.info("Extracted %d characters from %s document", len(text), mime_type or "unknown")
        return text

    def _ocr(self, file_bytes: bytes, analyze_layout: bool) -> str:
        try:
            blocks = self.ocr_provider.detect_layout(file_bytes, analyze_layout=analyze_layout)
        except BackendError as exc:
            logger.error("OCR failed: %s", exc)
            raise ExtractionError(f"Document processing failed: {exc}") from exc
        return self.reconstructor.reconstruct(blocks)

    def _extract_image(self, file_bytes: bytes) -> str:
        text = self._ocr(file_bytes, analyze_layout=False)
        if len(text) >= self.min_image_text_length:
            return text

        logger.debug("Only %d characters detected, retrying with layout analysis", len(text))
        analyzed = self._ocr(file_bytes, analyze_layout=True)
        return analyzed if len(analyzed) > len(text) else text

    def _extract_plain_text(self, file_bytes: bytes) -> str:
        try:
            text = file_bytes.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ExtractionError(f"Text file processing failed: {exc}") from exc
        return self.normalizer.normalize(text)
