"""Translation Stage - Translate text chunk by chunk.

Chunks are translated strictly in index order with a plain loop, one call
at a time, and joined with a single space. Any failing chunk discards the
whole translation.
"""

import logging
from typing import Optional

from docsense.backends.base import TranslationBackend
from docsense.errors import BackendError, TranslationError

from .stage_chunk import CHUNK_SEPARATOR, TextChunker

logger = logging.getLogger(__name__)


class TranslationOrchestrator:
    """Drives sequential chunk translation and reassembly."""

    def __init__(
        self,
        backend: TranslationBackend,
        chunker: Optional[TextChunker] = None,
    ):
        self.backend = backend
        self.chunker = chunker or TextChunker()

    def translate(self, text: str, source_language: str, target_language: str) -> str:
        """Translate text between two languages.

        Args:
            text: Normalized source text.
            source_language: Source language code.
            target_language: Target language code.

        Returns:
            Translated text, or the input unchanged when both languages match.

        Raises:
            TranslationError: A chunk call failed (carries the chunk index).
            UnsupportedLanguagePairError: The backend rejected the pair.
        """
        if source_language == target_language:
            return text

        chunks = self.chunker.chunk(text)
        logger.info(
            "Translating %d chunks %s -> %s", len(chunks), source_language, target_language
        )

        translated: list[str] = []
        for chunk in chunks:
            try:
                result = self.backend.translate_chunk(chunk.text, source_language, target_language)
            except BackendError as exc:
                logger.error("Chunk %d translation failed: %s", chunk.index, exc)
                raise TranslationError(chunk.index, str(exc)) from exc
            translated.append(result)

        return CHUNK_SEPARATOR.join(translated)
