"""Pipeline stages for document analysis.

Text Reconstruction:
1. stage_extract - File bytes to normalized text (OCR or decode)
2. stage_layout - OCR blocks to reading-order text
3. stage_normalize - Character filtering and whitespace cleanup

Translation:
4. stage_chunk - Size-bounded chunking on sentence boundaries
5. stage_translate - Sequential chunk translation and reassembly

Summarization:
6. stage_language - Dominant-language detection
7. stage_sentence - Per-sentence feature extraction (parallel)
8. stage_summarize - Scoring, selection and deduplication

Each stage is independent and can be run separately or
orchestrated through ``docsense.service.DocumentAnalyzer``.
"""

from .stage_chunk import TextChunker
from .stage_extract import DocumentExtractor
from .stage_language import LanguageDetector
from .stage_layout import LayoutReconstructor
from .stage_normalize import TextNormalizer, split_sentences
from .stage_sentence import SentenceAnalyzer, fan_out
from .stage_summarize import ScoringWeights, Summarizer, jaccard_similarity
from .stage_translate import TranslationOrchestrator

__all__ = [
    # Extraction
    "DocumentExtractor",
    # Layout
    "LayoutReconstructor",
    # Normalization
    "TextNormalizer",
    "split_sentences",
    # Translation
    "TextChunker",
    "TranslationOrchestrator",
    # Language
    "LanguageDetector",
    # Sentence analysis
    "SentenceAnalyzer",
    "fan_out",
    # Summarization
    "ScoringWeights",
    "Summarizer",
    "jaccard_similarity",
]
