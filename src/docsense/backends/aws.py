"""AWS implementations of the collaborator contracts.

- Textract for OCR (plain text detection, or table/form analysis)
- Translate for chunk translation
- Comprehend for language detection and sentence annotation

Each adapter owns a private boto3 session and builds its client lazily, once,
under a lock: sentence analysis shares one adapter across worker threads.
Injected clients skip the session entirely, which is how the tests drive
these adapters.

Malformed replies are reported as ``BackendError`` like any failed call.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Any, Iterator, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from docsense.config import settings
from docsense.errors import BackendError, UnsupportedLanguagePairError
from docsense.models import (
    Block,
    Sentiment,
    SentimentResult,
    SentimentScore,
    blocks_from_textract,
)

logger = logging.getLogger(__name__)

TEXTRACT_FEATURES = ["TABLES", "FORMS"]

# Raised while parsing a reply that does not have the documented shape.
# Pydantic's ValidationError is a ValueError.
MALFORMED_REPLY_ERRORS = (AttributeError, KeyError, TypeError, ValueError)


@contextmanager
def backend_call(service: str) -> Iterator[None]:
    """Wrap botocore failures and malformed replies in BackendError."""
    try:
        yield
    except (BotoCoreError, ClientError) as exc:
        raise BackendError(f"{service} call failed: {exc}", service=service) from exc
    except MALFORMED_REPLY_ERRORS as exc:
        raise BackendError(f"{service} returned a malformed reply: {exc!r}", service=service) from exc


def _error_code(exc: ClientError) -> str:
    return exc.response.get("Error", {}).get("Code", "")


class _AWSClientMixin:
    service_name = ""

    def __init__(self, client: Any = None, region_name: Optional[str] = None):
        self._client = client
        self._client_lock = threading.Lock()
        self.region_name = region_name or settings.aws_region

    @property
    def client(self) -> Any:
        if self._client is None:
            with self._client_lock:
                if self._client is None:
                    session = boto3.session.Session(region_name=self.region_name)
                    self._client = session.client(self.service_name)
                    logger.debug("Created %s client in %s", self.service_name, self.region_name)
        return self._client


class TextractOCRProvider(_AWSClientMixin):
    """OCR provider backed by Amazon Textract's synchronous APIs."""

    service_name = "textract"

    def detect_layout(self, document_bytes: bytes, analyze_layout: bool = True) -> list[Block]:
        """Run Textract and parse its block list.

        Args:
            document_bytes: Raw image or single-page PDF bytes.
            analyze_layout: Use AnalyzeDocument with TABLES and FORMS,
                else DetectDocumentText.

        Returns:
            Parsed blocks in provider order.
        """
        document = {"Bytes": document_bytes}
        with backend_call(self.service_name):
            if analyze_layout:
                response = self.client.analyze_document(
                    Document=document, FeatureTypes=TEXTRACT_FEATURES
                )
            else:
                response = self.client.detect_document_text(Document=document)
            blocks = blocks_from_textract(response.get("Blocks", []))

        logger.debug("Textract returned %d blocks (analyze=%s)", len(blocks), analyze_layout)
        return blocks


class AWSTranslateBackend(_AWSClientMixin):
    """Translation backend backed by Amazon Translate."""

    service_name = "translate"

    def __init__(
        self,
        client: Any = None,
        region_name: Optional[str] = None,
        formality: Optional[str] = "FORMAL",
        mask_profanity: bool = True,
    ):
        super().__init__(client=client, region_name=region_name)
        self.formality = formality
        self.mask_profanity = mask_profanity

    def _settings(self) -> dict[str, str]:
        options = {}
        if self.formality:
            options["Formality"] = self.formality
        if self.mask_profanity:
            options["Profanity"] = "MASK"
        return options

    def translate_chunk(self, text: str, source_language: str, target_language: str) -> str:
        params: dict[str, Any] = {
            "Text": text,
            "SourceLanguageCode": source_language,
            "TargetLanguageCode": target_language,
        }
        options = self._settings()
        if options:
            params["Settings"] = options

        try:
            response = self.client.translate_text(**params)
        except ClientError as exc:
            if _error_code(exc) == "UnsupportedLanguagePairException":
                raise UnsupportedLanguagePairError(
                    source_language, target_language, str(exc)
                ) from exc
            raise BackendError(f"translate call failed: {exc}", service="translate") from exc
        except BotoCoreError as exc:
            raise BackendError(f"translate call failed: {exc}", service="translate") from exc

        with backend_call(self.service_name):
            return response["TranslatedText"]


class ComprehendLanguageService(_AWSClientMixin):
    """Language classifier and sentence annotator backed by Amazon Comprehend."""

    service_name = "comprehend"

    def detect_dominant_language(self, text_sample: str) -> Optional[str]:
        with backend_call(self.service_name):
            response = self.client.detect_dominant_language(Text=text_sample)
            languages = response.get("Languages") or []
            if not languages:
                return None
            best = max(languages, key=lambda lang: lang.get("Score", 0.0))
            return best.get("LanguageCode")

    def detect_sentiment(self, text: str, language: str) -> SentimentResult:
        with backend_call(self.service_name):
            response = self.client.detect_sentiment(Text=text, LanguageCode=language)
            scores = response.get("SentimentScore", {})
            return SentimentResult(
                label=Sentiment(response.get("Sentiment", Sentiment.NEUTRAL.value)),
                scores=SentimentScore(
                    positive=scores.get("Positive", 0.0),
                    negative=scores.get("Negative", 0.0),
                    neutral=scores.get("Neutral", 0.0),
                    mixed=scores.get("Mixed", 0.0),
                ),
            )

    def detect_key_phrases(self, text: str, language: str) -> list[str]:
        with backend_call(self.service_name):
            response = self.client.detect_key_phrases(Text=text, LanguageCode=language)
            return [phrase["Text"] for phrase in response.get("KeyPhrases", [])]

    def detect_entities(self, text: str, language: str) -> list[str]:
        with backend_call(self.service_name):
            response = self.client.detect_entities(Text=text, LanguageCode=language)
            return [entity["Text"] for entity in response.get("Entities", [])]
