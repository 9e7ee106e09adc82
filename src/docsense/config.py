"""Configuration management for the DocSense analysis pipeline."""

from pydantic import model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # AWS
    aws_region: str = "ap-southeast-1"

    # Language service
    default_language: str = "en"
    language_sample_chars: int = 1000

    # Translation
    max_chunk_size: int = 4800

    # Layout reconstruction
    row_tolerance: float = 0.01
    table_delimiter: str = " | "
    normalize_keep_newlines: bool = False
    min_image_text_length: int = 100

    # Processing
    max_workers: int = 8

    # Summarization (empirical, tune per corpus)
    sentiment_weight: float = 0.1
    key_phrase_weight: float = 0.5
    entity_weight: float = 0.4
    first_sentence_boost: float = 1.5
    last_sentence_boost: float = 1.2
    numeric_boost: float = 1.1
    dedup_threshold: float = 0.55

    # Logging
    log_level: str = "INFO"

    @model_validator(mode="after")
    def check_weights(self) -> "Settings":
        """Scoring weights must form a convex combination."""
        total = self.sentiment_weight + self.key_phrase_weight + self.entity_weight
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"Summary weights must sum to 1.0, got {total:.3f}")
        return self

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
