"""Pytest configuration and fixtures."""

from typing import Optional

import pytest

from docsense.errors import BackendError
from docsense.models import (
    Block,
    BlockType,
    BoundingBox,
    EntityKind,
    Relationship,
    RelationshipType,
    Sentiment,
    SentimentResult,
    SentimentScore,
)


def make_block(
    block_id: str,
    block_type: BlockType,
    text: Optional[str] = None,
    top: float = 0.0,
    left: float = 0.0,
    height: float = 0.02,
    width: float = 0.3,
    page: int = 1,
    children: tuple = (),
    values: tuple = (),
    row: Optional[int] = None,
    col: Optional[int] = None,
    entity_types: tuple = (),
) -> Block:
    relationships = []
    if children:
        relationships.append(Relationship(kind=RelationshipType.CHILD, ids=tuple(children)))
    if values:
        relationships.append(Relationship(kind=RelationshipType.VALUE, ids=tuple(values)))
    return Block(
        id=block_id,
        block_type=block_type,
        text=text,
        bbox=BoundingBox(top=top, left=left, width=width, height=height),
        page=page,
        relationships=tuple(relationships),
        row_index=row,
        column_index=col,
        entity_types=tuple(EntityKind(e) for e in entity_types),
    )


@pytest.fixture
def block_factory():
    """Factory for hand-built OCR blocks."""
    return make_block


@pytest.fixture
def table_blocks():
    """One page holding a title line and a 2x2 table."""
    words = [
        make_block("w1", BlockType.WORD, "Name"),
        make_block("w2", BlockType.WORD, "Age"),
        make_block("w3", BlockType.WORD, "Alice"),
        make_block("w4", BlockType.WORD, "30"),
    ]
    # Cells deliberately out of order
    cells = [
        make_block("c4", BlockType.CELL, row=2, col=2, children=("w4",)),
        make_block("c1", BlockType.CELL, row=1, col=1, children=("w1",)),
        make_block("c3", BlockType.CELL, row=2, col=1, children=("w3",)),
        make_block("c2", BlockType.CELL, row=1, col=2, children=("w2",)),
    ]
    table = make_block("t1", BlockType.TABLE, top=0.3, height=0.2, children=("c1", "c2", "c3", "c4"))
    title = make_block("l1", BlockType.LINE, "Staff list", top=0.1)
    page = make_block("p1", BlockType.PAGE, height=1.0, width=1.0, children=("l1", "t1"))
    return [page, title, table, *cells, *words]


class FakeAnnotator:
    """Language service stub keyed by sentence text."""

    def __init__(
        self,
        key_phrases: Optional[dict] = None,
        entities: Optional[dict] = None,
        sentiments: Optional[dict] = None,
        failing: tuple = (),
    ):
        self.key_phrases = key_phrases or {}
        self.entities = entities or {}
        self.sentiments = sentiments or {}
        self.failing = set(failing)
        self.calls: list[tuple[str, str, str]] = []

    def _check(self, method: str, text: str, language: str) -> None:
        self.calls.append((method, text, language))
        if text in self.failing:
            raise BackendError("service unavailable", service="comprehend")

    def detect_sentiment(self, text: str, language: str) -> SentimentResult:
        self._check("sentiment", text, language)
        return self.sentiments.get(
            text,
            SentimentResult(label=Sentiment.NEUTRAL, scores=SentimentScore(neutral=1.0)),
        )

    def detect_key_phrases(self, text: str, language: str) -> list[str]:
        self._check("key_phrases", text, language)
        return list(self.key_phrases.get(text, []))

    def detect_entities(self, text: str, language: str) -> list[str]:
        self._check("entities", text, language)
        return list(self.entities.get(text, []))


@pytest.fixture
def fake_annotator():
    """Annotator that returns neutral, empty annotations."""
    return FakeAnnotator()


@pytest.fixture
def annotator_factory():
    """Build annotators with per-sentence annotations."""
    return FakeAnnotator
