"""Block-level models for OCR output and the per-request block graph."""

from typing import Any, Iterable, Iterator, Optional

from pydantic import Field

from .base import BlockType, BoundingBox, EntityKind, FrozenModel, RelationshipType


class Relationship(FrozenModel):
    """Directed edge from one block to a list of target block ids."""

    kind: RelationshipType
    ids: tuple[str, ...] = Field(default_factory=tuple)


class Block(FrozenModel):
    """
    One OCR-detected primitive.

    Blocks are produced wholesale by the OCR provider for a single request
    and are never modified afterwards. Identity is the ``id``; relationships
    reference other blocks by id only.
    """

    id: str
    block_type: BlockType
    text: Optional[str] = None
    bbox: BoundingBox = Field(default_factory=BoundingBox)
    page: int = Field(default=1, ge=1)
    relationships: tuple[Relationship, ...] = Field(default_factory=tuple)

    # Table cells (1-indexed, as returned by Textract)
    row_index: Optional[int] = Field(None, ge=1)
    column_index: Optional[int] = Field(None, ge=1)

    # Form fields
    entity_types: tuple[EntityKind, ...] = Field(default_factory=tuple)

    confidence: Optional[float] = Field(None, ge=0.0, le=100.0)

    def related_ids(self, kind: RelationshipType) -> list[str]:
        """All target ids of the given relationship kind, in source order."""
        ids: list[str] = []
        for rel in self.relationships:
            if rel.kind == kind:
                ids.extend(rel.ids)
        return ids

    @property
    def is_key(self) -> bool:
        """Whether this KEY_VALUE_SET block is the key side of a form field."""
        if self.block_type != BlockType.KEY_VALUE_SET:
            return False
        if self.entity_types:
            return EntityKind.KEY in self.entity_types
        return bool(self.related_ids(RelationshipType.VALUE))

    @classmethod
    def from_textract(cls, data: dict[str, Any]) -> Optional["Block"]:
        """Build a Block from one Textract-style JSON block.

        Returns None for block types and relationship kinds the pipeline
        does not model (selection elements, layout hints, queries, ...).
        """
        try:
            block_type = BlockType(data["BlockType"])
        except ValueError:
            return None

        geometry = data.get("Geometry", {}).get("BoundingBox", {})
        relationships = []
        for rel in data.get("Relationships") or []:
            try:
                kind = RelationshipType(rel.get("Type"))
            except ValueError:
                continue
            relationships.append(Relationship(kind=kind, ids=tuple(rel.get("Ids", []))))

        entity_types = []
        for value in data.get("EntityTypes") or []:
            try:
                entity_types.append(EntityKind(value))
            except ValueError:
                continue

        return cls(
            id=data["Id"],
            block_type=block_type,
            text=data.get("Text"),
            bbox=BoundingBox(
                top=geometry.get("Top", 0.0),
                left=geometry.get("Left", 0.0),
                width=geometry.get("Width", 0.0),
                height=geometry.get("Height", 0.0),
            ),
            page=data.get("Page") or 1,
            relationships=tuple(relationships),
            row_index=data.get("RowIndex"),
            column_index=data.get("ColumnIndex"),
            entity_types=tuple(entity_types),
            confidence=data.get("Confidence"),
        )


def blocks_from_textract(raw_blocks: Iterable[dict[str, Any]]) -> list[Block]:
    """Parse a Textract ``Blocks`` array, skipping unmodelled block types."""
    blocks = []
    for raw in raw_blocks:
        block = Block.from_textract(raw)
        if block is not None:
            blocks.append(block)
    return blocks


class BlockGraph:
    """Read-only id lookup over the full block set of one document.

    Built once per request. Relationships are followed by id lookup, so the
    graph never holds references between blocks, only the id table.
    Unresolvable ids are ignored.
    """

    def __init__(self, blocks: Iterable[Block]):
        self._blocks: dict[str, Block] = {}
        for block in blocks:
            self._blocks.setdefault(block.id, block)
        self._referenced: frozenset[str] = frozenset(
            target
            for block in self._blocks.values()
            for rel in block.relationships
            for target in rel.ids
        )

    def __len__(self) -> int:
        return len(self._blocks)

    def __iter__(self) -> Iterator[Block]:
        return iter(self._blocks.values())

    def __contains__(self, block_id: object) -> bool:
        return block_id in self._blocks

    def get(self, block_id: str) -> Optional[Block]:
        """Look up a block by id."""
        return self._blocks.get(block_id)

    def resolve(self, ids: Iterable[str]) -> list[Block]:
        """Resolve ids to blocks, dropping dangling ids."""
        return [self._blocks[i] for i in ids if i in self._blocks]

    def children(self, block: Block, block_type: Optional[BlockType] = None) -> list[Block]:
        """Direct CHILD targets of a block, optionally filtered by type."""
        resolved = self.resolve(block.related_ids(RelationshipType.CHILD))
        if block_type is not None:
            resolved = [b for b in resolved if b.block_type == block_type]
        return resolved

    def values(self, block: Block) -> list[Block]:
        """VALUE targets of a key block."""
        return self.resolve(block.related_ids(RelationshipType.VALUE))

    def of_type(self, block_type: BlockType) -> list[Block]:
        """All blocks of a type, in provider order."""
        return [b for b in self._blocks.values() if b.block_type == block_type]

    def pages(self) -> list[Block]:
        """PAGE blocks sorted by page number."""
        return sorted(self.of_type(BlockType.PAGE), key=lambda b: b.page)

    def is_orphan(self, block: Block) -> bool:
        """Whether no other block references this one."""
        return block.id not in self._referenced

    def word_text(self, block: Block) -> str:
        """Space-joined text of a block's WORD children."""
        words = self.children(block, BlockType.WORD)
        return " ".join(w.text for w in words if w.text)
