"""Layout Reconstruction Stage - Rebuild reading-order text from OCR blocks.

Walks the block graph page by page:
- LINE blocks are emitted as text lines
- TABLE blocks are serialized row by row from their CELL children
- KEY_VALUE_SET blocks are emitted as "Form Field: <key>: <value>"

Blocks within a page are ordered top-to-bottom, and left-to-right within a
visual row, using a height-proportional tolerance band on the top edge.
"""

import logging
from collections import defaultdict
from functools import cmp_to_key
from typing import Iterable, Optional, Union

from docsense.config import settings
from docsense.models import Block, BlockGraph, BlockType

from .stage_normalize import TextNormalizer

logger = logging.getLogger(__name__)

# Page children that produce output; WORD blocks are only read through these.
CONTENT_TYPES = (BlockType.LINE, BlockType.TABLE, BlockType.KEY_VALUE_SET)

FORM_FIELD_PREFIX = "Form Field"


class LayoutReconstructor:
    """Reconstructs plain text in reading order from OCR blocks."""

    def __init__(
        self,
        row_tolerance: Optional[float] = None,
        table_delimiter: Optional[str] = None,
        normalizer: Optional[TextNormalizer] = None,
    ):
        """Initialize reconstructor.

        Args:
            row_tolerance: Fraction of the taller block's height within which
                two tops count as the same visual row.
            table_delimiter: Separator between serialized table cells.
            normalizer: Normalizer applied to the assembled text.
        """
        self.row_tolerance = row_tolerance if row_tolerance is not None else settings.row_tolerance
        self.table_delimiter = table_delimiter or settings.table_delimiter
        self.normalizer = normalizer or TextNormalizer()

    def reconstruct(self, blocks: Union[BlockGraph, Iterable[Block]]) -> str:
        """Reconstruct normalized reading-order text.

        Args:
            blocks: OCR blocks for one document, or a prebuilt graph.

        Returns:
            Normalized text; empty when the blocks carry no text.
        """
        return self.normalizer.normalize(self.render(blocks))

    def render(self, blocks: Union[BlockGraph, Iterable[Block]]) -> str:
        """Reconstruct layout text before normalization (line breaks kept)."""
        graph = blocks if isinstance(blocks, BlockGraph) else BlockGraph(blocks)

        pages = []
        for page_number, children in self._page_contents(graph):
            fragments = [self._render_block(graph, block) for block in self.sort_reading_order(children)]
            page_text = "".join(f for f in fragments if f)
            logger.debug("Page %d: %d blocks, %d chars", page_number, len(children), len(page_text))
            pages.append(page_text)

        return "\n".join(p for p in pages if p)

    def _page_contents(self, graph: BlockGraph) -> list[tuple[int, list[Block]]]:
        """Content blocks per page, pages in ascending order.

        Content blocks nobody references are attached to the page matching
        their page number, so providers that omit PAGE edges lose nothing.
        """
        orphans: dict[int, list[Block]] = defaultdict(list)
        for block in graph:
            if block.block_type in CONTENT_TYPES and graph.is_orphan(block):
                orphans[block.page].append(block)

        contents: dict[int, list[Block]] = defaultdict(list)
        seen: set[str] = set()
        for page in graph.pages():
            for child in graph.children(page):
                if child.block_type in CONTENT_TYPES and child.id not in seen:
                    seen.add(child.id)
                    contents[page.page].append(child)

        for page_number, blocks in orphans.items():
            contents[page_number].extend(b for b in blocks if b.id not in seen)

        return sorted(contents.items())

    def _compare(self, a: Block, b: Block) -> int:
        if a.bbox.same_row(b.bbox, self.row_tolerance):
            diff = a.bbox.left - b.bbox.left
        else:
            diff = a.bbox.top - b.bbox.top
        return (diff > 0) - (diff < 0)

    def sort_reading_order(self, blocks: list[Block]) -> list[Block]:
        """Order blocks top-to-bottom, left-to-right within a row."""
        return sorted(blocks, key=cmp_to_key(self._compare))

    def _render_block(self, graph: BlockGraph, block: Block) -> str:
        if block.block_type == BlockType.LINE:
            return f"{block.text}\n" if block.text else ""
        if block.block_type == BlockType.TABLE:
            rows = self.table_rows(graph, block)
            return "".join(f"{row}\n" for row in rows)
        if block.block_type == BlockType.KEY_VALUE_SET:
            field = self.form_field(graph, block)
            return f"{field}\n" if field else ""
        return ""

    def table_rows(self, graph: BlockGraph, table: Block) -> list[str]:
        """Serialize a table as delimited rows in row-then-column order.

        Columns span the table's highest column index, so a missing cell
        yields an empty field instead of shifting its neighbours left.
        """
        cells = [c for c in graph.children(table, BlockType.CELL) if c.row_index and c.column_index]
        if not cells:
            return []

        rows: dict[int, dict[int, str]] = defaultdict(dict)
        for cell in cells:
            rows[cell.row_index][cell.column_index] = self._cell_text(graph, cell)

        num_cols = max(c.column_index for c in cells)
        return [
            self.table_delimiter.join(rows[r].get(col, "") for col in range(1, num_cols + 1))
            for r in sorted(rows)
        ]

    @staticmethod
    def _cell_text(graph: BlockGraph, cell: Block) -> str:
        text = graph.word_text(cell)
        return text or (cell.text or "")

    @staticmethod
    def form_field(graph: BlockGraph, block: Block) -> Optional[str]:
        """Render a key block as a form field line.

        Value blocks are rendered through their key; keys without text are
        skipped.
        """
        if not block.is_key:
            return None

        key = graph.word_text(block).strip()
        if not key:
            return None

        value = " ".join(
            text for text in (graph.word_text(v) for v in graph.values(block)) if text
        )
        return f"{FORM_FIELD_PREFIX}: {key}: {value}"
