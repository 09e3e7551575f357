"""
TableRegion Entity - a ruled table located on a journal page.

Domain Rules:
- Cells never overlap one another
- Together the cells tile the table's bounding rectangle exactly
- Each cell has a grid position (row, column) and may span several columns or rows
- Cell text is filled in after recognition; geometry is fixed at detection time
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Tuple

from ..value_objects.bounding_box import BoundingBox
from ..value_objects.confidence import Confidence


@dataclass(frozen=True)
class TableCell:
    """A single cell of a detected table."""
    row: int
    column: int
    bounding_box: BoundingBox
    text: str = ""
    rowspan: int = 1
    colspan: int = 1
    confidence: Confidence = Confidence(0.0)

    def __post_init__(self):
        if self.row < 0:
            raise ValueError("Row index must be non-negative")
        if self.column < 0:
            raise ValueError("Column index must be non-negative")
        if self.rowspan < 1:
            raise ValueError("Rowspan must be at least 1")
        if self.colspan < 1:
            raise ValueError("Colspan must be at least 1")
        if not isinstance(self.confidence, Confidence):
            object.__setattr__(self, 'confidence', Confidence.from_raw(self.confidence))

    def is_empty(self) -> bool:
        return not self.text or self.text.strip() == ""

    def spans_multiple_cells(self) -> bool:
        return self.rowspan > 1 or self.colspan > 1

    def with_text(self, text: str, confidence: float) -> TableCell:
        return replace(self, text=text, confidence=Confidence(confidence))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "row": self.row,
            "column": self.column,
            "bounding_box": self.bounding_box.to_dict(),
            "text": self.text,
            "rowspan": self.rowspan,
            "colspan": self.colspan,
            "confidence": self.confidence.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TableCell:
        return cls(
            row=data.get("row", 0),
            column=data.get("column", 0),
            bounding_box=BoundingBox.from_dict(data.get("bounding_box")),
            text=data.get("text", ""),
            rowspan=data.get("rowspan", 1),
            colspan=data.get("colspan", 1),
            confidence=Confidence.from_raw(data.get("confidence", 0.0)),
        )


@dataclass(frozen=True)
class TableRegion:
    """
    Table detected from rule-line intersections.

    ``rows``/``columns`` describe the underlying grid; cells with spans cover
    several grid slots, so ``len(cells)`` can be lower than ``rows * columns``.
    """
    bounding_box: BoundingBox
    rows: int
    columns: int
    cells: Tuple[TableCell, ...]
    confidence: Confidence
    page_number: int = 1

    def __post_init__(self):
        if not isinstance(self.cells, tuple):
            object.__setattr__(self, 'cells', tuple(self.cells))
        if not isinstance(self.confidence, Confidence):
            object.__setattr__(self, 'confidence', Confidence.from_raw(self.confidence))
        if self.page_number < 1:
            raise ValueError("Page number must be positive")

    def is_empty(self) -> bool:
        return not self.cells or all(cell.is_empty() for cell in self.cells)

    def get_cell(self, row: int, column: int) -> Optional[TableCell]:
        """Cell covering grid slot (row, column), spans included."""
        for cell in self.cells:
            if cell.row <= row < cell.row + cell.rowspan and cell.column <= column < cell.column + cell.colspan:
                return cell
        return None

    def get_row(self, row_index: int) -> List[TableCell]:
        return sorted(
            [cell for cell in self.cells if cell.row == row_index],
            key=lambda c: c.column
        )

    def has_spanning_cells(self) -> bool:
        return any(cell.spans_multiple_cells() for cell in self.cells)

    def with_cells(self, cells: List[TableCell]) -> TableRegion:
        return replace(self, cells=tuple(cells))

    def with_page_number(self, page_number: int) -> TableRegion:
        return replace(self, page_number=page_number)

    @property
    def text(self) -> str:
        """Row-major text, cells separated by tabs and rows by newlines."""
        return "\n".join(
            "\t".join(cell.text for cell in self.get_row(row_index))
            for row_index in range(self.rows)
        )

    def to_grid(self) -> List[List[str]]:
        """2D grid of cell text; spanned slots repeat the spanning cell's text."""
        grid = [["" for _ in range(self.columns)] for _ in range(self.rows)]
        for cell in self.cells:
            for r in range(cell.row, min(self.rows, cell.row + cell.rowspan)):
                for c in range(cell.column, min(self.columns, cell.column + cell.colspan)):
                    grid[r][c] = cell.text
        return grid

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bounding_box": self.bounding_box.to_dict(),
            "rows": self.rows,
            "columns": self.columns,
            "cells": [cell.to_dict() for cell in self.cells],
            "confidence": self.confidence.value,
            "page_number": self.page_number,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TableRegion:
        return cls(
            bounding_box=BoundingBox.from_dict(data.get("bounding_box")),
            rows=data.get("rows", 0),
            columns=data.get("columns", 0),
            cells=tuple(TableCell.from_dict(cell) for cell in data.get("cells", [])),
            confidence=Confidence.from_raw(data.get("confidence", 0.0)),
            page_number=data.get("page_number", 1),
        )

    def __repr__(self) -> str:
        return (
            f"TableRegion(rows={self.rows}, cols={self.columns}, "
            f"cells={len(self.cells)}, page={self.page_number}, "
            f"confidence={self.confidence.value:.2f})"
        )
