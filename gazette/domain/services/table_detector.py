"""
TableDetector domain service.

Finds ruled tables inside the content rectangle from horizontal/vertical line
intersections, then builds a cell grid that tiles each table exactly.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Set, Tuple

from gazette.domain.entities.line import Line
from gazette.domain.entities.table_region import TableCell, TableRegion
from gazette.domain.value_objects.bounding_box import BoundingBox
from gazette.domain.value_objects.confidence import Confidence

logger = logging.getLogger(__name__)

Point = Tuple[int, int]


@dataclass(frozen=True)
class TableParams:
    intersection_tolerance: int = 5
    min_width: int = 100
    min_height: int = 60
    min_cell_size: int = 20
    expected_cell_area: int = 20000

    @classmethod
    def from_settings(cls, settings) -> TableParams:
        return cls(
            intersection_tolerance=settings.table_intersection_tolerance,
            min_width=settings.table_min_width,
            min_height=settings.table_min_height,
            min_cell_size=settings.table_min_cell_size,
            expected_cell_area=settings.table_expected_cell_area,
        )


def grid_boundaries(positions: Sequence[float], start: int, end: int, min_gap: int) -> List[int]:
    """
    Sorted cut positions from ``start`` to ``end`` inclusive.

    Interior positions closer than ``min_gap`` to the previous cut or to ``end``
    are dropped, so every slot between consecutive cuts is at least
    ``min_gap`` wide and the slots cover ``[start, end]`` with no gap.

    Examples:
        >>> grid_boundaries([40, 45, 100, 190], 0, 200, 20)
        [0, 40, 100, 200]
    """
    cuts = [start]
    for raw in sorted(positions):
        position = int(round(raw))
        if position - cuts[-1] >= min_gap and end - position >= min_gap:
            cuts.append(position)
    cuts.append(end)
    return cuts


class TableDetector:
    def __init__(self, params: Optional[TableParams] = None):
        self._params = params or TableParams()

    def detect(
        self,
        content: BoundingBox,
        horizontal: Sequence[Line],
        vertical: Sequence[Line],
    ) -> List[TableRegion]:
        tol = self._params.intersection_tolerance
        rows = [l for l in horizontal if self._inside(l, content)]
        cols = [l for l in vertical if self._inside(l, content)]

        points = self._intersections(rows, cols)
        consumed: Set[Point] = set()
        tables: List[TableRegion] = []

        for seed in points:
            if seed in consumed:
                continue
            x0, y0 = seed
            candidates = [
                (x1, y1) for (x1, y1) in points
                if x1 > x0 + tol and y1 > y0 + tol
                and (x1, y1) not in consumed
                and self._has_point(points, x1, y0)
                and self._has_point(points, x0, y1)
                and self._outline_drawn(BoundingBox.from_edges(x0, y0, x1, y1), rows, cols)
            ]
            if not candidates:
                continue
            x1, y1 = max(candidates, key=lambda p: ((p[0] - x0) * (p[1] - y0), p[1], p[0]))
            rect = BoundingBox.from_edges(x0, y0, x1, y1)
            if rect.width < self._params.min_width or rect.height < self._params.min_height:
                continue
            if any(rect.overlaps(table.bounding_box) for table in tables):
                continue

            table = self._build_table(rect, rows, cols)
            if table is None:
                continue
            consumed.update(
                p for p in points
                if rect.x - tol <= p[0] <= rect.right + tol and rect.y - tol <= p[1] <= rect.bottom + tol
            )
            tables.append(table)

        logger.debug("Detected %d tables from %d intersections", len(tables), len(points))
        return tables

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _inside(self, line: Line, content: BoundingBox) -> bool:
        tol = self._params.intersection_tolerance
        mx, my = line.midpoint
        return content.x - tol <= mx <= content.right + tol and content.y - tol <= my <= content.bottom + tol

    def _intersections(self, rows: Sequence[Line], cols: Sequence[Line]) -> List[Point]:
        tol = self._params.intersection_tolerance
        found = {
            (int(round(v.position)), int(round(h.position)))
            for h in rows
            for v in cols
            if h.crosses(v, tol)
        }
        return sorted(found, key=lambda p: (p[1], p[0]))

    def _has_point(self, points: Sequence[Point], x: int, y: int) -> bool:
        tol = self._params.intersection_tolerance
        return any(abs(px - x) <= tol and abs(py - y) <= tol for px, py in points)

    def _build_table(self, rect: BoundingBox, rows: Sequence[Line], cols: Sequence[Line]) -> Optional[TableRegion]:
        tol = self._params.intersection_tolerance
        min_cell = self._params.min_cell_size

        row_lines = sorted(
            (l for l in rows
             if rect.y - tol <= l.position <= rect.bottom + tol
             and l.start <= rect.right - tol and l.end >= rect.x + tol),
            key=lambda l: (l.position, l.start),
        )
        col_lines = sorted(
            (l for l in cols
             if rect.x - tol <= l.position <= rect.right + tol
             and l.start <= rect.bottom - tol and l.end >= rect.y + tol),
            key=lambda l: (l.position, l.start),
        )
        ys = grid_boundaries([l.position for l in row_lines], rect.y, rect.bottom, min_cell)
        xs = grid_boundaries([l.position for l in col_lines], rect.x, rect.right, min_cell)

        cells: List[TableCell] = []
        for r in range(len(ys) - 1):
            top, bottom = ys[r], ys[r + 1]
            c = 0
            while c < len(xs) - 1:
                span = 1
                while c + span < len(xs) - 1 and not self._boundary_drawn(col_lines, xs[c + span], top, bottom):
                    span += 1
                cells.append(
                    TableCell(
                        row=r,
                        column=c,
                        bounding_box=BoundingBox.from_edges(xs[c], top, xs[c + span], bottom),
                        colspan=span,
                    )
                )
                c += span

        if len(cells) < 2:
            return None

        expected = max(1.0, rect.area() / max(1, self._params.expected_cell_area))
        return TableRegion(
            bounding_box=rect,
            rows=len(ys) - 1,
            columns=len(xs) - 1,
            cells=tuple(cells),
            confidence=Confidence(min(1.0, len(cells) / expected)),
        )

    def _boundary_drawn(self, col_lines: Sequence[Line], x: int, top: int, bottom: int) -> bool:
        """True if a vertical rule at ``x`` runs through the row band ``[top, bottom]``."""
        tol = self._params.intersection_tolerance
        return any(
            abs(line.position - x) <= tol and line.covers(top, bottom, tol)
            for line in col_lines
        )

    def _outline_drawn(self, rect: BoundingBox, rows: Sequence[Line], cols: Sequence[Line]) -> bool:
        """All four edges of ``rect`` lie on drawn rules, so corners of separate tables never pair up."""
        tol = self._params.intersection_tolerance

        def ruled(lines: Sequence[Line], position: int, start: int, end: int) -> bool:
            return any(abs(line.position - position) <= tol and line.covers(start, end, tol) for line in lines)

        return (
            ruled(rows, rect.y, rect.x, rect.right)
            and ruled(rows, rect.bottom, rect.x, rect.right)
            and ruled(cols, rect.x, rect.y, rect.bottom)
            and ruled(cols, rect.right, rect.y, rect.bottom)
        )
