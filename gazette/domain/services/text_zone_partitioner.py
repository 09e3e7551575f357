"""
TextZonePartitioner domain service.

Splits the content rectangle into readable columns. The gazette layout has a
single central gutter, so only a vertical rule near the horizontal center that
no horizontal rule passes through, and that runs most of the content height,
counts as a column separator.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from gazette.domain.entities.line import Line
from gazette.domain.entities.table_region import TableRegion
from gazette.domain.entities.text_zone import TextZone
from gazette.domain.value_objects.bounding_box import BoundingBox

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ZoneParams:
    center_band_ratio: float = 0.10
    min_separator_ratio: float = 0.6
    crossing_tolerance: int = 5
    carve_around_tables: bool = False
    min_band_height: int = 20

    @classmethod
    def from_settings(cls, settings) -> ZoneParams:
        return cls(
            center_band_ratio=settings.zone_center_band_ratio,
            min_separator_ratio=settings.zone_min_separator_ratio,
            carve_around_tables=settings.zone_carve_around_tables,
        )


class TextZonePartitioner:
    def __init__(self, params: Optional[ZoneParams] = None):
        self._params = params or ZoneParams()

    def separators(
        self,
        content: BoundingBox,
        vertical: Sequence[Line],
        horizontal: Sequence[Line],
    ) -> List[Line]:
        """Column separator candidates, ordered left to right."""
        center_x = content.x + content.width / 2
        band = content.width * self._params.center_band_ratio
        min_length = content.height * self._params.min_separator_ratio

        found = [
            line for line in vertical
            if abs(line.midpoint[0] - center_x) <= band
            and line.length >= min_length
            and not any(self._crosses(line, h) for h in horizontal)
        ]
        return sorted(found, key=lambda l: (l.position, l.start))

    def partition(
        self,
        content: BoundingBox,
        vertical: Sequence[Line],
        horizontal: Sequence[Line],
        tables: Sequence[TableRegion] = (),
    ) -> List[TextZone]:
        candidates = self.separators(content, vertical, horizontal)

        if candidates:
            split_x = int(round(candidates[0].position))
            split_x = min(max(split_x, content.x + 1), content.right - 1)
            zones = [
                TextZone(BoundingBox.from_edges(content.x, content.y, split_x, content.bottom), column_index=0),
                TextZone(BoundingBox.from_edges(split_x, content.y, content.right, content.bottom), column_index=1),
            ]
        else:
            zones = [TextZone(content, column_index=0)]

        if self._params.carve_around_tables:
            zones = [band for zone in zones for band in self._carve(zone, tables)]
        else:
            zones = [
                zone for zone in zones
                if not any(zone.bounding_box.overlaps(table.bounding_box) for table in tables)
            ]

        logger.debug("Partitioned content %s into %d zones (%d separators)", content, len(zones), len(candidates))
        return zones

    def _crosses(self, vertical: Line, horizontal: Line) -> bool:
        """A horizontal rule passing through the separator's interior (touching its ends is allowed)."""
        tol = self._params.crossing_tolerance
        return (
            vertical.start + tol < horizontal.position < vertical.end - tol
            and horizontal.spans(vertical.position, tol)
        )

    def _carve(self, zone: TextZone, tables: Sequence[TableRegion]) -> List[TextZone]:
        """Horizontal bands of ``zone`` that lie above, between or below the tables it overlaps."""
        box = zone.bounding_box
        blocking = sorted(
            (t.bounding_box for t in tables if box.overlaps(t.bounding_box)),
            key=lambda b: (b.y, b.x),
        )
        if not blocking:
            return [zone]

        bands: List[TextZone] = []
        cursor = box.y
        for table_box in blocking:
            if table_box.y - cursor >= self._params.min_band_height:
                bands.append(TextZone(BoundingBox.from_edges(box.x, cursor, box.right, table_box.y), zone.column_index))
            cursor = max(cursor, table_box.bottom)
        if box.bottom - cursor >= self._params.min_band_height:
            bands.append(TextZone(BoundingBox.from_edges(box.x, cursor, box.right, box.bottom), zone.column_index))
        return bands
