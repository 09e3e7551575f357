"""
BorderEliminator domain service.

Classifies the rule lines nearest each page edge as printed borders and
derives the interior content rectangle. Deterministic for given inputs.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from gazette.domain.entities.border_region import BorderRegion
from gazette.domain.entities.line import Line
from gazette.domain.exceptions import GeometryError
from gazette.domain.value_objects.bounding_box import BoundingBox

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BorderParams:
    band_ratio: float = 0.10
    top_cap: int = 3  # masthead carries three rules
    bottom_cap: int = 2
    side_cap: int = 2
    safety_margin: int = 5
    fallback_margin_ratio: float = 0.05
    min_content_size: int = 100

    @classmethod
    def from_settings(cls, settings) -> BorderParams:
        return cls(
            band_ratio=settings.border_band_ratio,
            top_cap=settings.border_top_cap,
            bottom_cap=settings.border_bottom_cap,
            side_cap=settings.border_side_cap,
            safety_margin=settings.border_safety_margin,
            fallback_margin_ratio=settings.border_fallback_margin_ratio,
            min_content_size=settings.border_min_content_size,
        )


class BorderEliminator:
    def __init__(self, params: Optional[BorderParams] = None):
        self._params = params or BorderParams()

    def eliminate(
        self,
        page_width: int,
        page_height: int,
        horizontal: Sequence[Line],
        vertical: Sequence[Line],
    ) -> BorderRegion:
        if page_width <= 0 or page_height <= 0:
            raise GeometryError(f"Page must have positive size, got {page_width}x{page_height}")

        p = self._params
        band_y = page_height * p.band_ratio
        band_x = page_width * p.band_ratio

        top = self._nearest([l for l in horizontal if l.position <= band_y], p.top_cap, from_start=True)
        bottom = self._nearest(
            [l for l in horizontal if l.position >= page_height - band_y and l not in top], p.bottom_cap, from_start=False
        )
        left = self._nearest([l for l in vertical if l.position <= band_x], p.side_cap, from_start=True)
        right = self._nearest(
            [l for l in vertical if l.position >= page_width - band_x and l not in left], p.side_cap, from_start=False
        )

        y0, y1 = self._axis_edges(top, bottom, page_height)
        x0, x1 = self._axis_edges(left, right, page_width)
        content = BoundingBox.from_edges(x0, y0, x1, y1)

        region = BorderRegion(
            page_width=page_width,
            page_height=page_height,
            content_region=content,
            top=tuple(top),
            bottom=tuple(bottom),
            left=tuple(left),
            right=tuple(right),
        )
        logger.debug("Borders removed %s, content %s", region.removed_borders, content)
        return region

    @staticmethod
    def _nearest(lines: List[Line], cap: int, *, from_start: bool) -> List[Line]:
        """Up to ``cap`` lines closest to the page edge, outermost first."""
        ordered = sorted(lines, key=lambda l: (l.position, l.start), reverse=not from_start)
        return ordered[:cap]

    def _axis_edges(self, leading: List[Line], trailing: List[Line], extent: int) -> Tuple[int, int]:
        p = self._params
        if leading:
            start = max(l.position + l.thickness / 2 for l in leading) + p.safety_margin
        else:
            start = extent * p.fallback_margin_ratio
        if trailing:
            end = min(l.position - l.thickness / 2 for l in trailing) - p.safety_margin
        else:
            end = extent * (1.0 - p.fallback_margin_ratio)

        start = max(0, int(math.ceil(start)))
        end = min(extent, int(math.floor(end)))
        if end - start <= 0:
            size = min(p.min_content_size, extent)
            start = (extent - size) // 2
            end = start + size
            logger.warning("Content collapsed on an axis of extent %d; using centered %d", extent, size)
        return start, end
