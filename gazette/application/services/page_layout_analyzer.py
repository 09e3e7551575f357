"""
PageLayoutAnalyzer - geometric decomposition of one page raster.

Runs line detection, border elimination, table detection and zone
partitioning in that order. Each step consumes the previous one's output,
so the steps of one page never run concurrently; separate pages may.
"""
from __future__ import annotations

import logging
import time
from typing import Optional

import numpy as np

from gazette.config import Settings, get_settings
from gazette.domain.entities.page_layout import PageLayout
from gazette.domain.services.border_eliminator import BorderEliminator, BorderParams
from gazette.domain.services.table_detector import TableDetector, TableParams
from gazette.domain.services.text_zone_partitioner import TextZonePartitioner, ZoneParams
from gazette.infrastructure.imaging.line_detector import LineDetectionParams, LineDetector

logger = logging.getLogger(__name__)


class PageLayoutAnalyzer:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        line_detector: Optional[LineDetector] = None,
        border_eliminator: Optional[BorderEliminator] = None,
        table_detector: Optional[TableDetector] = None,
        zone_partitioner: Optional[TextZonePartitioner] = None,
    ):
        settings = settings or get_settings()
        self._lines = line_detector or LineDetector(LineDetectionParams.from_settings(settings))
        self._borders = border_eliminator or BorderEliminator(BorderParams.from_settings(settings))
        self._tables = table_detector or TableDetector(TableParams.from_settings(settings))
        self._zones = zone_partitioner or TextZonePartitioner(ZoneParams.from_settings(settings))

    def analyze(self, raster: np.ndarray) -> PageLayout:
        """Raises GeometryError for a degenerate raster."""
        started = time.perf_counter()

        lines = self._lines.detect(raster)
        border = self._borders.eliminate(lines.width, lines.height, lines.horizontal, lines.vertical)

        # Rules classified as page borders play no part in tables or columns.
        horizontal = [line for line in lines.horizontal if not border.is_border(line)]
        vertical = [line for line in lines.vertical if not border.is_border(line)]

        content = border.content_region
        tables = self._tables.detect(content, horizontal, vertical)
        zones = self._zones.partition(content, vertical, horizontal, tables)

        duration_ms = (time.perf_counter() - started) * 1000
        logger.debug(
            "Layout %dx%d: %d/%d lines, borders=%s, %d tables, %d zones in %.1fms",
            lines.width, lines.height, len(lines.horizontal), len(lines.vertical),
            border.removed_borders, len(tables), len(zones), duration_ms,
        )
        return PageLayout(
            width=lines.width,
            height=lines.height,
            horizontal_lines=lines.horizontal,
            vertical_lines=lines.vertical,
            border_region=border,
            tables=tuple(tables),
            zones=tuple(zones),
            duration_ms=duration_ms,
        )
