"""PageLayout - geometric decomposition of one page before recognition."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .border_region import BorderRegion
from .line import Line
from .table_region import TableRegion
from .text_zone import TextZone


@dataclass(frozen=True)
class PageLayout:
    width: int
    height: int
    horizontal_lines: Tuple[Line, ...]
    vertical_lines: Tuple[Line, ...]
    border_region: BorderRegion
    tables: Tuple[TableRegion, ...]
    zones: Tuple[TextZone, ...]
    duration_ms: float = 0.0
