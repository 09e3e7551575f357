"""
Domain Entity: JournalPage

All geometry and recognized text for one scanned gazette page.
Pages are immutable once assembled.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from ..value_objects.confidence import Confidence
from ..value_objects.language import Language
from .border_region import BorderRegion
from .line import Line
from .table_region import TableRegion
from .text_zone import TextZone


@dataclass(frozen=True)
class JournalPage:
    """
    Business rules:
    - Page numbers are 1-indexed
    - Text zones never overlap a table region
    - Page confidence is the mean of its zone and table confidences
    """

    page_number: int
    width: int
    height: int
    horizontal_lines: Tuple[Line, ...]
    vertical_lines: Tuple[Line, ...]
    border_region: BorderRegion
    tables: Tuple[TableRegion, ...]
    zones: Tuple[TextZone, ...]
    confidence: Confidence
    processing_ms: float = 0.0
    language: Optional[Language] = None

    def __post_init__(self):
        if self.page_number < 1:
            raise ValueError("Page number must be >= 1")
        for name in ('horizontal_lines', 'vertical_lines', 'tables', 'zones'):
            value = getattr(self, name)
            if not isinstance(value, tuple):
                object.__setattr__(self, name, tuple(value))
        for zone in self.zones:
            for table in self.tables:
                if zone.bounding_box.overlaps(table.bounding_box):
                    raise ValueError(
                        f"Zone {zone.column_index} overlaps table {table.bounding_box} on page {self.page_number}"
                    )

    @classmethod
    def create(
        cls,
        page_number: int,
        width: int,
        height: int,
        *,
        horizontal_lines: List[Line],
        vertical_lines: List[Line],
        border_region: BorderRegion,
        tables: List[TableRegion],
        zones: List[TextZone],
        processing_ms: float = 0.0,
        language: Language | None = None,
    ) -> JournalPage:
        """Assemble a page, deriving its confidence from zones and tables."""
        scores = [zone.confidence for zone in zones] + [table.confidence for table in tables]
        return cls(
            page_number=page_number,
            width=width,
            height=height,
            horizontal_lines=tuple(horizontal_lines),
            vertical_lines=tuple(vertical_lines),
            border_region=border_region,
            tables=tuple(table.with_page_number(page_number) for table in tables),
            zones=tuple(zones),
            confidence=Confidence.mean(scores),
            processing_ms=processing_ms,
            language=language,
        )

    @property
    def ordered_zones(self) -> List[TextZone]:
        """Zones in reading order: column first, then top to bottom."""
        return sorted(self.zones, key=lambda z: (z.column_index, z.bounding_box.y, z.bounding_box.x))

    @property
    def text(self) -> str:
        return "\n".join(zone.text for zone in self.ordered_zones if zone.text)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "page_number": self.page_number,
            "width": self.width,
            "height": self.height,
            "horizontal_lines": [line.to_dict() for line in self.horizontal_lines],
            "vertical_lines": [line.to_dict() for line in self.vertical_lines],
            "border_region": self.border_region.to_dict(),
            "tables": [table.to_dict() for table in self.tables],
            "zones": [zone.to_dict() for zone in self.zones],
            "confidence": self.confidence.value,
            "processing_ms": self.processing_ms,
            "language": self.language.value if self.language else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> JournalPage:
        language = data.get("language")
        return cls(
            page_number=data["page_number"],
            width=data["width"],
            height=data["height"],
            horizontal_lines=tuple(Line.from_dict(item) for item in data.get("horizontal_lines", [])),
            vertical_lines=tuple(Line.from_dict(item) for item in data.get("vertical_lines", [])),
            border_region=BorderRegion.from_dict(data["border_region"]),
            tables=tuple(TableRegion.from_dict(item) for item in data.get("tables", [])),
            zones=tuple(TextZone.from_dict(item) for item in data.get("zones", [])),
            confidence=Confidence.from_raw(data.get("confidence", 0.0)),
            processing_ms=float(data.get("processing_ms", 0.0)),
            language=Language(language) if language else None,
        )


@dataclass(frozen=True)
class PageReport:
    """Per-page outcome in a document-level summary."""

    page_number: int
    succeeded: bool
    error: Optional[str] = None
    failed_regions: int = 0

    @classmethod
    def success(cls, page_number: int, failed_regions: int = 0) -> PageReport:
        return cls(page_number=page_number, succeeded=True, failed_regions=failed_regions)

    @classmethod
    def failure(cls, page_number: int, error: str) -> PageReport:
        return cls(page_number=page_number, succeeded=False, error=error)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "page_number": self.page_number,
            "succeeded": self.succeeded,
            "error": self.error,
            "failed_regions": self.failed_regions,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> PageReport:
        return cls(
            page_number=data["page_number"],
            succeeded=bool(data.get("succeeded", False)),
            error=data.get("error"),
            failed_regions=int(data.get("failed_regions", 0)),
        )
