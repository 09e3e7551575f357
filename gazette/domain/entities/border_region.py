"""
BorderRegion Entity

Lines classified as printed page borders and the content rectangle they leave.

Domain Rules:
- The content rectangle has positive area
- The content rectangle lies inside the page bounds
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from ..value_objects.bounding_box import BoundingBox
from .line import Line


@dataclass(frozen=True)
class BorderRegion:
    page_width: int
    page_height: int
    content_region: BoundingBox
    top: Tuple[Line, ...] = ()
    bottom: Tuple[Line, ...] = ()
    left: Tuple[Line, ...] = ()
    right: Tuple[Line, ...] = ()

    def __post_init__(self):
        for side in ('top', 'bottom', 'left', 'right'):
            value = getattr(self, side)
            if not isinstance(value, tuple):
                object.__setattr__(self, side, tuple(value))
        if self.content_region.width <= 0 or self.content_region.height <= 0:
            raise ValueError("Content region must have positive area")
        if not self.page_bounds.contains(self.content_region):
            raise ValueError(f"Content region {self.content_region} exceeds page bounds {self.page_bounds}")

    @property
    def page_bounds(self) -> BoundingBox:
        return BoundingBox(0, 0, self.page_width, self.page_height)

    @property
    def removed_borders(self) -> Dict[str, int]:
        """Count of lines classified as border, per side."""
        return {
            "top": len(self.top),
            "bottom": len(self.bottom),
            "left": len(self.left),
            "right": len(self.right),
        }

    @property
    def border_lines(self) -> Tuple[Line, ...]:
        return self.top + self.bottom + self.left + self.right

    def is_border(self, line: Line) -> bool:
        return line in self.border_lines

    def to_dict(self) -> Dict[str, Any]:
        return {
            "page_width": self.page_width,
            "page_height": self.page_height,
            "content_region": self.content_region.to_dict(),
            "removed_borders": self.removed_borders,
            "top": [line.to_dict() for line in self.top],
            "bottom": [line.to_dict() for line in self.bottom],
            "left": [line.to_dict() for line in self.left],
            "right": [line.to_dict() for line in self.right],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> BorderRegion:
        return cls(
            page_width=data["page_width"],
            page_height=data["page_height"],
            content_region=BoundingBox.from_dict(data["content_region"]),
            top=tuple(Line.from_dict(item) for item in data.get("top", [])),
            bottom=tuple(Line.from_dict(item) for item in data.get("bottom", [])),
            left=tuple(Line.from_dict(item) for item in data.get("left", [])),
            right=tuple(Line.from_dict(item) for item in data.get("right", [])),
        )
