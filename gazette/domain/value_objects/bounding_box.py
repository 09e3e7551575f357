"""
BoundingBox value object

Axis-aligned rectangle in page pixel coordinates (origin top-left).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class BoundingBox:
    """
    Immutable pixel rectangle.

    - x, y: top-left corner
    - width, height: extent, never negative

    Edges are half-open: a box covers ``[x, x + width) x [y, y + height)``,
    so two boxes sharing an edge do not overlap.
    """
    x: int
    y: int
    width: int
    height: int

    def __post_init__(self):
        for field_name in ('x', 'y', 'width', 'height'):
            value = getattr(self, field_name)
            if not isinstance(value, (int, float)):
                raise ValueError(f"{field_name} must be numeric, got {value!r}")
            object.__setattr__(self, field_name, int(round(value)))
        if self.width < 0 or self.height < 0:
            raise ValueError("width and height must be non-negative")

    @classmethod
    def from_dict(cls, data: Dict[str, Any] | None) -> BoundingBox:
        """
        Create BoundingBox from dictionary.

        Examples:
            >>> BoundingBox.from_dict({'x': 10, 'y': 20, 'width': 50, 'height': 30})
            BoundingBox(x=10, y=20, width=50, height=30)
        """
        if not data:
            return cls(0, 0, 0, 0)
        return cls(
            x=data.get('x', 0),
            y=data.get('y', 0),
            width=data.get('width', 0),
            height=data.get('height', 0),
        )

    @classmethod
    def from_edges(cls, left: float, top: float, right: float, bottom: float) -> BoundingBox:
        """Build from edge coordinates; inverted edges give an empty box."""
        return cls(
            x=left,
            y=top,
            width=max(0, int(round(right)) - int(round(left))),
            height=max(0, int(round(bottom)) - int(round(top))),
        )

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def area(self) -> int:
        return self.width * self.height

    def center(self) -> Tuple[float, float]:
        """
        Examples:
            >>> BoundingBox(0, 0, 40, 40).center()
            (20.0, 20.0)
        """
        return (self.x + self.width / 2, self.y + self.height / 2)

    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def overlaps(self, other: BoundingBox) -> bool:
        """
        True when the interiors intersect.

        Examples:
            >>> BoundingBox(0, 0, 50, 50).overlaps(BoundingBox(30, 30, 50, 50))
            True
            >>> BoundingBox(0, 0, 50, 50).overlaps(BoundingBox(50, 0, 50, 50))
            False
        """
        if self.is_empty() or other.is_empty():
            return False
        return not (
            self.right <= other.x
            or self.x >= other.right
            or self.bottom <= other.y
            or self.y >= other.bottom
        )

    def contains(self, other: BoundingBox) -> bool:
        """True when ``other`` lies entirely inside this box (edges may touch)."""
        return (
            self.x <= other.x
            and self.y <= other.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )

    def contains_point(self, x: float, y: float) -> bool:
        return self.x <= x <= self.right and self.y <= y <= self.bottom

    def intersection(self, other: BoundingBox) -> BoundingBox:
        """Overlapping part of both boxes, empty when disjoint."""
        return BoundingBox.from_edges(
            max(self.x, other.x),
            max(self.y, other.y),
            min(self.right, other.right),
            min(self.bottom, other.bottom),
        )

    def slices(self) -> Tuple[slice, slice]:
        """Row/column slices for cropping a numpy raster to this box."""
        return slice(self.y, self.bottom), slice(self.x, self.right)

    def to_dict(self) -> Dict[str, int]:
        return {
            'x': self.x,
            'y': self.y,
            'width': self.width,
            'height': self.height,
        }

    def __str__(self) -> str:
        return f"BBox(x={self.x}, y={self.y}, w={self.width}, h={self.height})"
