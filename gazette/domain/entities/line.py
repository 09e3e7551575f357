"""
Line Entity

A straight rule line found on a page raster. Coordinates are pixels.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from ..value_objects.confidence import Confidence


class Orientation(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True)
class Line:
    """
    Immutable detected rule line.

    Endpoints are normalized so that (x1, y1) is the left end of a horizontal
    line and the top end of a vertical one.
    """
    x1: int
    y1: int
    x2: int
    y2: int
    orientation: Orientation
    thickness: int = 1
    confidence: Confidence = Confidence(1.0)

    def __post_init__(self):
        if not isinstance(self.orientation, Orientation):
            object.__setattr__(self, 'orientation', Orientation(self.orientation))
        if not isinstance(self.confidence, Confidence):
            object.__setattr__(self, 'confidence', Confidence.from_raw(self.confidence))
        for name in ('x1', 'y1', 'x2', 'y2', 'thickness'):
            object.__setattr__(self, name, int(round(getattr(self, name))))
        if self.thickness < 1:
            object.__setattr__(self, 'thickness', 1)
        if self.is_horizontal and self.x1 > self.x2:
            self._swap_ends()
        elif not self.is_horizontal and self.y1 > self.y2:
            self._swap_ends()

    def _swap_ends(self) -> None:
        x1, y1, x2, y2 = self.x1, self.y1, self.x2, self.y2
        object.__setattr__(self, 'x1', x2)
        object.__setattr__(self, 'y1', y2)
        object.__setattr__(self, 'x2', x1)
        object.__setattr__(self, 'y2', y1)

    @classmethod
    def horizontal(cls, y: int, x_start: int, x_end: int, **kwargs: Any) -> Line:
        return cls(x_start, y, x_end, y, Orientation.HORIZONTAL, **kwargs)

    @classmethod
    def vertical(cls, x: int, y_start: int, y_end: int, **kwargs: Any) -> Line:
        return cls(x, y_start, x, y_end, Orientation.VERTICAL, **kwargs)

    @property
    def is_horizontal(self) -> bool:
        return self.orientation == Orientation.HORIZONTAL

    @property
    def length(self) -> float:
        return math.hypot(self.x2 - self.x1, self.y2 - self.y1)

    @property
    def position(self) -> float:
        """Cross-axis coordinate: y of a horizontal line, x of a vertical one."""
        if self.is_horizontal:
            return (self.y1 + self.y2) / 2
        return (self.x1 + self.x2) / 2

    @property
    def start(self) -> int:
        """Along-axis start coordinate."""
        return self.x1 if self.is_horizontal else self.y1

    @property
    def end(self) -> int:
        return self.x2 if self.is_horizontal else self.y2

    @property
    def midpoint(self) -> tuple[float, float]:
        return ((self.x1 + self.x2) / 2, (self.y1 + self.y2) / 2)

    def spans(self, coordinate: float, tolerance: float = 0.0) -> bool:
        """True if ``coordinate`` on this line's axis lies between its ends."""
        return self.start - tolerance <= coordinate <= self.end + tolerance

    def crosses(self, other: Line, tolerance: float = 0.0) -> bool:
        """True when two perpendicular lines intersect (within ``tolerance``)."""
        if self.orientation == other.orientation:
            return False
        return self.spans(other.position, tolerance) and other.spans(self.position, tolerance)

    def covers(self, start: float, end: float, tolerance: float = 0.0) -> bool:
        """True when the line runs along the whole ``[start, end]`` interval."""
        return self.start - tolerance <= start and end <= self.end + tolerance

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x1": self.x1,
            "y1": self.y1,
            "x2": self.x2,
            "y2": self.y2,
            "orientation": self.orientation.value,
            "thickness": self.thickness,
            "confidence": self.confidence.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Line:
        return cls(
            x1=data.get("x1", 0),
            y1=data.get("y1", 0),
            x2=data.get("x2", 0),
            y2=data.get("y2", 0),
            orientation=Orientation(data.get("orientation", Orientation.HORIZONTAL.value)),
            thickness=data.get("thickness", 1),
            confidence=Confidence.from_raw(data.get("confidence", 1.0)),
        )
