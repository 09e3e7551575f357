"""
Confidence value object

Represents a confidence score between 0 and 1 (inclusive).
Immutable and self-validating.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Tuple


@dataclass(frozen=True)
class Confidence:
    """
    Immutable confidence value between 0 and 1.

    Automatically clamps values to valid range [0, 1].
    """
    value: float

    def __post_init__(self):
        """Clamp confidence to [0, 1] range."""
        if not isinstance(self.value, (int, float)) or self.value != self.value:
            object.__setattr__(self, 'value', 0.0)
        elif self.value < 0.0:
            object.__setattr__(self, 'value', 0.0)
        elif self.value > 1.0:
            object.__setattr__(self, 'value', 1.0)
        else:
            object.__setattr__(self, 'value', float(self.value))

    @classmethod
    def from_raw(cls, raw_value: Any) -> Confidence:
        """
        Create Confidence from any value, coercing to valid range.

        Examples:
            >>> Confidence.from_raw("0.75")
            Confidence(value=0.75)
            >>> Confidence.from_raw("invalid")
            Confidence(value=0.0)
        """
        try:
            return cls(float(raw_value))
        except (TypeError, ValueError, AttributeError):
            return cls(0.0)

    @classmethod
    def mean(cls, values: Iterable[float | Confidence]) -> Confidence:
        """Arithmetic mean of the given scores; an empty input yields 0."""
        items = [float(v) for v in values]
        if not items:
            return cls(0.0)
        return cls(sum(items) / len(items))

    def boosted(self, multiplier: float, cap: float) -> Confidence:
        """
        Scale up and cap the result.

        Examples:
            >>> round(Confidence(0.8).boosted(1.1, 0.95).value, 3)
            0.88
            >>> Confidence(0.9).boosted(1.1, 0.95)
            Confidence(value=0.95)
        """
        return Confidence(min(cap, self.value * multiplier))

    def damped(self, multiplier: float, floor: float) -> Confidence:
        """
        Scale down but never below ``floor``.

        Examples:
            >>> round(Confidence(0.88).damped(0.9, 0.7).value, 3)
            0.792
            >>> Confidence(0.5).damped(0.9, 0.7)
            Confidence(value=0.7)
        """
        return Confidence(max(floor, self.value * multiplier))

    def is_low(self, threshold: float = 0.4) -> bool:
        """True if confidence is at or below ``threshold`` (needs review)."""
        return self.value <= threshold

    def is_high(self, threshold: float = 0.8) -> bool:
        return self.value >= threshold

    def bucket_index(
        self,
        bounds: Tuple[float, ...] = (0.2, 0.4, 0.6, 0.8, 1.0)
    ) -> int:
        """
        Get bucket index for histogram grouping.

        Examples:
            >>> Confidence(0.1).bucket_index()
            0
            >>> Confidence(1.0).bucket_index()
            4
        """
        for idx, bound in enumerate(bounds):
            if self.value <= bound:
                return idx
        return len(bounds)

    def __str__(self) -> str:
        return f"{self.value:.2f}"

    def __float__(self) -> float:
        return self.value

    def __lt__(self, other: Confidence | float) -> bool:
        other_val = other.value if isinstance(other, Confidence) else float(other)
        return self.value < other_val

    def __le__(self, other: Confidence | float) -> bool:
        other_val = other.value if isinstance(other, Confidence) else float(other)
        return self.value <= other_val

    def __gt__(self, other: Confidence | float) -> bool:
        other_val = other.value if isinstance(other, Confidence) else float(other)
        return self.value > other_val

    def __ge__(self, other: Confidence | float) -> bool:
        other_val = other.value if isinstance(other, Confidence) else float(other)
        return self.value >= other_val
