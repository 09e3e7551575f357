"""
ConfidenceCalculator domain service.

Confidence statistics for review screens: histogram buckets, low-confidence
detection and the list of mapped fields that need a human look.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple

from gazette.domain.entities.journal_page import JournalPage
from gazette.domain.entities.mapped_field import MappedField
from gazette.domain.entities.mapping_result import MappingResult
from gazette.domain.value_objects.confidence import Confidence


@dataclass(frozen=True)
class ConfidenceStatistics:
    """
    Immutable statistics about confidence distribution.

    Attributes:
        buckets: Counts per bucket (6 buckets: 0-0.2, 0.2-0.4, ..., 0.8-1.0, overflow)
        low_confidence_count: Number of items at or below the low threshold
        total_count: Total number of items analyzed
        average_confidence: Average confidence across all items
    """
    buckets: Tuple[int, ...]
    low_confidence_count: int
    total_count: int
    average_confidence: float

    def __post_init__(self):
        if len(self.buckets) != 6:
            raise ValueError("buckets must have exactly 6 elements")
        if sum(self.buckets) != self.total_count:
            raise ValueError("bucket counts must sum to total_count")
        if self.low_confidence_count > self.total_count:
            raise ValueError("low_confidence_count cannot exceed total_count")
        if not (0.0 <= self.average_confidence <= 1.0):
            raise ValueError("average_confidence must be between 0.0 and 1.0")

    @classmethod
    def empty(cls) -> "ConfidenceStatistics":
        return cls(buckets=(0, 0, 0, 0, 0, 0), low_confidence_count=0, total_count=0, average_confidence=0.0)


class ConfidenceCalculator:
    """Centralizes thresholds and aggregation over confidence scores."""

    DEFAULT_BUCKET_BOUNDS = (0.2, 0.4, 0.6, 0.8, 1.0)

    def __init__(self, low_threshold: float = 0.4):
        """
        Args:
            low_threshold: Confidence at or below which an item needs review (default 0.4)
        """
        if not (0.0 <= low_threshold <= 1.0):
            raise ValueError("low_threshold must be between 0.0 and 1.0")
        self._low_threshold = low_threshold

    @property
    def low_threshold(self) -> float:
        return self._low_threshold

    def is_low_confidence(self, confidence: Confidence) -> bool:
        return confidence.is_low(self._low_threshold)

    def calculate_statistics(self, scores: Sequence[Confidence]) -> ConfidenceStatistics:
        if not scores:
            return ConfidenceStatistics.empty()

        buckets = [0] * 6
        low_count = 0
        for confidence in scores:
            buckets[confidence.bucket_index(self.DEFAULT_BUCKET_BOUNDS)] += 1
            if self.is_low_confidence(confidence):
                low_count += 1

        return ConfidenceStatistics(
            buckets=tuple(buckets),
            low_confidence_count=low_count,
            total_count=len(scores),
            average_confidence=Confidence.mean(scores).value,
        )

    def calculate_field_statistics(self, fields: Sequence[MappedField]) -> ConfidenceStatistics:
        return self.calculate_statistics([item.confidence for item in fields])

    def calculate_page_statistics(self, pages: Sequence[JournalPage]) -> ConfidenceStatistics:
        return self.calculate_statistics([page.confidence for page in pages])

    def extract_low_confidence_fields(self, mapping: MappingResult) -> List[Dict[str, Any]]:
        """Mapped fields needing review, lowest confidence first."""
        results = []
        for item in mapping.mapped_fields:
            if self.is_low_confidence(item.confidence):
                results.append({
                    "name": item.field_name,
                    "label": item.label,
                    "value": item.mapped_value if item.is_accepted else item.suggested_value,
                    "confidence": item.confidence.value,
                    "page": item.source_page,
                    "is_accepted": item.is_accepted,
                })
        results.sort(key=lambda entry: (entry["confidence"], entry["name"]))
        return results
