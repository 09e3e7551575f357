"""
Rule-line detection on a page raster.

Pipeline per page:

- Otsu binarization (ink becomes foreground).
- Dilate then erode with a small square kernel to close gaps in printed rules.
- Canny edge detection.
- Probabilistic Hough transform for straight segments.
- Angle classification into horizontal / vertical; oblique segments are dropped.
- Near-collinear duplicates (overlapping Hough hits on one edge) are merged.
- Edge clusters lying on the same ink run of the closed mask are paired into
  one rule; its position and thickness come from that ink run.

The output is a pure function of the raster and the parameters.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

import cv2
import numpy as np

from gazette.config import Settings
from gazette.domain.entities.line import Line, Orientation
from gazette.domain.value_objects.confidence import Confidence

from .raster import ensure_grayscale

logger = logging.getLogger(__name__)

# Morphology kernel used to clean rule strokes before edge detection.
ENHANCE_KERNEL_SIZE = 3
CANNY_LOW_THRESHOLD = 50
CANNY_HIGH_THRESHOLD = 150
# Share of a row (or column) that must be ink to count as part of a rule stroke.
INK_FILL_RATIO = 0.5


@dataclass(frozen=True)
class LineDetectionParams:
    min_line_length: int = 50
    max_line_gap: int = 10
    hough_threshold: int = 50
    angle_tolerance_deg: float = 10.0
    merge_tolerance: int = 5
    confidence_saturation: int = 400
    max_thickness: int = 25

    @classmethod
    def from_settings(cls, settings: Settings) -> LineDetectionParams:
        return cls(
            min_line_length=settings.line_min_length,
            max_line_gap=settings.line_max_gap,
            hough_threshold=settings.line_hough_threshold,
            angle_tolerance_deg=settings.line_angle_tolerance_deg,
            merge_tolerance=settings.line_merge_tolerance,
            confidence_saturation=settings.line_confidence_saturation,
            max_thickness=settings.line_max_thickness,
        )


@dataclass(frozen=True)
class DetectedLines:
    width: int
    height: int
    horizontal: Tuple[Line, ...]
    vertical: Tuple[Line, ...]


@dataclass
class _Cluster:
    """Segments believed to be one physical rule."""

    orientation: Orientation
    min_pos: float
    max_pos: float
    start: float
    end: float
    ink: Optional[Tuple[int, int]] = None

    @property
    def center(self) -> float:
        return (self.min_pos + self.max_pos) / 2

    def absorbs(self, pos: float, start: float, end: float, tolerance: float, gap: float) -> bool:
        if abs(pos - self.center) > tolerance:
            return False
        return self.overlaps(start, end, gap)

    def overlaps(self, start: float, end: float, gap: float) -> bool:
        return start <= self.end + gap and end >= self.start - gap

    def add(self, pos: float, start: float, end: float) -> None:
        self.min_pos = min(self.min_pos, pos)
        self.max_pos = max(self.max_pos, pos)
        self.start = min(self.start, start)
        self.end = max(self.end, end)

    def shares_stroke(self, other: _Cluster, gap: float) -> bool:
        """Both clusters are edges of the same ink run along an overlapping span."""
        if self.ink is None or other.ink is None:
            return False
        if other.ink[0] > self.ink[1] + 1 or other.ink[1] < self.ink[0] - 1:
            return False
        return self.overlaps(other.start, other.end, gap)

    def absorb(self, other: _Cluster) -> None:
        self.add(other.min_pos, other.start, other.end)
        self.add(other.max_pos, other.start, other.end)
        self.ink = (min(self.ink[0], other.ink[0]), max(self.ink[1], other.ink[1]))


class LineDetector:
    """Finds horizontal and vertical rule lines in a page raster."""

    def __init__(self, params: Optional[LineDetectionParams] = None):
        self._params = params or LineDetectionParams()

    @property
    def params(self) -> LineDetectionParams:
        return self._params

    def detect(self, raster: np.ndarray) -> DetectedLines:
        gray = ensure_grayscale(raster)
        height, width = gray.shape[:2]

        mask = self._close(gray)
        edges = cv2.Canny(mask, CANNY_LOW_THRESHOLD, CANNY_HIGH_THRESHOLD)
        segments = cv2.HoughLinesP(
            edges,
            rho=1,
            theta=np.pi / 180,
            threshold=self._params.hough_threshold,
            minLineLength=self._params.min_line_length,
            maxLineGap=self._params.max_line_gap,
        )

        horizontal: List[Tuple[float, float, float]] = []
        vertical: List[Tuple[float, float, float]] = []
        if segments is not None:
            for x1, y1, x2, y2 in segments.reshape(-1, 4).tolist():
                orientation = self._classify(x1, y1, x2, y2)
                if orientation == Orientation.HORIZONTAL:
                    horizontal.append(((y1 + y2) / 2, min(x1, x2), max(x1, x2)))
                elif orientation == Orientation.VERTICAL:
                    vertical.append(((x1 + x2) / 2, min(y1, y2), max(y1, y2)))

        result = DetectedLines(
            width=width,
            height=height,
            horizontal=tuple(self._merge(horizontal, Orientation.HORIZONTAL, mask)),
            vertical=tuple(self._merge(vertical, Orientation.VERTICAL, mask)),
        )
        logger.debug(
            "Detected %d horizontal and %d vertical lines on %dx%d raster",
            len(result.horizontal), len(result.vertical), width, height,
        )
        return result

    def _close(self, gray: np.ndarray) -> np.ndarray:
        """Binary ink mask (ink = 255) with small gaps in strokes closed."""
        _, binary = cv2.threshold(gray, 0, 255, cv2.THRESH_BINARY_INV + cv2.THRESH_OTSU)
        kernel = np.ones((ENHANCE_KERNEL_SIZE, ENHANCE_KERNEL_SIZE), np.uint8)
        return cv2.erode(cv2.dilate(binary, kernel, iterations=1), kernel, iterations=1)

    def _classify(self, x1: float, y1: float, x2: float, y2: float) -> Optional[Orientation]:
        angle = math.degrees(math.atan2(y2 - y1, x2 - x1)) % 180.0
        tolerance = self._params.angle_tolerance_deg
        if angle <= tolerance or angle >= 180.0 - tolerance:
            return Orientation.HORIZONTAL
        if abs(angle - 90.0) <= tolerance:
            return Orientation.VERTICAL
        return None

    def _merge(
        self,
        segments: List[Tuple[float, float, float]],
        orientation: Orientation,
        mask: np.ndarray,
    ) -> List[Line]:
        clusters: List[_Cluster] = []
        for pos, start, end in sorted(segments):
            for cluster in clusters:
                if cluster.absorbs(pos, start, end, self._params.merge_tolerance, self._params.max_line_gap):
                    cluster.add(pos, start, end)
                    break
            else:
                clusters.append(_Cluster(orientation, pos, pos, start, end))

        lines = [self._to_line(cluster) for cluster in self._pair_edges(clusters, mask)]
        lines = [line for line in lines if line.length >= self._params.min_line_length]
        lines.sort(key=lambda line: (line.position, line.start))
        return lines

    def _pair_edges(self, clusters: List[_Cluster], mask: np.ndarray) -> List[_Cluster]:
        """Join the two edge clusters Canny leaves on either side of a thick stroke."""
        for cluster in clusters:
            cluster.ink = self._ink_run(cluster, mask)

        strokes: List[_Cluster] = []
        for cluster in sorted(clusters, key=lambda c: (c.center, c.start)):
            for stroke in strokes:
                if stroke.shares_stroke(cluster, self._params.max_line_gap):
                    stroke.absorb(cluster)
                    break
            else:
                strokes.append(cluster)
        return strokes

    def _ink_run(self, cluster: _Cluster, mask: np.ndarray) -> Optional[Tuple[int, int]]:
        """Inclusive cross-axis extent of the ink stroke under ``cluster``, if any."""
        height, width = mask.shape[:2]
        reach = self._params.max_thickness
        center = int(round(cluster.center))
        start, end = int(cluster.start), int(math.ceil(cluster.end)) + 1

        if cluster.orientation == Orientation.HORIZONTAL:
            lo, hi = max(0, center - reach), min(height, center + reach + 1)
            band = mask[lo:hi, max(0, start):min(width, end)]
            axis = 1
        else:
            lo, hi = max(0, center - reach), min(width, center + reach + 1)
            band = mask[max(0, start):min(height, end), lo:hi]
            axis = 0
        if band.size == 0:
            return None

        inked = ((band > 0).mean(axis=axis) >= INK_FILL_RATIO).tolist()
        best: Optional[Tuple[int, int]] = None
        best_distance = math.inf
        index = 0
        while index < len(inked):
            if not inked[index]:
                index += 1
                continue
            first = index
            while index < len(inked) and inked[index]:
                index += 1
            run = (lo + first, lo + index - 1)
            distance = max(run[0] - cluster.center, cluster.center - run[1], 0.0)
            if distance < best_distance:
                best, best_distance = run, distance

        if best is None or best_distance > self._params.merge_tolerance:
            return None
        # Solid blocks are not rules.
        if best[1] - best[0] + 1 > self._params.max_thickness:
            return None
        return best

    def _to_line(self, cluster: _Cluster) -> Line:
        length = cluster.end - cluster.start
        confidence = Confidence(min(1.0, length / max(1, self._params.confidence_saturation)))
        if cluster.ink is not None:
            position = int(round((cluster.ink[0] + cluster.ink[1]) / 2))
            thickness = cluster.ink[1] - cluster.ink[0] + 1
        else:
            position = int(round(cluster.center))
            thickness = int(round(cluster.max_pos - cluster.min_pos)) + 1
        if cluster.orientation == Orientation.HORIZONTAL:
            return Line.horizontal(position, cluster.start, cluster.end, thickness=thickness, confidence=confidence)
        return Line.vertical(position, cluster.start, cluster.end, thickness=thickness, confidence=confidence)
