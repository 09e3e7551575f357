"""OpenCV-backed raster helpers and rule-line detection."""
from .line_detector import DetectedLines, LineDetectionParams, LineDetector
from .raster import crop_region, ensure_grayscale, load_raster, region_to_data_url

__all__ = [
    "DetectedLines",
    "LineDetectionParams",
    "LineDetector",
    "crop_region",
    "ensure_grayscale",
    "load_raster",
    "region_to_data_url",
]
