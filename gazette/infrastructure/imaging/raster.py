"""Raster loading, normalization and encoding helpers."""
from __future__ import annotations

import base64
import logging
from pathlib import Path

import cv2
import numpy as np

from gazette.domain.exceptions import GeometryError
from gazette.domain.value_objects.bounding_box import BoundingBox

logger = logging.getLogger(__name__)


def ensure_grayscale(raster: np.ndarray) -> np.ndarray:
    """Return a single-channel uint8 view of ``raster`` or raise GeometryError."""

    if raster is None:
        raise GeometryError("Input raster is None")
    if not isinstance(raster, np.ndarray):
        raise GeometryError(f"Input raster must be a numpy array, got {type(raster).__name__}")
    if raster.size == 0 or raster.ndim < 2 or raster.shape[0] == 0 or raster.shape[1] == 0:
        raise GeometryError(f"Input raster is empty (shape={raster.shape})")

    if raster.dtype != np.uint8:
        raster = cv2.convertScaleAbs(raster)

    if raster.ndim == 2:
        return raster
    if raster.ndim == 3:
        channels = raster.shape[2]
        if channels == 1:
            return raster[:, :, 0]
        if channels == 3:
            return cv2.cvtColor(raster, cv2.COLOR_BGR2GRAY)
        if channels == 4:
            return cv2.cvtColor(raster, cv2.COLOR_BGRA2GRAY)
    raise GeometryError(f"Unsupported raster shape {raster.shape}")


def load_raster(image_path: Path | str) -> np.ndarray:
    """Read a page image from disk as grayscale."""

    image = cv2.imread(str(image_path), cv2.IMREAD_GRAYSCALE)
    if image is None:
        raise GeometryError(f"Unable to read page image {image_path}")
    return image


def crop_region(raster: np.ndarray, region: BoundingBox) -> np.ndarray:
    """Crop ``region`` out of ``raster``, clipped to the raster bounds."""

    height, width = raster.shape[:2]
    clipped = region.intersection(BoundingBox(0, 0, width, height))
    rows, cols = clipped.slices()
    return raster[rows, cols]


def region_to_data_url(region: np.ndarray) -> str:
    """Encode a raster region as a PNG data URL suitable for OpenAI vision input."""

    ok, buffer = cv2.imencode(".png", region)
    if not ok:
        raise GeometryError("Failed to encode region as PNG")
    encoded = base64.b64encode(buffer.tobytes()).decode("utf-8")
    return f"data:image/png;base64,{encoded}"
