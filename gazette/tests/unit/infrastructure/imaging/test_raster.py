import base64

import cv2
import numpy as np
import pytest

from conftest import blank_raster
from gazette.domain.exceptions import GeometryError
from gazette.domain.value_objects.bounding_box import BoundingBox
from gazette.infrastructure.imaging.raster import crop_region, ensure_grayscale, load_raster, region_to_data_url


class TestEnsureGrayscale:
    def test_grayscale_passes_through(self):
        raster = blank_raster(20, 10)

        assert ensure_grayscale(raster) is raster

    @pytest.mark.parametrize("channels", [1, 3, 4])
    def test_channels_are_collapsed(self, channels):
        raster = np.full((10, 20, channels), 255, dtype=np.uint8)

        gray = ensure_grayscale(raster)

        assert gray.shape == (10, 20)
        assert gray.dtype == np.uint8

    def test_non_uint8_is_converted(self):
        gray = ensure_grayscale(np.full((10, 20), 200.0, dtype=np.float32))

        assert gray.dtype == np.uint8
        assert int(gray[0, 0]) == 200

    @pytest.mark.parametrize(
        "raster",
        [
            None,
            [[0, 255]],
            np.zeros((0, 10), dtype=np.uint8),
            np.zeros((10, 10, 2), dtype=np.uint8),
            np.zeros((2, 2, 2, 2), dtype=np.uint8),
        ],
    )
    def test_unusable_input_raises(self, raster):
        with pytest.raises(GeometryError):
            ensure_grayscale(raster)


def test_load_raster_reads_grayscale(tmp_path):
    path = tmp_path / "page.png"
    cv2.imwrite(str(path), np.full((30, 40, 3), 255, dtype=np.uint8))

    raster = load_raster(path)

    assert raster.shape == (30, 40)


def test_load_raster_missing_file(tmp_path):
    with pytest.raises(GeometryError, match="Unable to read page image"):
        load_raster(tmp_path / "absent.png")


def test_crop_region_is_clipped_to_raster():
    raster = blank_raster(100, 50)

    assert crop_region(raster, BoundingBox(10, 5, 20, 15)).shape == (15, 20)
    assert crop_region(raster, BoundingBox(90, 40, 30, 30)).shape == (10, 10)


def test_region_to_data_url_encodes_png():
    url = region_to_data_url(blank_raster(12, 8))

    assert url.startswith("data:image/png;base64,")
    decoded = cv2.imdecode(np.frombuffer(base64.b64decode(url.split(",", 1)[1]), np.uint8), cv2.IMREAD_GRAYSCALE)
    assert decoded.shape == (8, 12)
