"""Tests for rule-line detection on synthetic page rasters."""
import cv2
import numpy as np
import pytest

from conftest import blank_raster, draw_horizontal, draw_vertical
from gazette.config import Settings
from gazette.domain.exceptions import GeometryError
from gazette.infrastructure.imaging.line_detector import LineDetectionParams, LineDetector


@pytest.fixture
def detector():
    return LineDetector()


def test_blank_page_has_no_lines(detector, blank_page):
    lines = detector.detect(blank_page)

    assert (lines.width, lines.height) == (1000, 1400)
    assert lines.horizontal == ()
    assert lines.vertical == ()


def test_thick_rule_becomes_one_horizontal_line(detector):
    raster = draw_horizontal(blank_raster(), 300, 100, 800, thickness=5)

    lines = detector.detect(raster)

    assert lines.vertical == ()
    assert len(lines.horizontal) == 1
    rule = lines.horizontal[0]
    assert abs(rule.position - 300) <= 3
    assert rule.start <= 110 and rule.end >= 790
    assert rule.confidence.value == 1.0


@pytest.mark.parametrize("thickness", [5, 6, 7, 9, 12])
def test_thick_stroke_is_one_rule_with_measured_thickness(detector, thickness):
    raster = draw_horizontal(blank_raster(), 400, 100, 900, thickness=thickness)

    lines = detector.detect(raster)

    assert len(lines.horizontal) == 1
    rule = lines.horizontal[0]
    assert abs(rule.position - 400) <= 3
    assert abs(rule.thickness - thickness) <= 2


def test_thick_vertical_stroke_is_one_rule(detector):
    raster = draw_vertical(blank_raster(), 500, 100, 1300, thickness=8)

    lines = detector.detect(raster)

    assert lines.horizontal == ()
    assert len(lines.vertical) == 1
    assert abs(lines.vertical[0].position - 500) <= 3
    assert abs(lines.vertical[0].thickness - 8) <= 2


def test_adjacent_thick_rules_stay_separate(detector):
    raster = blank_raster()
    for y in (8, 22, 36):
        draw_horizontal(raster, y, 40, 960, thickness=6)

    positions = [line.position for line in detector.detect(raster).horizontal]

    assert len(positions) == 3
    assert all(abs(found - drawn) <= 3 for found, drawn in zip(positions, (8, 22, 36)))


def test_vertical_gutter_rule(detector, two_column_page):
    lines = detector.detect(two_column_page)

    assert lines.horizontal == ()
    assert len(lines.vertical) == 1
    assert abs(lines.vertical[0].position - 500) <= 3


def test_short_strokes_are_ignored(detector):
    raster = draw_horizontal(blank_raster(), 300, 100, 130)

    assert detector.detect(raster).horizontal == ()


def test_oblique_strokes_are_dropped(detector):
    raster = blank_raster()
    cv2.line(raster, (100, 100), (600, 500), color=0, thickness=3)

    lines = detector.detect(raster)

    assert lines.horizontal == ()
    assert lines.vertical == ()


def test_confidence_grows_with_length(detector):
    raster = draw_horizontal(blank_raster(), 300, 100, 300)

    rule = detector.detect(raster).horizontal[0]

    assert rule.confidence.value == pytest.approx(0.5, abs=0.05)


def test_colour_input_matches_grayscale(detector, masthead_page):
    colour = cv2.cvtColor(masthead_page, cv2.COLOR_GRAY2BGR)

    assert detector.detect(colour) == detector.detect(masthead_page)


def test_lines_are_sorted_by_position(detector, masthead_page):
    positions = [line.position for line in detector.detect(masthead_page).horizontal]

    assert len(positions) == 3
    assert positions == sorted(positions)


def test_detection_is_deterministic(detector, masthead_page):
    assert detector.detect(masthead_page) == detector.detect(masthead_page.copy())


@pytest.mark.parametrize("raster", [np.zeros((0, 0), dtype=np.uint8), np.zeros((5,), dtype=np.uint8)])
def test_degenerate_raster_raises(detector, raster):
    with pytest.raises(GeometryError):
        detector.detect(raster)


def test_params_from_settings():
    params = LineDetectionParams.from_settings(Settings(LINE_MIN_LENGTH=80, LINE_MERGE_TOLERANCE=7))

    assert params.min_line_length == 80
    assert params.merge_tolerance == 7
    assert params.max_line_gap == 10
    assert params.max_thickness == 25
