"""Unit tests for PageLayoutAnalyzer on synthetic page rasters."""
import numpy as np
import pytest

from conftest import blank_raster, draw_horizontal, draw_vertical
from gazette.application.services.page_layout_analyzer import PageLayoutAnalyzer
from gazette.config import Settings
from gazette.domain.exceptions import GeometryError


@pytest.fixture
def analyzer():
    return PageLayoutAnalyzer(Settings())


def test_blank_page_is_one_zone(analyzer, blank_page):
    layout = analyzer.analyze(blank_page)

    assert layout.horizontal_lines == () and layout.vertical_lines == ()
    assert layout.tables == ()
    assert len(layout.zones) == 1
    assert layout.zones[0].bounding_box == layout.border_region.content_region


def test_masthead_rules_become_top_border(analyzer, masthead_page):
    layout = analyzer.analyze(masthead_page)

    border = layout.border_region
    assert border.removed_borders["top"] == 3
    assert all(abs(line.position - y) <= 3 for line, y in zip(border.top, (8, 22, 36)))
    assert border.content_region.y > 36
    assert len(layout.zones) == 1
    assert layout.zones[0].bounding_box.width == border.content_region.width


def test_thick_masthead_rules_count_once_each(analyzer):
    raster = blank_raster()
    for y in (8, 22, 36):
        draw_horizontal(raster, y, 40, 960, thickness=6)

    layout = analyzer.analyze(raster)

    border = layout.border_region
    assert len(layout.horizontal_lines) == 3
    assert border.removed_borders["top"] == 3
    assert all(line.thickness >= 4 for line in border.top)
    assert border.content_region.y > 36 + 3


def test_central_rule_splits_columns(analyzer, two_column_page):
    layout = analyzer.analyze(two_column_page)

    assert [zone.column_index for zone in layout.zones] == [0, 1]
    left, right = (zone.bounding_box for zone in layout.zones)
    assert abs(left.right - 500) <= 3
    assert left.right == right.x


def test_ruled_grid_becomes_a_table(analyzer):
    raster = blank_raster()
    for y in (200, 300, 400):
        draw_horizontal(raster, y, 200, 600)
    for x in (200, 400, 600):
        draw_vertical(raster, x, 200, 400)

    layout = analyzer.analyze(raster)

    assert len(layout.tables) == 1
    table = layout.tables[0]
    assert (table.rows, table.columns) == (2, 2)
    assert len(table.cells) == 4
    # the only zone covers the table and is dropped
    assert layout.zones == ()


def test_analysis_is_deterministic(analyzer, two_column_page):
    first = analyzer.analyze(two_column_page)
    second = analyzer.analyze(two_column_page.copy())
    assert first.horizontal_lines == second.horizontal_lines
    assert first.vertical_lines == second.vertical_lines
    assert first.border_region == second.border_region
    assert first.zones == second.zones


@pytest.mark.parametrize("raster", [
    np.zeros((0, 0), dtype=np.uint8),
    np.zeros((10, 0), dtype=np.uint8),
    np.zeros(5, dtype=np.uint8),
])
def test_degenerate_raster_raises(analyzer, raster):
    with pytest.raises(GeometryError):
        analyzer.analyze(raster)
