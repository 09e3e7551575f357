"""Unit tests for TableRegion and TableCell."""
import pytest

from gazette.domain.entities.table_region import TableCell, TableRegion
from gazette.domain.value_objects.bounding_box import BoundingBox


@pytest.fixture
def spanning_table():
    """Two-row table whose header cell spans both columns."""
    return TableRegion(
        bounding_box=BoundingBox(100, 200, 400, 200),
        rows=2,
        columns=2,
        cells=(
            TableCell(0, 0, BoundingBox(100, 200, 400, 100), text="Wilaya", colspan=2),
            TableCell(1, 0, BoundingBox(100, 300, 200, 100), text="Alger"),
            TableCell(1, 1, BoundingBox(300, 300, 200, 100), text="16"),
        ),
        confidence=0.9,
    )


class TestTableCell:
    def test_rejects_negative_position(self):
        with pytest.raises(ValueError):
            TableCell(-1, 0, BoundingBox(0, 0, 10, 10))

    def test_rejects_zero_span(self):
        with pytest.raises(ValueError):
            TableCell(0, 0, BoundingBox(0, 0, 10, 10), colspan=0)

    def test_with_text_keeps_geometry(self):
        cell = TableCell(0, 1, BoundingBox(0, 0, 10, 10))
        filled = cell.with_text("Oran", 0.6)
        assert filled.text == "Oran"
        assert filled.confidence.value == 0.6
        assert filled.bounding_box == cell.bounding_box
        assert cell.is_empty()


class TestTableRegion:
    def test_get_cell_resolves_spans(self, spanning_table):
        assert spanning_table.get_cell(0, 1).text == "Wilaya"
        assert spanning_table.get_cell(1, 1).text == "16"
        assert spanning_table.get_cell(2, 0) is None
        assert spanning_table.has_spanning_cells()

    def test_grid_repeats_spanning_text(self, spanning_table):
        assert spanning_table.to_grid() == [["Wilaya", "Wilaya"], ["Alger", "16"]]

    def test_text_is_row_major(self, spanning_table):
        assert spanning_table.text == "Wilaya\nAlger\t16"

    def test_with_page_number(self, spanning_table):
        assert spanning_table.with_page_number(3).page_number == 3
        with pytest.raises(ValueError):
            spanning_table.with_page_number(0)

    def test_serialization_keeps_spans(self, spanning_table):
        restored = TableRegion.from_dict(spanning_table.to_dict())
        assert restored == spanning_table
