"""Unit tests for the BoundingBox value object."""
import pytest

from gazette.domain.value_objects.bounding_box import BoundingBox


def test_rejects_negative_size():
    with pytest.raises(ValueError):
        BoundingBox(0, 0, -1, 10)


def test_rounds_float_coordinates():
    box = BoundingBox(10.4, 20.6, 30.5, 40)
    assert (box.x, box.y) == (10, 21)
    assert box.right == box.x + box.width


def test_from_edges_with_inverted_edges_is_empty():
    box = BoundingBox.from_edges(100, 100, 50, 200)
    assert box.is_empty()
    assert box.width == 0


class TestBoundingBoxOverlap:
    def test_shared_edge_is_not_overlap(self):
        left = BoundingBox(0, 0, 500, 1000)
        right = BoundingBox(500, 0, 500, 1000)
        assert not left.overlaps(right)
        assert not right.overlaps(left)

    def test_interior_intersection_overlaps(self):
        assert BoundingBox(0, 0, 50, 50).overlaps(BoundingBox(49, 49, 10, 10))

    def test_empty_box_never_overlaps(self):
        assert not BoundingBox(10, 10, 0, 50).overlaps(BoundingBox(0, 0, 100, 100))

    def test_intersection_of_disjoint_boxes_is_empty(self):
        assert BoundingBox(0, 0, 10, 10).intersection(BoundingBox(20, 20, 5, 5)).is_empty()

    def test_intersection_clips(self):
        clipped = BoundingBox(-10, -10, 50, 50).intersection(BoundingBox(0, 0, 100, 100))
        assert clipped == BoundingBox(0, 0, 40, 40)


def test_contains_allows_touching_edges():
    page = BoundingBox(0, 0, 1000, 1400)
    assert page.contains(BoundingBox(0, 0, 1000, 1400))
    assert not page.contains(BoundingBox(900, 0, 101, 10))


def test_slices_crop_rows_then_columns():
    rows, cols = BoundingBox(5, 10, 20, 30).slices()
    assert (rows.start, rows.stop) == (10, 40)
    assert (cols.start, cols.stop) == (5, 25)


def test_dict_round_trip():
    box = BoundingBox(1, 2, 3, 4)
    assert BoundingBox.from_dict(box.to_dict()) == box
    assert BoundingBox.from_dict(None).is_empty()
