"""Unit tests for JournalPage."""
import pytest

from gazette.domain.entities.table_region import TableRegion
from gazette.domain.value_objects.bounding_box import BoundingBox


def test_text_follows_column_order(page_factory):
    page = page_factory(texts=("left column", "", "right column"))
    assert page.text == "left column\nright column"
    assert [zone.column_index for zone in page.ordered_zones] == [0, 1, 2]


def test_confidence_is_zone_mean(page_factory):
    assert page_factory(texts=("a", "b"), confidence=0.6).confidence.value == pytest.approx(0.6)


def test_zone_overlapping_table_is_rejected(page_factory):
    table = TableRegion(BoundingBox(60, 1200, 100, 50), 1, 2, (), 1.0)
    with pytest.raises(ValueError):
        # the single zone covers the whole content area
        page_factory(3, tables=[table])


def test_tables_are_stamped_with_page_number(page_factory):
    table = TableRegion(BoundingBox(60, 1340, 100, 40), 1, 2, (), 1.0)
    page = page_factory(3, tables=[table])
    assert page.tables[0].page_number == 3


def test_page_number_must_be_positive(page_factory):
    with pytest.raises(ValueError):
        page_factory(0)


def test_round_trip(page_factory):
    from gazette.domain.entities.journal_page import JournalPage

    page = page_factory(4, ("نص", "texte"))
    assert JournalPage.from_dict(page.to_dict()) == page
