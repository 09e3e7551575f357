"""Unit tests for FieldMapper."""
import pytest

from gazette.domain.entities.extracted_entity import (
    AnnexeEntity,
    DateEntity,
    InstitutionEntity,
    ReferenceEntity,
    SignatoryEntity,
)
from gazette.domain.exceptions import UnknownFormType
from gazette.domain.services.entity_extractor import EntityExtractor
from gazette.domain.services.field_mapper import FieldMapper
from gazette.domain.value_objects.entity_type import Calendar
from gazette.domain.value_objects.form_schema import FormType


@pytest.fixture
def mapper():
    return FieldMapper()


@pytest.fixture
def decree_entities(french_decree):
    return EntityExtractor().extract(french_decree)


def suggestions(mapping):
    return {item.field_name: item.suggested_value for item in mapping.mapped_fields}


class TestDecree:
    def test_fields_follow_the_heading(self, mapper, decree_entities):
        mapping = mapper.map(decree_entities, FormType.DECREE)

        values = suggestions(mapping)
        assert values["title"] == "fixant les modalités d'application"
        assert values["number"] == "20-123"
        assert values["hijri_date"] == "21 Dhou El Kaada 1441"
        assert values["gregorian_date"] == "2020-07-12"
        assert values["institution"] == "Ministère de l'intérieur et des collectivités locales"
        assert values["signatory"] == "Abdelaziz DJERAD"
        assert values["references"] == "la Constitution; la loi n° 90-11 du 21 avril 1990"
        assert values["article_count"] == "2"
        assert mapping.unmapped_fields == ["annexe"]
        assert mapping.total_fields == 10

    def test_nothing_is_accepted_yet(self, mapper, decree_entities):
        mapping = mapper.map(decree_entities, "decree")
        assert mapping.mapped_count == 0
        assert all(not item.is_accepted and item.mapped_value is None for item in mapping.mapped_fields)

    def test_field_confidence_comes_from_entities(self, mapper, decree_entities):
        mapping = mapper.map(decree_entities, FormType.DECREE)
        assert mapping.get_field("number").confidence.value == pytest.approx(0.9)
        assert mapping.get_field("references").confidence.value == pytest.approx(0.8)
        assert mapping.get_field("signatory").source_entity.value == "Abdelaziz DJERAD"

    def test_fields_in_schema_order(self, mapper, decree_entities):
        names = [item.field_name for item in mapper.map(decree_entities, FormType.DECREE).mapped_fields]
        assert names[:3] == ["title", "number", "hijri_date"]


def test_gazette_issue(mapper, decree_entities):
    mapping = mapper.map(decree_entities, "gazette-issue")

    values = suggestions(mapping)
    assert values["journal_number"] == "45"
    assert values["journal_date"] == "2020-07-12"
    assert values["publications"] == "Décret exécutif n° 20-123; loi n° 90-11"
    assert values["publication_count"] == "2"
    assert mapping.unmapped_fields == []


def test_law_without_heading_reports_unmapped_fields(mapper):
    entities = [
        DateEntity("21 Dhou El Kaada 1441", 0.8, 0, 21, calendar=Calendar.HIJRI, iso_value="1441-11-21"),
        DateEntity("12 juillet 2020", 0.8, 40, 55, calendar=Calendar.GREGORIAN, iso_value="2020-07-12"),
        InstitutionEntity("Ministère des finances", 0.85, 60, 82),
        SignatoryEntity("Abdelaziz DJERAD", 0.7, 300, 316),
        ReferenceEntity("la Constitution", 0.8, 100, 118),
        AnnexeEntity("Annexe", 0.75, 400, 406),
    ]

    mapping = mapper.map(entities, FormType.LAW)

    assert mapping.unmapped_fields == ["title", "number", "first_article", "article_count"]
    assert len(mapping.mapped_fields) == 6
    assert mapping.mapped_count == 0
    assert mapping.entities_used == 6
    assert not mapping.is_complete


def test_heading_of_other_kind_is_not_an_anchor(mapper, decree_entities):
    mapping = mapper.map(decree_entities, FormType.CIRCULAR)
    assert "title" in mapping.unmapped_fields


def test_unknown_form_type(mapper):
    with pytest.raises(UnknownFormType):
        mapper.map([], "passport")


def test_no_entities_maps_nothing(mapper):
    mapping = mapper.map([], FormType.ORDER)
    assert mapping.mapped_fields == []
    assert len(mapping.unmapped_fields) == 10
    assert mapping.overall_confidence.value == 0.0
