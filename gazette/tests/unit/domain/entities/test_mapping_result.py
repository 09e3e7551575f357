"""Unit tests for MappingResult review operations."""
import threading

import pytest

from gazette.domain.entities.mapped_field import MappingActionType
from gazette.domain.entities.mapping_result import MappingResult
from gazette.domain.exceptions import EntityNotFoundError
from gazette.domain.value_objects.form_schema import FormType


@pytest.fixture
def mapping(field_factory):
    return MappingResult(
        form_type=FormType.DECREE,
        mapped_fields=[
            field_factory("number", 0.80, "20-123", required=True),
            field_factory("institution", 0.60, "Ministère de l'intérieur"),
            field_factory("signatory", 0.30, "Abdelaziz Djerad"),
        ],
        unmapped_fields=["annexe"],
        total_fields=4,
    )


class TestInitialState:
    def test_nothing_counts_before_review(self, mapping):
        assert mapping.mapped_count == 0
        assert mapping.overall_confidence.value == pytest.approx((0.8 + 0.6 + 0.3) / 3)
        assert mapping.manual_interventions == 0
        assert not mapping.is_complete

    def test_form_type_is_parsed(self, field_factory):
        result = MappingResult("gazette-issue", [], [], 0)
        assert result.form_type == FormType.GAZETTE_ISSUE


class TestAcceptAndEdit:
    def test_accept_then_edit_sequence(self, mapping):
        accepted = mapping.accept("number")
        assert accepted.confidence.value == pytest.approx(0.88)
        assert accepted.is_accepted
        assert accepted.mapped_value == "20-123"

        edited = mapping.edit("number", "20-124")
        assert edited.confidence.value == pytest.approx(0.792)
        assert edited.is_accepted
        assert edited.is_edited
        assert edited.mapped_value == "20-124"

    def test_aggregates_recomputed_after_each_action(self, mapping):
        mapping.accept("institution")
        assert mapping.mapped_count == 1
        assert mapping.overall_confidence.value == pytest.approx((0.8 + 0.66 + 0.3) / 3)

        mapping.edit("signatory", "A. Djerad")
        assert mapping.mapped_count == 2
        assert mapping.overall_confidence.value == pytest.approx((0.8 + 0.66 + 0.7) / 3)

    @pytest.mark.parametrize("actions", [
        ["accept"] * 5,
        ["edit", "accept", "accept", "edit", "accept"],
        ["accept", "edit"] * 4,
    ])
    def test_confidence_never_exceeds_acceptance_cap(self, mapping, actions):
        for name in ("number", "institution", "signatory"):
            for action in actions:
                if action == "accept":
                    mapping.accept(name)
                else:
                    mapping.edit(name, "manual")
        for item in mapping.mapped_fields:
            assert 0.0 <= item.confidence.value <= 0.95


class TestReject:
    def test_reject_clears_value_and_keeps_confidence(self, mapping):
        mapping.accept("institution")
        before = mapping.get_field("institution").confidence
        rejected = mapping.reject("institution")
        assert rejected.mapped_value is None
        assert not rejected.is_accepted
        assert rejected.confidence == before
        assert mapping.mapped_count == 0


class TestHistory:
    def test_every_action_is_recorded(self, mapping):
        mapping.accept("number")
        mapping.edit("number", "20-200")
        mapping.reject("signatory")
        assert mapping.manual_interventions == 3
        assert [a.action for a in mapping.actions] == [
            MappingActionType.ACCEPT, MappingActionType.EDIT, MappingActionType.REJECT,
        ]
        assert mapping.actions[1].previous_value == "20-123"
        assert mapping.actions[1].new_value == "20-200"

    def test_unknown_field_raises_without_recording(self, mapping):
        with pytest.raises(EntityNotFoundError):
            mapping.accept("title")
        assert mapping.manual_interventions == 0


def test_final_data_only_holds_accepted_values(mapping):
    mapping.accept("number")
    assert mapping.final_data() == {
        "annexe": None,
        "number": "20-123",
        "institution": None,
        "signatory": None,
    }


def test_concurrent_accepts_keep_aggregates_consistent(field_factory):
    mapping = MappingResult(
        form_type=FormType.LAW,
        mapped_fields=[field_factory(f"field_{i}", 0.5) for i in range(20)],
        unmapped_fields=[],
        total_fields=20,
    )
    threads = [threading.Thread(target=mapping.accept, args=(f"field_{i}",)) for i in range(20)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert mapping.mapped_count == 20
    assert mapping.manual_interventions == 20
    assert mapping.overall_confidence.value == pytest.approx(0.55)
    assert mapping.is_complete


def test_serialization_round_trip_keeps_review_state(mapping):
    mapping.accept("number")
    mapping.reject("signatory")
    restored = MappingResult.from_dict(mapping.to_dict())
    assert restored.mapped_count == mapping.mapped_count
    assert restored.overall_confidence.value == pytest.approx(mapping.overall_confidence.value)
    assert restored.manual_interventions == 2
    assert restored.get_field("number").mapped_value == "20-123"
