"""Tests for unsaved-change detection."""

from __future__ import annotations

import pytest

from alignzo.core import changes
from alignzo.core.changes import (
    EMPTY,
    changed_fields,
    has_changes,
    normalize_value,
    selections_changed,
)
from alignzo.core.models.entities import FormSnapshot, SelectionEntry, TaskCategorySelection
from alignzo.core.models.enums import TaskPriority

pytestmark = pytest.mark.unit


def _links(*pairs: tuple[str, str | None]) -> list[TaskCategorySelection]:
    return [
        TaskCategorySelection(category_id=cid, category_option_id=oid, sort_order=index)
        for index, (cid, oid) in enumerate(pairs)
    ]


class TestNormalizeValue:
    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank_values_collapse_to_empty(self, value):
        assert normalize_value(value) is EMPTY

    def test_enum_compares_by_value(self):
        assert normalize_value(TaskPriority.HIGH) == normalize_value("high")

    def test_numeric_strings_compare_as_numbers(self):
        assert normalize_value("4", numeric=True) == normalize_value(4.0, numeric=True)

    def test_non_numeric_text_is_left_alone(self):
        assert normalize_value("four", numeric=True) == "four"

    def test_text_fields_are_not_coerced(self):
        assert normalize_value("4") != normalize_value(4.0)


class TestFieldComparison:
    def test_undefined_vs_empty_hours_is_unchanged(self):
        original = FormSnapshot(estimated_hours=None)
        current = FormSnapshot(estimated_hours="")

        assert has_changes(original, current, [], []) is False

    def test_stored_float_vs_typed_string(self):
        original = FormSnapshot(title="A", estimated_hours=4.0)
        current = original.with_changes(estimated_hours="4")
        assert changed_fields(original, current) == []

    def test_trailing_whitespace_is_not_a_change(self):
        original = FormSnapshot(title="Ship it")
        assert not has_changes(original, original.with_changes(title="Ship it  "), [], [])

    def test_reports_changed_field_names(self):
        original = FormSnapshot(title="A", priority=TaskPriority.LOW)
        current = original.with_changes(title="B", priority="urgent")
        assert changed_fields(original, current) == ["title", "priority"]

    def test_due_date_cleared_is_a_change(self):
        original = FormSnapshot(due_date="2025-07-01T09:30")
        assert has_changes(original, original.with_changes(due_date=""), [], [])


class TestSelectionComparison:
    def test_same_pairs_unchanged(self):
        assert not selections_changed(_links(("c1", "o1")), _links(("c1", "o1")))

    def test_length_difference(self):
        assert selections_changed(_links(("c1", "o1")), _links(("c1", "o1"), ("c2", None)))

    def test_reordering_is_a_change(self):
        assert selections_changed(
            _links(("c1", "o1"), ("c2", "o3")), _links(("c2", "o3"), ("c1", "o1"))
        )

    def test_none_and_blank_option_match(self):
        assert not selections_changed(_links(("c1", None)), [("c1", "")])

    def test_mixed_shapes_compare_by_pair(self):
        assert not selections_changed(
            _links(("c1", "o1")), [SelectionEntry(category_id="c1", option_id="o1")]
        )

    def test_selection_change_alone_counts(self):
        snapshot = FormSnapshot(title="A")
        assert has_changes(snapshot, snapshot, _links(("c1", "o1")), _links(("c1", "o2")))


class TestFailOpen:
    def test_non_snapshot_input_counts_as_changed(self):
        assert has_changes({"title": "A"}, FormSnapshot(title="A"), [], []) is True  # type: ignore[arg-type]

    def test_comparison_error_counts_as_changed(self, mocker):
        mocker.patch.object(changes, "changed_fields", side_effect=RuntimeError("boom"))
        snapshot = FormSnapshot(title="A")
        assert has_changes(snapshot, snapshot, [], []) is True

    def test_malformed_selection_counts_as_changed(self):
        snapshot = FormSnapshot(title="A")
        assert has_changes(snapshot, snapshot, [object()], [object()]) is True  # type: ignore[list-item]
