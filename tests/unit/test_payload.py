"""Tests for task payload and category request shaping."""

from __future__ import annotations

import pytest

from alignzo.core.models.entities import FormSnapshot, TaskCategorySelection
from alignzo.core.models.enums import TaskPriority, TaskScope, TaskStatus
from alignzo.core.payload import DEFAULT_CATEGORY_USER, build_category_request, build_payload
from alignzo.core.selection import SelectionStore

pytestmark = pytest.mark.unit


def _store(*pairs: tuple[str, str | None]) -> SelectionStore:
    store = SelectionStore()
    for category_id, option_id in pairs:
        store.set_option(category_id, option_id)
    return store


def _form(**changes) -> FormSnapshot:
    return FormSnapshot(
        title="Ship it",
        description="Details",
        project_id="proj-1",
        column_id="col-1",
        priority=TaskPriority.HIGH,
        estimated_hours="3.5",
        assigned_to="dev@example.com",
        jira_ticket_id="ALZ-1",
        jira_ticket_key="ALZ-1",
    ).with_changes(**changes)


class TestBuildPayload:
    def test_two_entries_keep_order_and_first_pair(self):
        payload = build_payload(_form(), _store(("catA", "optA"), ("catB", "optB")))

        assert payload.categories == [
            TaskCategorySelection(category_id="catA", category_option_id="optA", sort_order=0),
            TaskCategorySelection(category_id="catB", category_option_id="optB", sort_order=1),
        ]
        assert payload.category_id == "catA"
        assert payload.category_option_id == "optA"

    def test_primary_pair_skips_unset_first_entry(self):
        payload = build_payload(_form(), _store(("catA", None), ("catB", "optB")))

        assert (payload.category_id, payload.category_option_id) == ("catB", "optB")
        assert payload.categories[0].category_option_id is None

    def test_no_choice_sends_empty_legacy_pair(self):
        payload = build_payload(_form(), SelectionStore())
        assert (payload.category_id, payload.category_option_id) == ("", "")
        assert payload.categories == []

    def test_scalar_fields_copied(self):
        payload = build_payload(_form(title="  padded  "), SelectionStore())

        assert payload.title == "  padded  "
        assert payload.description == "Details"
        assert payload.column_id == "col-1"
        assert payload.priority is TaskPriority.HIGH
        assert payload.status is TaskStatus.ACTIVE
        assert payload.scope is TaskScope.PROJECT
        assert payload.estimated_hours == 3.5
        assert payload.actual_hours is None
        assert payload.jira_ticket_key == "ALZ-1"

    @pytest.mark.parametrize("due_date", [None, "", "  "])
    def test_empty_due_date_becomes_explicit_null(self, due_date):
        wire = build_payload(_form(due_date=due_date), SelectionStore()).to_wire()

        assert "due_date" in wire
        assert wire["due_date"] is None

    def test_due_date_passed_through(self):
        payload = build_payload(_form(due_date="2025-07-01T09:30"), SelectionStore())
        assert payload.due_date == "2025-07-01T09:30"

    def test_wire_format_uses_plain_values(self):
        wire = build_payload(_form(), _store(("catA", "optA"))).to_wire()

        assert wire["priority"] == "high"
        assert wire["categories"] == [
            {
                "category_id": "catA",
                "category_option_id": "optA",
                "is_primary": False,
                "sort_order": 0,
            }
        ]

    def test_invalid_hours_raise(self):
        with pytest.raises(ValueError):
            build_payload(_form(estimated_hours="lots"), SelectionStore())


class TestCategoryRequest:
    def test_body_shape(self):
        body = build_category_request("task-1", _store(("c1", "o1")), "me@example.com")

        assert body == {
            "taskId": "task-1",
            "categories": [
                {
                    "category_id": "c1",
                    "category_option_id": "o1",
                    "is_primary": False,
                    "sort_order": 0,
                }
            ],
            "userEmail": "me@example.com",
        }

    def test_user_defaults_to_system(self):
        body = build_category_request("task-1", SelectionStore())
        assert body["userEmail"] == DEFAULT_CATEGORY_USER == "system"
