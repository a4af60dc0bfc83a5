"""Form field factory for the task modal.

Separates form generation logic from modal behavior.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.containers import Horizontal, Vertical
from textual.widgets import Input, Label, Static

from alignzo.core.models.enums import FieldName, FormMode
from alignzo.ui.widgets.base import (
    CategorySelect,
    DescriptionArea,
    HoursInput,
    PrioritySelect,
    StatusSelect,
    TitleInput,
)

if TYPE_CHECKING:
    from textual.app import ComposeResult

    from alignzo.core.models.entities import Catalog, FormSnapshot
    from alignzo.core.selection import SelectionStore

# Widget id -> FormSnapshot field it edits
WIDGET_FIELDS: dict[str, str] = {
    "title-input": "title",
    "description-input": "description",
    "column-input": "column_id",
    "priority-select": "priority",
    "status-select": "status",
    "estimated-hours-input": "estimated_hours",
    "actual-hours-input": "actual_hours",
    "due-date-input": "due_date",
    "assigned-to-input": "assigned_to",
    "jira-key-input": "jira_ticket_key",
}


def error_label_id(field: FieldName) -> str:
    return f"error-{field.value.replace('_', '-')}"


def error_label(field: FieldName) -> Static:
    return Static("", classes="field-error", id=error_label_id(field), markup=False)


class TaskFormBuilder:
    """Factory for the task form's widgets."""

    @staticmethod
    def build_title_field(form: FormSnapshot) -> ComposeResult:
        with Vertical(classes="form-field"):
            yield Label("Title *", classes="form-label")
            yield TitleInput(value=form.title)
            yield error_label(FieldName.TITLE)

    @staticmethod
    def build_description_field(form: FormSnapshot) -> ComposeResult:
        with Vertical(classes="form-field"):
            yield Label("Description", classes="form-label")
            yield DescriptionArea(text=form.description)

    @staticmethod
    def build_field_selects(form: FormSnapshot, mode: FormMode) -> ComposeResult:
        """Column, priority and (edit only) status row."""
        with Horizontal(classes="field-row"):
            with Vertical(classes="form-field field-third"):
                yield Label("Column *", classes="form-label")
                yield Input(value=form.column_id, placeholder="Column id", id="column-input")
                yield error_label(FieldName.COLUMN_ID)

            with Vertical(classes="form-field field-third"):
                yield Label("Priority", classes="form-label")
                yield PrioritySelect(value=form.priority)

            if mode == FormMode.EDIT:
                with Vertical(classes="form-field field-third"):
                    yield Label("Status", classes="form-label")
                    yield StatusSelect(value=form.status)

    @staticmethod
    def build_schedule_fields(form: FormSnapshot, mode: FormMode) -> ComposeResult:
        """Hours, due date and assignee."""
        with Horizontal(classes="field-row"):
            with Vertical(classes="form-field field-third"):
                yield Label("Estimated hours", classes="form-label")
                yield HoursInput(form.estimated_hours, widget_id="estimated-hours-input")
                yield error_label(FieldName.ESTIMATED_HOURS)

            if mode == FormMode.EDIT:
                with Vertical(classes="form-field field-third"):
                    yield Label("Actual hours", classes="form-label")
                    yield HoursInput(form.actual_hours, widget_id="actual-hours-input")
                    yield error_label(FieldName.ACTUAL_HOURS)

            with Vertical(classes="form-field field-third"):
                yield Label("Due date", classes="form-label")
                yield Input(
                    value=form.due_date or "",
                    placeholder="YYYY-MM-DD or YYYY-MM-DDTHH:MM",
                    id="due-date-input",
                )
                yield error_label(FieldName.DUE_DATE)

        with Horizontal(classes="field-row"):
            with Vertical(classes="form-field field-half"):
                yield Label("Assigned to", classes="form-label")
                yield Input(value=form.assigned_to, placeholder="email", id="assigned-to-input")

            with Vertical(classes="form-field field-half"):
                yield Label("JIRA ticket", classes="form-label")
                yield Input(value=form.jira_ticket_key, placeholder="ABC-123", id="jira-key-input")

    @staticmethod
    def build_category_fields(catalog: Catalog, store: SelectionStore) -> list[Vertical]:
        """One labelled select per category, pre-filled from ``store``."""
        fields: list[Vertical] = []
        for category in catalog.categories:
            entry = store.get(category.id)
            fields.append(
                Vertical(
                    Label(f"{category.name} *", classes="form-label"),
                    CategorySelect(category, entry.option_id if entry else None),
                    classes="form-field category-field",
                )
            )
        return fields
