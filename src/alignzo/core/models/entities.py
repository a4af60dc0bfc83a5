"""Core domain entities.

These models mirror the shapes the kanban endpoints exchange with the task
form. They carry no persistence concerns; the HTTP client maps to and from
them.
"""

from __future__ import annotations

from datetime import UTC, datetime  # noqa: TC003 - Pydantic needs runtime access

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import TypeAliasType

from alignzo.core.models.enums import (
    FieldName,
    TaskPriority,
    TaskScope,
    TaskStatus,
)

HoursValue = TypeAliasType("HoursValue", float | str | None)


class DomainModel(BaseModel):
    """Base model with common config."""

    model_config = ConfigDict(from_attributes=True)


class CategoryOption(DomainModel):
    """Selectable value within a category."""

    id: str
    category_id: str
    name: str
    value: str = ""
    sort_order: int = 0


class Category(DomainModel):
    """Project category shown as one required select in the task form."""

    id: str
    name: str
    description: str | None = None
    sort_order: int = 0
    options: list[CategoryOption] = Field(default_factory=list)

    def get_option(self, option_id: str) -> CategoryOption | None:
        return next((opt for opt in self.options if opt.id == option_id), None)


class Catalog(DomainModel):
    """Ordered categories (and their options) available to a project."""

    project_id: str = ""
    categories: list[Category] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.categories

    def category_ids(self) -> list[str]:
        return [category.id for category in self.categories]

    def get(self, category_id: str) -> Category | None:
        return next((cat for cat in self.categories if cat.id == category_id), None)

    def has_option(self, category_id: str, option_id: str) -> bool:
        """Return True when ``option_id`` belongs to ``category_id``."""
        category = self.get(category_id)
        return category is not None and category.get_option(option_id) is not None


class SelectionEntry(DomainModel):
    """Chosen option for one category (``option_id`` None = touched but unset)."""

    model_config = ConfigDict(frozen=True)

    category_id: str
    option_id: str | None = None


class TaskCategorySelection(DomainModel):
    """Category link as stored against a task."""

    category_id: str
    category_option_id: str | None = None
    is_primary: bool = False
    sort_order: int = 0


class KanbanTask(DomainModel):
    """Task card as returned by the board endpoint."""

    id: str
    project_id: str
    column_id: str
    title: str
    description: str | None = None
    category_id: str | None = None
    category_option_id: str | None = None
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.ACTIVE
    scope: TaskScope = TaskScope.PROJECT
    estimated_hours: float | None = None
    actual_hours: float | None = None
    due_date: datetime | None = None
    assigned_to: str | None = None
    jira_ticket_id: str | None = None
    jira_ticket_key: str | None = None
    sort_order: int = 0


def format_due_date_for_input(value: datetime | None) -> str:
    """Format a stored due date as a ``YYYY-MM-DDTHH:MM`` input value (UTC)."""
    if value is None:
        return ""
    if value.tzinfo is not None:
        value = value.astimezone(UTC)
    return value.strftime("%Y-%m-%dT%H:%M")


class FormSnapshot(DomainModel):
    """Immutable copy of every editable task field.

    The modal keeps one snapshot taken at load time and replaces the
    current snapshot on each edit with ``model_copy(update=...)``.
    """

    model_config = ConfigDict(frozen=True, from_attributes=True)

    title: str = ""
    description: str = ""
    project_id: str = ""
    column_id: str = ""
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.ACTIVE
    scope: TaskScope = TaskScope.PROJECT
    estimated_hours: HoursValue = None
    actual_hours: HoursValue = None
    due_date: str | None = None
    assigned_to: str = ""
    jira_ticket_id: str = ""
    jira_ticket_key: str = ""

    @classmethod
    def from_task(cls, task: KanbanTask) -> FormSnapshot:
        """Build the edit-flow snapshot of an existing task."""
        return cls(
            title=task.title or "",
            description=task.description or "",
            project_id=task.project_id,
            column_id=task.column_id or "",
            priority=task.priority,
            status=task.status,
            scope=task.scope,
            estimated_hours=task.estimated_hours or None,
            actual_hours=task.actual_hours or None,
            due_date=format_due_date_for_input(task.due_date),
            assigned_to=task.assigned_to or "",
            jira_ticket_id=task.jira_ticket_id or "",
            jira_ticket_key=task.jira_ticket_key or "",
        )

    def with_changes(self, **changes: object) -> FormSnapshot:
        """Return a copy with validated field updates applied."""
        return type(self).model_validate({**self.model_dump(), **changes})


class FieldError(DomainModel):
    """One inline error message attached to a form field."""

    model_config = ConfigDict(frozen=True)

    field: FieldName
    message: str


class ValidationResult(DomainModel):
    """Outcome of a single validation pass."""

    errors: list[FieldError] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def field_errors(self) -> dict[FieldName, str]:
        """Field name to message mapping (first message per field wins)."""
        mapping: dict[FieldName, str] = {}
        for error in self.errors:
            mapping.setdefault(error.field, error.message)
        return mapping

    def message_for(self, field: FieldName) -> str | None:
        return self.field_errors.get(field)


class TaskPayload(DomainModel):
    """Body handed to the task create/update endpoint."""

    title: str
    description: str = ""
    project_id: str = ""
    category_id: str = ""
    category_option_id: str = ""
    categories: list[TaskCategorySelection] = Field(default_factory=list)
    column_id: str = ""
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.ACTIVE
    scope: TaskScope = TaskScope.PROJECT
    estimated_hours: float | None = None
    actual_hours: float | None = None
    due_date: str | None = None
    assigned_to: str = ""
    jira_ticket_id: str = ""
    jira_ticket_key: str = ""

    def to_wire(self) -> dict[str, object]:
        """JSON-ready dict; ``due_date`` is always present (None = no date)."""
        return self.model_dump(mode="json")
