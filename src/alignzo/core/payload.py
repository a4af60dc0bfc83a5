"""Shapes validated form state into the bodies the task endpoints accept."""

from __future__ import annotations

from typing import TYPE_CHECKING

from alignzo.core.models.entities import TaskPayload
from alignzo.core.validation import parse_hours

if TYPE_CHECKING:
    from alignzo.core.models.entities import FormSnapshot
    from alignzo.core.selection import SelectionStore

DEFAULT_CATEGORY_USER = "system"


def build_payload(form: FormSnapshot, store: SelectionStore) -> TaskPayload:
    """Build the task create/update body.

    The legacy single ``category_id``/``category_option_id`` pair carries the
    first chosen option; ``categories`` carries every touched category. An
    empty due date is sent as an explicit null because the task table rejects
    empty strings for timestamps.

    Raises:
        ValueError: If an hours field is not a number (validate first).
    """
    primary = store.primary_choice()
    category_id, category_option_id = primary if primary is not None else ("", "")

    due_date = form.due_date.strip() if form.due_date else ""

    return TaskPayload(
        title=form.title,
        description=form.description,
        project_id=form.project_id,
        category_id=category_id,
        category_option_id=category_option_id,
        categories=store.to_selections(),
        column_id=form.column_id,
        priority=form.priority,
        status=form.status,
        scope=form.scope,
        estimated_hours=parse_hours(form.estimated_hours),
        actual_hours=parse_hours(form.actual_hours),
        due_date=due_date or None,
        assigned_to=form.assigned_to,
        jira_ticket_id=form.jira_ticket_id,
        jira_ticket_key=form.jira_ticket_key,
    )


def build_category_request(
    task_id: str, store: SelectionStore, user_email: str | None = None
) -> dict[str, object]:
    """Body for ``POST /api/kanban/task-categories``."""
    return {
        "taskId": task_id,
        "categories": [selection.model_dump(mode="json") for selection in store.to_selections()],
        "userEmail": user_email or DEFAULT_CATEGORY_USER,
    }
