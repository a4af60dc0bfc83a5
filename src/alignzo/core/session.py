"""State owned by one open task form (create or edit).

The session ties the catalog loader, selection store, validator, change
detector and payload builder together. It is created when a modal opens and
thrown away when it closes; nothing is shared between sessions.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import TYPE_CHECKING

from alignzo.core import changes
from alignzo.core.catalog import CatalogLoader
from alignzo.core.errors import ApiError, SubmissionError
from alignzo.core.models.entities import Catalog, FormSnapshot
from alignzo.core.models.enums import FormMode, NotificationSeverity, SubmitOutcome
from alignzo.core.payload import build_category_request, build_payload
from alignzo.core.selection import SelectionStore
from alignzo.core.validation import ValidationPolicy, validate

if TYPE_CHECKING:
    from collections.abc import Callable

    from alignzo.core.api import KanbanApiClient
    from alignzo.core.catalog import CatalogLoadResult
    from alignzo.core.errors import CatalogLoadError
    from alignzo.core.models.entities import (
        KanbanTask,
        TaskCategorySelection,
        ValidationResult,
    )
    from alignzo.core.notify import Notifier

logger = logging.getLogger(__name__)

NO_CHANGES_MESSAGE = "No changes detected. Task remains unchanged."


class TaskFormSession:
    """One modal's worth of task form state."""

    def __init__(
        self,
        client: KanbanApiClient,
        notifier: Notifier,
        *,
        project_id: str,
        task: KanbanTask | None = None,
        column_id: str | None = None,
        policy: ValidationPolicy | None = None,
        user_email: str | None = None,
        team_id: str | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.mode = FormMode.EDIT if task is not None else FormMode.CREATE
        self.task = task
        self.project_id = project_id
        self.policy = policy or ValidationPolicy(mode=self.mode)
        if self.policy.mode != self.mode:
            raise ValueError(f"Policy mode {self.policy.mode} does not match {self.mode}")

        self._client = client
        self._notifier = notifier
        self._loader = CatalogLoader(client, notifier)
        self._user_email = user_email
        self._team_id = team_id
        self._clock = clock or (lambda: datetime.now().astimezone())

        if task is not None:
            self.original = FormSnapshot.from_task(task)
        else:
            self.original = FormSnapshot(project_id=project_id, column_id=column_id or "")
        self.form = self.original

        self.store = SelectionStore()
        self.catalog = Catalog(project_id=project_id)
        self.original_selections: list[TaskCategorySelection] = []
        self.catalog_result: CatalogLoadResult | None = None
        self.catalog_error: CatalogLoadError | None = None
        self.last_result: ValidationResult | None = None
        self.last_error: SubmissionError | None = None

        self.loading = False
        self.submitting = False
        self.closed = False

    # -- loading ---------------------------------------------------------

    async def _load_task_categories(self) -> list[TaskCategorySelection]:
        if self.task is None:
            return []
        try:
            return await self._client.get_task_categories(self.task.id)
        except ApiError as exc:
            logger.warning("Could not load categories for task %s: %s", self.task.id, exc)
            return []

    async def open(self) -> None:
        """Load the catalog (and, when editing, the task's links) concurrently.

        Results that arrive after ``close`` are dropped.
        """
        self.loading = True
        try:
            catalog_result, links = await asyncio.gather(
                self._loader.load(self.project_id),
                self._load_task_categories(),
            )
        finally:
            self.loading = False

        if self.closed:
            logger.debug("Form closed before categories arrived; discarding")
            return

        self._apply_catalog(catalog_result)
        self.store.hydrate(links)
        self.original_selections = self.store.to_selections()
        self.store.rebuild(self.catalog)

    async def reload_catalog(self, project_id: str | None = None) -> None:
        """Re-fetch the catalog, e.g. after the task's project changes."""
        if project_id is not None and project_id != self.project_id:
            self.project_id = project_id
            self.form = self.form.with_changes(project_id=project_id)

        self.loading = True
        try:
            result = await self._loader.load(self.project_id)
        finally:
            self.loading = False

        if self.closed:
            logger.debug("Form closed before categories arrived; discarding")
            return

        self._apply_catalog(result)
        self.store.rebuild(self.catalog)

    def _apply_catalog(self, result: CatalogLoadResult) -> None:
        self.catalog_result = result
        self.catalog = result.catalog
        self.catalog_error = result.error

    def close(self) -> None:
        self.closed = True
        self.store.reset()

    # -- editing ---------------------------------------------------------

    def set_field(self, name: str, value: object) -> None:
        if name not in FormSnapshot.model_fields:
            raise KeyError(name)
        self.form = self.form.with_changes(**{name: value})

    def set_option(self, category_id: str, option_id: str | None) -> None:
        self.store.set_option(category_id, option_id, catalog=self.catalog)

    def validate(self) -> ValidationResult:
        self.last_result = validate(
            self.form,
            self.store,
            self.catalog,
            policy=self.policy,
            now=self._clock(),
            original=self.original if self.mode == FormMode.EDIT else None,
            catalog_unavailable=self.catalog_error is not None,
        )
        return self.last_result

    def has_changes(self) -> bool:
        if self.mode == FormMode.CREATE:
            return True
        return changes.has_changes(
            self.original,
            self.form,
            self.original_selections,
            self.store.to_selections(),
        )

    def can_submit(self) -> bool:
        if self.loading or self.submitting or self.closed:
            return False
        return self.has_changes()

    # -- submission ------------------------------------------------------

    async def submit(self) -> SubmitOutcome:
        """Validate and save.

        A failed save leaves the form values and choices untouched so the
        user can retry. A call made while a save is in flight returns
        ``IN_PROGRESS`` without sending anything.
        """
        if self.closed:
            raise RuntimeError("Cannot submit a closed task form")
        if self.submitting:
            logger.debug("Submit ignored; a save is already in flight")
            return SubmitOutcome.IN_PROGRESS

        if not self.has_changes():
            self._notifier.notify(NotificationSeverity.INFORMATION, NO_CHANGES_MESSAGE)
            return SubmitOutcome.UNCHANGED

        if not self.validate().is_valid:
            return SubmitOutcome.INVALID

        payload = build_payload(self.form, self.store)
        operation = "update task" if self.mode == FormMode.EDIT else "create task"

        self.submitting = True
        try:
            if self.task is not None:
                if len(self.store):
                    await self._client.save_task_categories(
                        build_category_request(self.task.id, self.store, self._user_email)
                    )
                await self._client.update_task(
                    self.task.id,
                    payload,
                    project_id=self.project_id,
                    team_id=self._team_id,
                    user_email=self._user_email,
                )
            else:
                await self._client.create_task(
                    payload,
                    project_id=self.project_id,
                    team_id=self._team_id,
                    user_email=self._user_email,
                )
        except ApiError as exc:
            self.last_error = SubmissionError(operation, exc)
            logger.warning("%s", self.last_error)
            self._notifier.notify(
                NotificationSeverity.ERROR, f"Failed to {operation}. Please try again."
            )
            return SubmitOutcome.FAILED
        finally:
            self.submitting = False

        self.last_error = None
        if self.mode == FormMode.EDIT:
            self.original = self.form
            self.original_selections = self.store.to_selections()
            self._notifier.notify(NotificationSeverity.SUCCESS, "Task updated successfully!")
        else:
            self._notifier.notify(NotificationSeverity.SUCCESS, "Task created successfully!")
        logger.info("Task form saved (%s)", operation)
        return SubmitOutcome.SAVED
