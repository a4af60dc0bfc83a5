"""Minimal Textual application hosting a single task form."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.app import App

from alignzo.config import AlignzoConfig
from alignzo.core.models.enums import FormMode, SubmitOutcome
from alignzo.core.session import TaskFormSession
from alignzo.debug_log import setup_debug_logging
from alignzo.ui.modals.task_form import TaskFormModal
from alignzo.ui.notifier import TextualNotifier

if TYPE_CHECKING:
    from alignzo.core.api import KanbanApiClient
    from alignzo.core.models.entities import KanbanTask


class AlignzoApp(App[SubmitOutcome | None]):
    """Opens the task form modal and exits with its outcome."""

    TITLE = "alignzo"
    CSS_PATH = "styles/alignzo.tcss"

    def __init__(
        self,
        client: KanbanApiClient,
        *,
        project_id: str,
        task: KanbanTask | None = None,
        column_id: str | None = None,
        config: AlignzoConfig | None = None,
    ) -> None:
        super().__init__()
        self.config = config or AlignzoConfig()
        mode = FormMode.EDIT if task is not None else FormMode.CREATE
        self.session = TaskFormSession(
            client,
            TextualNotifier(self),
            project_id=project_id,
            task=task,
            column_id=column_id,
            policy=self.config.validation.to_policy(mode),
            user_email=self.config.api.user_email,
            team_id=self.config.api.team_id,
        )

    def on_mount(self) -> None:
        setup_debug_logging()
        self.push_screen(TaskFormModal(self.session), callback=self.exit)
