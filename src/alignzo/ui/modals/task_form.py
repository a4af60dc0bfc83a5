"""Task form modal for creating and editing tasks."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual import on, work
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Rule, Select, Static, TextArea

from alignzo.core.models.enums import FieldName, FormMode, SubmitOutcome
from alignzo.ui.forms.task_form import WIDGET_FIELDS, TaskFormBuilder, error_label, error_label_id
from alignzo.ui.widgets.base import CategorySelect

if TYPE_CHECKING:
    from textual.app import ComposeResult

    from alignzo.core.models.entities import ValidationResult
    from alignzo.core.session import TaskFormSession

_ERROR_FIELDS = frozenset(field.value for field in FieldName)


class TaskFormModal(ModalScreen[SubmitOutcome | None]):
    """Modal wrapping a ``TaskFormSession``.

    Category selects stay hidden behind a loading label until the catalog
    request settles.
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
        Binding("ctrl+s", "submit", "Save"),
    ]

    def __init__(self, session: TaskFormSession, **kwargs) -> None:
        super().__init__(**kwargs)
        self.session = session

    @property
    def is_editing(self) -> bool:
        return self.session.mode == FormMode.EDIT

    def compose(self) -> ComposeResult:
        form = self.session.form
        title = "Edit Task" if self.is_editing else "New Task"

        with Vertical(id="task-form-container"):
            yield Label(title, classes="modal-title")
            yield Rule()
            with VerticalScroll(id="task-form-body"):
                yield from TaskFormBuilder.build_title_field(form)
                yield from TaskFormBuilder.build_description_field(form)
                yield from TaskFormBuilder.build_field_selects(form, self.session.mode)

                yield Label("Categories", classes="section-title")
                yield Vertical(
                    Static("Loading categories...", id="categories-loading"),
                    id="category-fields",
                )
                yield error_label(FieldName.CATEGORY_ID)

                yield from TaskFormBuilder.build_schedule_fields(form, self.session.mode)
            yield Rule()
            with Horizontal(classes="button-row"):
                yield Button("Save", variant="primary", id="save-btn", disabled=True)
                yield Button("Cancel", id="cancel-btn")

    def on_mount(self) -> None:
        self.query_one("#title-input", Input).focus()
        self.load_categories()

    @work(exclusive=True, group="task-form-load")
    async def load_categories(self) -> None:
        await self.session.open()
        if self.session.closed or not self.is_attached:
            return
        await self._render_categories()
        self._refresh_submit_state()

    async def _render_categories(self) -> None:
        container = self.query_one("#category-fields", Vertical)
        await container.remove_children()
        fields = TaskFormBuilder.build_category_fields(self.session.catalog, self.session.store)
        result = self.session.catalog_result
        if fields:
            await container.mount_all(fields)
        elif result is not None and result.empty:
            await container.mount(Static("No categories for this project", classes="hint"))
        else:
            await container.mount(Static("Categories unavailable", classes="hint"))

    def _refresh_submit_state(self) -> None:
        self.query_one("#save-btn", Button).disabled = not self.session.can_submit()

    def _clear_error(self, field: FieldName) -> None:
        self.query_one(f"#{error_label_id(field)}", Static).update("")

    def show_errors(self, result: ValidationResult) -> None:
        messages = result.field_errors
        for field in FieldName:
            label = self.query(f"#{error_label_id(field)}")
            if label:
                label.first(Static).update(messages.get(field, ""))

    @on(Input.Changed)
    def on_input_changed(self, event: Input.Changed) -> None:
        field = WIDGET_FIELDS.get(event.input.id or "")
        if field is None:
            return
        self.session.set_field(field, event.value)
        if field == "jira_ticket_key":
            self.session.set_field("jira_ticket_id", event.value)
        if field in _ERROR_FIELDS:
            self._clear_error(FieldName(field))
        self._refresh_submit_state()

    @on(TextArea.Changed, "#description-input")
    def on_description_changed(self, event: TextArea.Changed) -> None:
        self.session.set_field("description", event.text_area.text)
        self._refresh_submit_state()

    @on(Select.Changed)
    def on_select_changed(self, event: Select.Changed) -> None:
        value = event.value if isinstance(event.value, str) else None
        if isinstance(event.select, CategorySelect):
            category_id = event.select.category_id
            if value is None and category_id not in self.session.store:
                # blank select settling on mount; the category is still untouched
                return
            self.session.set_option(category_id, value)
            self._clear_error(FieldName.CATEGORY_ID)
        elif (field := WIDGET_FIELDS.get(event.select.id or "")) is not None and value:
            self.session.set_field(field, value)
        self._refresh_submit_state()

    @on(Button.Pressed, "#save-btn")
    def on_save_btn(self) -> None:
        self.run_worker(self.action_submit(), exclusive=True, group="task-form-submit")

    @on(Button.Pressed, "#cancel-btn")
    def on_cancel_btn(self) -> None:
        self.action_cancel()

    async def action_submit(self) -> None:
        """Validate and save; stays open on invalid input or a failed save."""
        if self.session.loading or self.session.submitting:
            return
        self.query_one("#save-btn", Button).disabled = True
        outcome = await self.session.submit()
        if outcome == SubmitOutcome.INVALID and self.session.last_result is not None:
            self.show_errors(self.session.last_result)
        if outcome in (SubmitOutcome.SAVED, SubmitOutcome.UNCHANGED):
            self.session.close()
            self.dismiss(outcome)
            return
        self._refresh_submit_state()

    def action_cancel(self) -> None:
        """Close without saving; a pending catalog load is discarded."""
        self.session.close()
        self.dismiss(None)
