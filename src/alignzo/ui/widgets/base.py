"""Reusable form widgets for the task modal."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.widgets import Input, Select, TextArea

from alignzo.core.models.enums import TaskPriority, TaskStatus

if TYPE_CHECKING:
    from collections.abc import Sequence

    from alignzo.core.models.entities import Category


class TitleInput(Input):
    """Task title input."""

    DEFAULT_PLACEHOLDER = "Enter task title..."

    def __init__(self, value: str = "", *, widget_id: str = "title-input", **kwargs) -> None:
        super().__init__(value=value, placeholder=self.DEFAULT_PLACEHOLDER, id=widget_id, **kwargs)


class DescriptionArea(TextArea):
    """Task description textarea."""

    def __init__(self, text: str = "", *, widget_id: str = "description-input", **kwargs) -> None:
        super().__init__(text=text, id=widget_id, **kwargs)


class HoursInput(Input):
    """Numeric hours input; empty means not provided."""

    def __init__(self, value: object, *, widget_id: str, **kwargs) -> None:
        text = "" if value is None else str(value)
        super().__init__(value=text, placeholder="0.0", type="number", id=widget_id, **kwargs)


class PrioritySelect(Select[str]):
    """Task priority dropdown."""

    def __init__(
        self,
        value: TaskPriority = TaskPriority.MEDIUM,
        *,
        widget_id: str = "priority-select",
        **kwargs,
    ) -> None:
        options: Sequence[tuple[str, str]] = [(p.label, p.value) for p in TaskPriority]
        super().__init__(
            options=options,
            value=TaskPriority(value).value,
            allow_blank=False,
            id=widget_id,
            **kwargs,
        )


class StatusSelect(Select[str]):
    """Task status dropdown."""

    def __init__(
        self,
        value: TaskStatus = TaskStatus.ACTIVE,
        *,
        widget_id: str = "status-select",
        **kwargs,
    ) -> None:
        options: Sequence[tuple[str, str]] = [(s.value.title(), s.value) for s in TaskStatus]
        super().__init__(
            options=options,
            value=TaskStatus(value).value,
            allow_blank=False,
            id=widget_id,
            **kwargs,
        )


class CategorySelect(Select[str]):
    """One dropdown per catalog category; blank means no option chosen."""

    def __init__(self, category: Category, value: str | None = None, **kwargs) -> None:
        options: Sequence[tuple[str, str]] = [(opt.name, opt.id) for opt in category.options]
        if value is not None and category.get_option(value) is not None:
            kwargs["value"] = value
        super().__init__(
            options=options,
            prompt="Select an option (required)",
            classes="category-select",
            **kwargs,
        )
        self.category_id = category.id

    @property
    def option_id(self) -> str | None:
        return self.value if isinstance(self.value, str) else None
