"""Unsaved-change detection used to gate the submit button."""

from __future__ import annotations

import logging
import math
from enum import Enum
from typing import TYPE_CHECKING

from typing_extensions import TypeAliasType

from alignzo.core.models.entities import FormSnapshot, SelectionEntry, TaskCategorySelection

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

_NUMERIC_FIELDS = frozenset({"estimated_hours", "actual_hours"})


class _Empty:
    """Canonical stand-in for None, "" and whitespace-only strings."""

    _instance: _Empty | None = None

    def __new__(cls) -> _Empty:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "EMPTY"


EMPTY = _Empty()

SelectionLike = TypeAliasType(
    "SelectionLike", TaskCategorySelection | SelectionEntry | tuple[str, str | None]
)


def normalize_value(value: object, *, numeric: bool = False) -> object:
    """Collapse type noise so equal-looking values compare equal."""
    if value is None:
        return EMPTY
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return EMPTY
    if numeric and not isinstance(value, bool):
        try:
            number = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return value
        return number if math.isfinite(number) else value
    return value


def changed_fields(original: FormSnapshot, current: FormSnapshot) -> list[str]:
    """Names of the snapshot fields whose normalized values differ."""
    before = original.model_dump()
    after = current.model_dump()
    return [
        name
        for name in FormSnapshot.model_fields
        if normalize_value(before.get(name), numeric=name in _NUMERIC_FIELDS)
        != normalize_value(after.get(name), numeric=name in _NUMERIC_FIELDS)
    ]


def _selection_key(item: SelectionLike) -> tuple[str, object]:
    if isinstance(item, TaskCategorySelection):
        return item.category_id, normalize_value(item.category_option_id)
    if isinstance(item, SelectionEntry):
        return item.category_id, normalize_value(item.option_id)
    category_id, option_id = item
    return category_id, normalize_value(option_id)


def selections_changed(
    original: Sequence[SelectionLike], current: Sequence[SelectionLike]
) -> bool:
    """Positional comparison of (category, option) pairs."""
    if len(original) != len(current):
        return True
    return any(
        _selection_key(before) != _selection_key(after)
        for before, after in zip(original, current, strict=True)
    )


def has_changes(
    original: FormSnapshot,
    current: FormSnapshot,
    original_selections: Sequence[SelectionLike],
    current_selections: Sequence[SelectionLike],
) -> bool:
    """Whether submitting would write anything new.

    Anything that cannot be compared counts as a change so a legitimate
    submit is never blocked.
    """
    if not isinstance(original, FormSnapshot) or not isinstance(current, FormSnapshot):
        return True
    try:
        fields = changed_fields(original, current)
        if fields:
            logger.debug("Changed fields: %s", ", ".join(fields))
            return True
        return selections_changed(original_selections, current_selections)
    except Exception:
        logger.debug("Change detection failed; treating form as changed", exc_info=True)
        return True
