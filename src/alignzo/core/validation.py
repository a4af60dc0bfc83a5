"""Task form validation.

Every rule runs on every call; the result lists all failing fields at once
so the modal can show each inline message.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

from alignzo.core.models.entities import FieldError, ValidationResult
from alignzo.core.models.enums import FieldName, FormMode

if TYPE_CHECKING:
    from alignzo.core.models.entities import Catalog, FormSnapshot, HoursValue
    from alignzo.core.selection import SelectionStore

TITLE_REQUIRED = "Title is required"
PROJECT_REQUIRED = "Project is required"
COLUMN_REQUIRED = "Column is required"
CATEGORY_REQUIRED_ANY = "At least one category option is required"
CATEGORY_REQUIRED_ALL = "All categories are mandatory and must be selected"
ESTIMATED_HOURS_POSITIVE = "Estimated hours must be greater than 0"
ACTUAL_HOURS_POSITIVE = "Actual hours must be greater than 0"
DUE_DATE_PAST = "Due date cannot be in the past"
DUE_DATE_INVALID = "Due date is invalid"


@dataclass(frozen=True, slots=True)
class ValidationPolicy:
    """Switches for the rules the modal variants disagree on.

    ``require_all_categories`` False accepts a form once any catalog category
    has a choice; True needs every category. ``allow_past_due_date_on_edit``
    lets an edit keep a due date that is already in the past, as long as it
    was not changed.
    """

    require_all_categories: bool = False
    allow_past_due_date_on_edit: bool = True
    mode: FormMode = FormMode.CREATE


DEFAULT_POLICY = ValidationPolicy()


def _is_blank(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_hours(value: HoursValue) -> float | None:
    """Parse an hours field; None when empty.

    Raises:
        ValueError: If the value is not a finite number.
    """
    if _is_blank(value):
        return None
    if isinstance(value, bool):
        raise ValueError(f"invalid hours value {value!r}")
    number = float(value)  # type: ignore[arg-type]
    if not math.isfinite(number):
        raise ValueError(f"invalid hours value {value!r}")
    return number


def parse_due_date(value: str) -> date | datetime:
    """Parse a date input (``YYYY-MM-DD``) or datetime input (ISO 8601).

    Raises:
        ValueError: If the value is neither.
    """
    text = value.strip()
    if len(text) == 10:
        return date.fromisoformat(text)
    return datetime.fromisoformat(text)


def is_past_due(value: str, now: datetime) -> bool:
    """True when ``value`` lies strictly before ``now``.

    Date-only values compare by calendar day. Naive datetimes are UTC, the
    same convention ``format_due_date_for_input`` writes them in.
    """
    parsed = parse_due_date(value)
    if not isinstance(parsed, datetime):
        return parsed < now.date()
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    if now.tzinfo is None:
        now = now.astimezone()
    return parsed < now


def _check_hours(value: HoursValue, field: FieldName, message: str) -> FieldError | None:
    try:
        hours = parse_hours(value)
    except (TypeError, ValueError):
        return FieldError(field=field, message=message)
    if hours is not None and hours <= 0:
        return FieldError(field=field, message=message)
    return None


def _check_categories(
    store: SelectionStore,
    catalog: Catalog,
    policy: ValidationPolicy,
    catalog_unavailable: bool,
) -> FieldError | None:
    if catalog_unavailable:
        message = CATEGORY_REQUIRED_ALL if policy.require_all_categories else CATEGORY_REQUIRED_ANY
        return FieldError(field=FieldName.CATEGORY_ID, message=message)
    if policy.require_all_categories:
        if not store.is_complete(catalog):
            return FieldError(field=FieldName.CATEGORY_ID, message=CATEGORY_REQUIRED_ALL)
        return None
    if catalog.is_empty:
        return None
    if len(store.missing_categories(catalog)) == len(catalog.categories):
        return FieldError(field=FieldName.CATEGORY_ID, message=CATEGORY_REQUIRED_ANY)
    return None


def _check_due_date(
    form: FormSnapshot,
    original: FormSnapshot | None,
    policy: ValidationPolicy,
    now: datetime,
) -> FieldError | None:
    due_date = form.due_date
    if due_date is None or _is_blank(due_date):
        return None
    try:
        past = is_past_due(due_date, now)
    except (TypeError, ValueError):
        return FieldError(field=FieldName.DUE_DATE, message=DUE_DATE_INVALID)
    if not past:
        return None

    keeps_existing = original is None or original.due_date == due_date
    if policy.mode == FormMode.EDIT and policy.allow_past_due_date_on_edit and keeps_existing:
        return None
    return FieldError(field=FieldName.DUE_DATE, message=DUE_DATE_PAST)


def validate(
    form: FormSnapshot,
    store: SelectionStore,
    catalog: Catalog,
    *,
    policy: ValidationPolicy = DEFAULT_POLICY,
    now: datetime | None = None,
    original: FormSnapshot | None = None,
    catalog_unavailable: bool = False,
) -> ValidationResult:
    """Check the current form values and category choices.

    Args:
        form: Current field values.
        store: Category choices made in the form.
        catalog: Categories available to the task's project.
        policy: Rule switches for the calling modal.
        now: Reference time for the due-date rule (defaults to local now).
        original: Values at load time; lets edits keep an unchanged past due date.
        catalog_unavailable: The catalog failed to load, so ``catalog`` is a
            stand-in and no category choice can satisfy the rule.

    Returns:
        A fresh result listing every failing field.
    """
    if now is None:
        now = datetime.now().astimezone()

    errors: list[FieldError] = []

    if _is_blank(form.title):
        errors.append(FieldError(field=FieldName.TITLE, message=TITLE_REQUIRED))

    if policy.mode == FormMode.CREATE and _is_blank(form.project_id):
        errors.append(FieldError(field=FieldName.PROJECT_ID, message=PROJECT_REQUIRED))

    if _is_blank(form.column_id):
        errors.append(FieldError(field=FieldName.COLUMN_ID, message=COLUMN_REQUIRED))

    checks = (
        _check_categories(store, catalog, policy, catalog_unavailable),
        _check_hours(form.estimated_hours, FieldName.ESTIMATED_HOURS, ESTIMATED_HOURS_POSITIVE),
        _check_hours(form.actual_hours, FieldName.ACTUAL_HOURS, ACTUAL_HOURS_POSITIVE),
        _check_due_date(form, original, policy, now),
    )
    errors.extend(error for error in checks if error is not None)

    return ValidationResult(errors=errors)
