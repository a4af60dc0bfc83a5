"""Category catalog loading and normalization.

The project-options endpoint has shipped several response shapes over
time (``options`` vs ``category_options``, nested vs flattened option
lists, ``option_name`` vs ``name``). Everything is normalized here into
``Catalog``/``Category``/``CategoryOption`` so downstream code never
branches on shape.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from alignzo.core.errors import ApiError, CatalogLoadError
from alignzo.core.models.entities import Catalog, Category, CategoryOption
from alignzo.core.models.enums import CatalogLoadErrorKind, NotificationSeverity
from alignzo.core.notify import LoggingNotifier

if TYPE_CHECKING:
    from collections.abc import Mapping

    from alignzo.core.api import KanbanApiClient
    from alignzo.core.notify import Notifier

logger = logging.getLogger(__name__)

LOAD_FAILED_MESSAGE = "Failed to load categories. Please try again."

_NESTED_OPTION_KEYS = ("options", "category_options")


@dataclass(frozen=True, slots=True)
class CatalogLoadResult:
    """Catalog plus the recoverable error that replaced it, if any."""

    catalog: Catalog
    error: CatalogLoadError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def empty(self) -> bool:
        """Loaded fine but the project has no active categories."""
        return self.ok and self.catalog.is_empty


def _is_active(raw: Mapping[str, Any]) -> bool:
    return raw.get("is_active") is not False


def _sort_order(project_id: str, raw: Mapping[str, Any]) -> int:
    value = raw.get("sort_order")
    if value is None or value == "":
        return 0
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise CatalogLoadError(project_id, f"invalid sort_order {value!r}") from exc


def _require_id(project_id: str, raw: object, what: str) -> str:
    if not isinstance(raw, dict):
        raise CatalogLoadError(project_id, f"{what} entry is not an object")
    value = raw.get("id")
    if value is None or str(value).strip() == "":
        raise CatalogLoadError(project_id, f"{what} entry has no id")
    return str(value)


def _normalize_option(project_id: str, category_id: str, raw: Any) -> CategoryOption:
    option_id = _require_id(project_id, raw, "option")
    name = raw.get("option_name") or raw.get("name") or ""
    value = raw.get("option_value") or raw.get("value") or name
    return CategoryOption(
        id=option_id,
        category_id=category_id,
        name=str(name),
        value=str(value),
        sort_order=_sort_order(project_id, raw),
    )


def _raw_categories(project_id: str, raw: object) -> tuple[list[Any], list[Any]]:
    """Split a response body into (category entries, flattened option entries)."""
    if isinstance(raw, list):
        return raw, []
    if not isinstance(raw, dict):
        raise CatalogLoadError(project_id, "response body is not an object")

    categories = raw.get("categories")
    if categories is None:
        categories = []
    if not isinstance(categories, list):
        raise CatalogLoadError(project_id, "'categories' is not a list")

    flattened: list[Any] = []
    for key in _NESTED_OPTION_KEYS:
        extra = raw.get(key)
        if isinstance(extra, list):
            flattened.extend(extra)
    return categories, flattened


def normalize_catalog(project_id: str, raw: object) -> Catalog:
    """Turn a project-options response body into a sorted, active-only catalog.

    Raises:
        CatalogLoadError: If the body or any entry is malformed.
    """
    raw_categories, flattened = _raw_categories(project_id, raw)

    categories: list[Category] = []
    for raw_category in raw_categories:
        category_id = _require_id(project_id, raw_category, "category")
        if not _is_active(raw_category):
            continue

        raw_options: list[Any] = []
        for key in _NESTED_OPTION_KEYS:
            nested = raw_category.get(key)
            if isinstance(nested, list):
                raw_options.extend(nested)
        raw_options.extend(
            opt
            for opt in flattened
            if isinstance(opt, dict) and str(opt.get("category_id")) == category_id
        )

        options = [
            _normalize_option(project_id, category_id, opt)
            for opt in raw_options
            if not isinstance(opt, dict) or _is_active(opt)
        ]
        options.sort(key=lambda opt: opt.sort_order)

        try:
            category = Category(
                id=category_id,
                name=str(raw_category.get("name") or ""),
                description=raw_category.get("description"),
                sort_order=_sort_order(project_id, raw_category),
                options=options,
            )
        except ValidationError as exc:
            reason = exc.errors()[0]["msg"]
            raise CatalogLoadError(project_id, f"category {category_id}: {reason}") from exc
        categories.append(category)

    categories.sort(key=lambda cat: cat.sort_order)
    return Catalog(project_id=project_id, categories=categories)


class CatalogLoader:
    """Fetches a project's catalog and converts every failure into a result."""

    def __init__(self, client: KanbanApiClient, notifier: Notifier | None = None) -> None:
        self._client = client
        self._notifier = notifier or LoggingNotifier()

    async def load(self, project_id: str) -> CatalogLoadResult:
        """Load the catalog for ``project_id``.

        Network and parse failures return an empty catalog together with the
        error and notify the user; nothing is raised for them.
        """
        if not project_id or not project_id.strip():
            raise ValueError("project_id is required to load categories")

        try:
            body = await self._client.get_project_categories(project_id)
            catalog = normalize_catalog(project_id, body)
        except ApiError as exc:
            error = CatalogLoadError(project_id, str(exc), kind=CatalogLoadErrorKind.NETWORK)
        except CatalogLoadError as exc:
            error = exc
        else:
            result = CatalogLoadResult(catalog=catalog)
            if result.empty:
                logger.info("Project %s has no active categories", project_id)
            else:
                logger.info(
                    "Loaded %d categories for project %s", len(catalog.categories), project_id
                )
            return result

        logger.warning("%s", error)
        self._notifier.notify(NotificationSeverity.ERROR, LOAD_FAILED_MESSAGE)
        return CatalogLoadResult(catalog=Catalog(project_id=project_id), error=error)
