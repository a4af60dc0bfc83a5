"""Per-modal bookkeeping of which option is chosen for each category."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from alignzo.core.models.entities import SelectionEntry, TaskCategorySelection

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from alignzo.core.models.entities import Catalog

logger = logging.getLogger(__name__)


def _clean(option_id: str | None) -> str | None:
    if option_id is None:
        return None
    option_id = option_id.strip()
    return option_id or None


class SelectionStore:
    """Mapping of category id to chosen option id, in first-touched order.

    A category whose choice is cleared keeps its entry (with no option) so it
    still counts as touched; only ``reset`` and ``rebuild`` remove entries.
    """

    def __init__(self) -> None:
        self._entries: dict[str, str | None] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, category_id: object) -> bool:
        return category_id in self._entries

    def __iter__(self) -> Iterator[SelectionEntry]:
        return iter(self.entries())

    def __repr__(self) -> str:
        return f"SelectionStore({self._entries!r})"

    def get(self, category_id: str) -> SelectionEntry | None:
        if category_id not in self._entries:
            return None
        return SelectionEntry(category_id=category_id, option_id=self._entries[category_id])

    def entries(self) -> list[SelectionEntry]:
        return [
            SelectionEntry(category_id=category_id, option_id=option_id)
            for category_id, option_id in self._entries.items()
        ]

    def set_option(
        self,
        category_id: str,
        option_id: str | None,
        *,
        catalog: Catalog | None = None,
    ) -> None:
        """Choose ``option_id`` for ``category_id``; blank clears the choice.

        Raises:
            ValueError: If ``catalog`` is given and the option belongs to
                another category.
        """
        cleaned = _clean(option_id)
        if catalog is not None and cleaned is not None:
            if not catalog.has_option(category_id, cleaned):
                raise ValueError(f"Option {cleaned} does not belong to category {category_id}")
        self._entries[category_id] = cleaned

    def clear(self, category_id: str) -> None:
        self.set_option(category_id, None)

    def reset(self) -> None:
        self._entries.clear()

    def is_complete(self, catalog: Catalog) -> bool:
        """True when every catalog category has a non-blank choice."""
        return all(self._entries.get(category_id) for category_id in catalog.category_ids())

    def missing_categories(self, catalog: Catalog) -> list[str]:
        """Catalog category ids that still lack a choice, in catalog order."""
        return [cid for cid in catalog.category_ids() if not self._entries.get(cid)]

    def to_selections(self) -> list[TaskCategorySelection]:
        """Entries in insertion order, each tagged with its position."""
        return [
            TaskCategorySelection(
                category_id=category_id,
                category_option_id=option_id,
                is_primary=False,
                sort_order=index,
            )
            for index, (category_id, option_id) in enumerate(self._entries.items())
        ]

    def primary_choice(self) -> tuple[str, str] | None:
        """First (category, option) pair with a choice, for legacy single-category fields."""
        for category_id, option_id in self._entries.items():
            if option_id:
                return category_id, option_id
        return None

    def hydrate(self, selections: Iterable[TaskCategorySelection]) -> None:
        """Replace the contents with a task's stored category links."""
        self.reset()
        for selection in sorted(selections, key=lambda sel: sel.sort_order):
            self._entries[selection.category_id] = _clean(selection.category_option_id)

    def rebuild(self, catalog: Catalog) -> None:
        """Drop state that no longer matches ``catalog``.

        Entries for removed categories are deleted; choices of options that
        left their category are cleared.
        """
        known = set(catalog.category_ids())
        rebuilt: dict[str, str | None] = {}
        for category_id, option_id in self._entries.items():
            if category_id not in known:
                logger.debug("Dropping selection for removed category %s", category_id)
                continue
            if option_id is not None and not catalog.has_option(category_id, option_id):
                logger.debug("Clearing stale option %s for category %s", option_id, category_id)
                option_id = None
            rebuilt[category_id] = option_id
        self._entries = rebuilt
