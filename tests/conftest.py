"""Pytest fixtures for alignzo tests."""

from __future__ import annotations

import os
import tempfile
from datetime import UTC, datetime
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

_TEST_BASE_DIR = Path(tempfile.mkdtemp(prefix="alignzo-tests-"))
os.environ["ALIGNZO_DATA_DIR"] = str(_TEST_BASE_DIR / "data")
os.environ["ALIGNZO_CONFIG_DIR"] = str(_TEST_BASE_DIR / "config")
os.environ.pop("ALIGNZO_CONFIG", None)

from alignzo.core.api import KanbanApiClient  # noqa: E402
from alignzo.core.models.entities import Catalog, Category, CategoryOption, KanbanTask  # noqa: E402
from tests.helpers.mocks import BASE_URL, RecordingNotifier  # noqa: E402

settings.register_profile(
    "ci",
    max_examples=100,
    deadline=None,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
)
settings.register_profile(
    "dev",
    max_examples=20,
    deadline=500,
)
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    deadline=None,
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))

FIXED_NOW = datetime(2025, 6, 15, 12, 0, tzinfo=UTC)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def catalog() -> Catalog:
    """Two categories with two options each, already sorted."""
    return Catalog(
        project_id="proj-1",
        categories=[
            Category(
                id="c1",
                name="Area",
                sort_order=0,
                options=[
                    CategoryOption(id="o1", category_id="c1", name="Frontend", sort_order=0),
                    CategoryOption(id="o2", category_id="c1", name="Backend", sort_order=1),
                ],
            ),
            Category(
                id="c2",
                name="Effort",
                sort_order=1,
                options=[
                    CategoryOption(id="o3", category_id="c2", name="Small", sort_order=0),
                    CategoryOption(id="o4", category_id="c2", name="Large", sort_order=1),
                ],
            ),
        ],
    )


@pytest.fixture
def existing_task() -> KanbanTask:
    return KanbanTask(
        id="task-1",
        project_id="proj-1",
        column_id="col-1",
        title="Ship login page",
        description="Wire up the form",
        estimated_hours=4.0,
        due_date=datetime(2025, 7, 1, 9, 30, tzinfo=UTC),
        jira_ticket_key="ALZ-7",
        jira_ticket_id="ALZ-7",
    )


@pytest.fixture
async def api_client():
    """Client pointed at the fake base URL; pair with ``httpx_mock``."""
    client = KanbanApiClient(BASE_URL)
    yield client
    await client.aclose()


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW
