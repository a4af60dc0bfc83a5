"""Test helpers package."""

from tests.helpers.mocks import (
    BASE_URL,
    RecordingNotifier,
    create_mock_client,
    project_options_body,
)
from tests.helpers.wait import wait_for_modal, wait_until

__all__ = [
    "BASE_URL",
    "RecordingNotifier",
    "create_mock_client",
    "project_options_body",
    "wait_for_modal",
    "wait_until",
]
