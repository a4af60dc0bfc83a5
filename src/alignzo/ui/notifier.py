"""Textual-backed notifier for the form core."""

from __future__ import annotations

from typing import TYPE_CHECKING

from alignzo.core.models.enums import NotificationSeverity

if TYPE_CHECKING:
    from textual.app import App
    from textual.notifications import SeverityLevel


class TextualNotifier:
    """Shows core notifications as Textual toasts."""

    _SEVERITY: dict[NotificationSeverity, SeverityLevel] = {
        NotificationSeverity.INFORMATION: "information",
        NotificationSeverity.SUCCESS: "information",
        NotificationSeverity.WARNING: "warning",
        NotificationSeverity.ERROR: "error",
    }

    def __init__(self, app: App) -> None:
        self._app = app

    def notify(self, kind: NotificationSeverity, message: str) -> None:
        self._app.notify(message, severity=self._SEVERITY[kind])
