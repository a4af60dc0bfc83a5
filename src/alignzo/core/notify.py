"""Notifier seam used by the form core to surface transient messages."""

from __future__ import annotations

import logging
from typing import Protocol

from alignzo.core.models.enums import NotificationSeverity

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Anything that can show a short message to the user."""

    def notify(self, kind: NotificationSeverity, message: str) -> None: ...


class LoggingNotifier:
    """Headless notifier that writes messages to the log."""

    _LEVELS = {
        NotificationSeverity.INFORMATION: logging.INFO,
        NotificationSeverity.SUCCESS: logging.INFO,
        NotificationSeverity.WARNING: logging.WARNING,
        NotificationSeverity.ERROR: logging.ERROR,
    }

    def notify(self, kind: NotificationSeverity, message: str) -> None:
        logger.log(self._LEVELS[kind], "[%s] %s", kind.value, message)
