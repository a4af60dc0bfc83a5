"""Numeric limits and timeouts - no circular dependencies."""

from __future__ import annotations

HTTP_TIMEOUT = 10.0
HTTP_CONNECT_TIMEOUT = 5.0

MAX_LOG_LINES = 2000
MAX_LOG_MESSAGE_LENGTH = 4096
