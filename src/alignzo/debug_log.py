"""Debug logging with in-app viewer support.

Python logging records from the form core (catalog loads, submissions,
HTTP failures) are captured into a ring buffer so the TUI can show them
and the CLI can export them.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from alignzo.limits import MAX_LOG_LINES, MAX_LOG_MESSAGE_LENGTH


@dataclass(slots=True)
class LogEntry:
    """A captured log entry."""

    group: str  # Level name (DEBUG, INFO, WARNING, ERROR, etc.)
    message: str
    timestamp: float
    logger_name: str


log_buffer: deque[LogEntry] = deque(maxlen=MAX_LOG_LINES)

# Incremented on clear so viewers can detect a reset
_buffer_generation: int = 0


def _truncate(message: str) -> str:
    if len(message) > MAX_LOG_MESSAGE_LENGTH:
        return message[:MAX_LOG_MESSAGE_LENGTH] + "... [truncated]"
    return message


class DebugLogHandler(logging.Handler):
    """Logging handler that captures logs to the debug buffer."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = _truncate(self.format(record))
            log_buffer.append(
                LogEntry(
                    group=record.levelname,
                    message=msg,
                    timestamp=record.created,
                    logger_name=record.name,
                )
            )
        except Exception:
            self.handleError(record)
            return

        # Mirror into Textual's devtools console when one is attached
        try:
            from textual import log as textual_log

            textual_log(msg)
        except Exception:
            pass


_debug_logging_initialized: bool = False


def setup_debug_logging(level: int = logging.INFO) -> None:
    """Attach the debug buffer handler to the ``alignzo`` logger.

    This is idempotent - calling it multiple times has no effect after the first call.
    """
    global _debug_logging_initialized

    if _debug_logging_initialized:
        return

    handler = DebugLogHandler()
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    package_logger = logging.getLogger("alignzo")
    package_logger.addHandler(handler)
    package_logger.setLevel(level)

    _debug_logging_initialized = True
    package_logger.debug("Debug logging initialized")


def clear_log_buffer() -> None:
    """Clear the log buffer."""
    global _buffer_generation
    log_buffer.clear()
    _buffer_generation += 1


def get_buffer_generation() -> int:
    """Get the current buffer generation (incremented on clear)."""
    return _buffer_generation


def export_logs_to_file(file_path: str | Path) -> int:
    """Export all logs from the buffer to a file.

    Args:
        file_path: Path to write the log file to

    Returns:
        Number of log entries written
    """
    output_path = Path(file_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w", encoding="utf-8") as f:
        f.write("# alignzo Debug Log Export\n")
        f.write(f"# Total entries: {len(log_buffer)}\n")
        f.write(f"# Buffer generation: {_buffer_generation}\n")
        f.write("# " + "=" * 76 + "\n\n")

        for entry in log_buffer:
            ts = datetime.fromtimestamp(entry.timestamp).strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
            f.write(f"{ts} [{entry.group}] {entry.message}\n")

    return len(log_buffer)
