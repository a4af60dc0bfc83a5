"""alignzo: task form core for the kanban board (categories, validation, payloads)."""

__version__ = "0.1.0"
