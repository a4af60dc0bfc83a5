"""Core domain enums."""

from __future__ import annotations

from enum import Enum, StrEnum, auto


class TaskPriority(StrEnum):
    """Task priority levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @property
    def label(self) -> str:
        """Short display label."""
        return {
            self.LOW: "Low",
            self.MEDIUM: "Medium",
            self.HIGH: "High",
            self.URGENT: "Urgent",
        }[self]


class TaskStatus(StrEnum):
    """Task lifecycle status (independent of the board column)."""

    ACTIVE = "active"
    COMPLETED = "completed"
    ARCHIVED = "archived"


class TaskScope(StrEnum):
    """Visibility scope of a task."""

    PERSONAL = "personal"
    PROJECT = "project"


class FieldName(StrEnum):
    """Form fields that can carry a validation error."""

    TITLE = "title"
    PROJECT_ID = "project_id"
    COLUMN_ID = "column_id"
    CATEGORY_ID = "category_id"
    ESTIMATED_HOURS = "estimated_hours"
    ACTUAL_HOURS = "actual_hours"
    DUE_DATE = "due_date"


class FormMode(Enum):
    """Form display mode."""

    CREATE = auto()
    EDIT = auto()


class NotificationSeverity(StrEnum):
    """Notification severity levels."""

    INFORMATION = "information"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class SubmitOutcome(StrEnum):
    """Result of a task form submission."""

    SAVED = "saved"
    UNCHANGED = "unchanged"
    INVALID = "invalid"
    FAILED = "failed"
    IN_PROGRESS = "in_progress"


class CatalogLoadErrorKind(StrEnum):
    """Why a project's category catalog could not be used."""

    NETWORK = "network"
    MALFORMED = "malformed"
