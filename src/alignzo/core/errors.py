"""Error types raised at the form core's I/O boundaries.

Validation problems are not exceptions; see ``ValidationResult``.
"""

from __future__ import annotations

from alignzo.core.models.enums import CatalogLoadErrorKind


class AlignzoError(Exception):
    """Base for alignzo errors with a machine-readable code."""

    def __init__(self, message: str, *, code: str) -> None:
        super().__init__(message)
        self.code = code


class ApiError(AlignzoError):
    """Raised by the HTTP client for transport failures and non-2xx replies."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message, code="API_ERROR")
        self.status_code = status_code


class CatalogLoadError(AlignzoError):
    """Raised when a project's category catalog cannot be loaded or parsed."""

    def __init__(
        self,
        project_id: str,
        reason: str,
        *,
        kind: CatalogLoadErrorKind = CatalogLoadErrorKind.MALFORMED,
    ) -> None:
        super().__init__(
            f"Failed to load categories for project {project_id}: {reason}",
            code="CATALOG_LOAD_FAILED",
        )
        self.project_id = project_id
        self.reason = reason
        self.kind = kind


class SubmissionError(AlignzoError):
    """Raised when saving a task or its category links fails."""

    def __init__(self, operation: str, cause: Exception) -> None:
        super().__init__(f"Failed to {operation}: {cause}", code="SUBMISSION_FAILED")
        self.operation = operation
        self.__cause__ = cause
