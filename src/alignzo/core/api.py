"""Async HTTP client for the kanban web endpoints the task form talks to."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Self

import httpx
from pydantic import ValidationError

from alignzo.core.errors import ApiError
from alignzo.core.models.entities import KanbanTask, TaskCategorySelection
from alignzo.limits import HTTP_CONNECT_TIMEOUT, HTTP_TIMEOUT

if TYPE_CHECKING:
    from types import TracebackType

    from alignzo.config import ApiConfig
    from alignzo.core.models.entities import TaskPayload

logger = logging.getLogger(__name__)

PROJECT_OPTIONS_PATH = "/api/categories/project-options"
TASK_CATEGORIES_PATH = "/api/kanban/task-categories"
TASKS_PATH = "/api/kanban/tasks"
BOARD_PATH = "/api/kanban/board"


class KanbanApiClient:
    """Thin wrapper over ``httpx.AsyncClient``.

    Every transport failure, non-2xx status, unparseable body or
    ``{"success": false}`` reply surfaces as ``ApiError``.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = HTTP_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout, connect=min(timeout, HTTP_CONNECT_TIMEOUT)),
            transport=transport,
            headers={"Accept": "application/json"},
        )

    @classmethod
    def from_config(cls, config: ApiConfig) -> KanbanApiClient:
        return cls(config.base_url, timeout=config.timeout_seconds)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        try:
            response = await self._client.request(method, path, params=params, json=json)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise ApiError(f"{method} {path} failed: {exc}") from exc

        if response.is_error:
            raise ApiError(
                f"{method} {path} returned {response.status_code}: {_error_message(response)}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(
                f"{method} {path} returned invalid JSON", status_code=response.status_code
            ) from exc

    async def _call(self, method: str, path: str, **kwargs: Any) -> Any:
        """Request and unwrap the ``{success, data, error}`` envelope."""
        body = await self._request(method, path, **kwargs)
        if isinstance(body, dict) and body.get("success") is False:
            raise ApiError(f"{method} {path} failed: {body.get('error') or 'unknown error'}")
        return body

    async def get_project_categories(self, project_id: str) -> Any:
        """Raw project-options body; normalize with ``normalize_catalog``."""
        return await self._request("GET", PROJECT_OPTIONS_PATH, params={"projectId": project_id})

    async def get_task_categories(self, task_id: str) -> list[TaskCategorySelection]:
        """Category links currently stored for a task."""
        body = await self._call("GET", TASK_CATEGORIES_PATH, params={"taskId": task_id})
        raw = body.get("categories") if isinstance(body, dict) else None
        try:
            return [
                TaskCategorySelection(
                    category_id=str(item["category_id"]),
                    category_option_id=item.get("category_option_id") or None,
                    is_primary=bool(item.get("is_primary", False)),
                    sort_order=int(item.get("sort_order") or 0),
                )
                for item in raw or []
                if isinstance(item, dict) and item.get("category_id")
            ]
        except (TypeError, ValueError) as exc:
            raise ApiError(f"GET {TASK_CATEGORIES_PATH} returned malformed categories") from exc

    async def save_task_categories(self, body: dict[str, object]) -> Any:
        """Replace a task's category links (see ``build_category_request``)."""
        return await self._call("POST", TASK_CATEGORIES_PATH, json=body)

    async def create_task(
        self,
        payload: TaskPayload,
        *,
        project_id: str,
        team_id: str | None = None,
        user_email: str | None = None,
    ) -> Any:
        data = {
            **payload.to_wire(),
            "project_id": project_id,
            "team_id": team_id,
            "user_email": user_email,
        }
        body = await self._call("POST", TASKS_PATH, json={"action": "create", "data": data})
        return body.get("data") if isinstance(body, dict) else body

    async def update_task(
        self,
        task_id: str,
        payload: TaskPayload,
        *,
        project_id: str,
        team_id: str | None = None,
        user_email: str | None = None,
    ) -> Any:
        data = {
            "id": task_id,
            **payload.to_wire(),
            "project_id": project_id,
            "team_id": team_id,
            "user_email": user_email,
        }
        body = await self._call("POST", TASKS_PATH, json={"action": "update", "data": data})
        return body.get("data") if isinstance(body, dict) else body

    async def get_board_tasks(self, project_id: str, team_id: str | None = None) -> list[KanbanTask]:
        """All tasks on a project's board, flattened across columns."""
        params = {"projectId": project_id}
        if team_id:
            params["teamId"] = team_id
        body = await self._call("GET", BOARD_PATH, params=params)
        columns = body.get("data") if isinstance(body, dict) else body
        tasks: list[KanbanTask] = []
        try:
            for column in columns or []:
                for raw_task in column.get("tasks") or []:
                    tasks.append(KanbanTask.model_validate(raw_task))
        except (AttributeError, ValidationError) as exc:
            raise ApiError(f"GET {BOARD_PATH} returned malformed tasks") from exc
        return tasks

    async def get_task(
        self, project_id: str, task_id: str, team_id: str | None = None
    ) -> KanbanTask | None:
        for task in await self.get_board_tasks(project_id, team_id):
            if task.id == task_id:
                return task
        return None


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or response.reason_phrase
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return response.reason_phrase
