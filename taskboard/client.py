"""Async client for the task board HTTP API."""

import logging
import os
from typing import Any, List, Optional

import httpx
from pydantic import ValidationError

from taskboard.models import Task

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:3001"


class ApiError(Exception):
    """A board API call failed, either in transport or with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class TaskApiClient:
    """Talks to the board API over HTTP.

    Every method raises ``ApiError`` on failure so callers only handle one
    exception type. Pass ``http_client`` to reuse a connection pool or to
    plug in a mock transport.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = 10.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = (
            base_url or os.getenv("TASKBOARD_API_URL", DEFAULT_API_URL)
        ).rstrip("/")
        self.timeout = timeout
        self._http_client = http_client

    async def _request(self, method: str, path: str, action: str, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        try:
            if self._http_client is not None:
                response = await self._http_client.request(method, url, **kwargs)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"Failed to {action}: {str(e)}")
            raise ApiError(f"Failed to {action}: {str(e)}") from e

        if not response.is_success:
            logger.error(f"Failed to {action}: {response.status_code} {response.reason_phrase}")
            raise ApiError(
                f"Failed to {action}: {response.reason_phrase}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise ApiError(
                f"Failed to {action}: invalid JSON response",
                status_code=response.status_code,
            ) from e

    @staticmethod
    def _parse_task(data: Any, action: str) -> Task:
        try:
            return Task.model_validate(data)
        except ValidationError as e:
            raise ApiError(f"Failed to {action}: unexpected task payload") from e

    async def get_tasks(self, channel_id: str) -> List[Task]:
        data = await self._request("GET", f"/boards/{channel_id}/tasks", "fetch tasks")
        if not isinstance(data, list):
            raise ApiError("Failed to fetch tasks: expected a list of tasks")
        tasks = []
        for item in data:
            try:
                tasks.append(Task.model_validate(item))
            except ValidationError as e:
                # PATCH stores any column value, so one bad record must not sink the board
                logger.warning(f"Skipping unreadable task on channel {channel_id}: {str(e)}")
        return tasks

    async def create_task(
        self, channel_id: str, title: str, description: str, column: str
    ) -> Task:
        payload = {"title": title, "description": description, "column": column}
        data = await self._request(
            "POST", f"/boards/{channel_id}/tasks", "create task", json=payload
        )
        return self._parse_task(data, "create task")

    async def update_task(self, task_id: str, **fields) -> Task:
        data = await self._request(
            "PATCH", f"/tasks/{task_id}", "update task", json=fields
        )
        return self._parse_task(data, "update task")

    async def delete_task(self, task_id: str) -> None:
        await self._request("DELETE", f"/tasks/{task_id}", "delete task")

    async def get_task(self, task_id: str) -> Task:
        data = await self._request("GET", f"/tasks/{task_id}", "fetch task")
        return self._parse_task(data, "fetch task")
