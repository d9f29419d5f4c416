"""
Tests for the async API client against a mocked HTTP transport.
"""
import json

import httpx
import pytest

from taskboard.client import ApiError, TaskApiClient
from taskboard.models import Column


TASK = {
    "id": "t-1",
    "title": "Write docs",
    "description": "",
    "column": "todo",
    "channelId": "c1",
    "createdAt": "2026-01-01T09:00:00Z",
    "updatedAt": "2026-01-01T09:00:00Z",
}


def make_client(handler):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return TaskApiClient(base_url="http://board.test/api/", http_client=http_client)


@pytest.mark.asyncio
async def test_get_tasks_parses_tasks():
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["url"] = str(request.url)
        return httpx.Response(200, json=[TASK])

    tasks = await make_client(handler).get_tasks("c1")

    assert seen == {"method": "GET", "url": "http://board.test/api/boards/c1/tasks"}
    assert len(tasks) == 1
    assert tasks[0].id == "t-1"
    assert tasks[0].column == Column.TODO


@pytest.mark.asyncio
async def test_create_task_posts_payload():
    def handler(request):
        assert request.method == "POST"
        assert json.loads(request.content) == {
            "title": "Write docs",
            "description": "",
            "column": "todo",
        }
        return httpx.Response(201, json=TASK)

    task = await make_client(handler).create_task("c1", "Write docs", "", "todo")

    assert task.title == "Write docs"


@pytest.mark.asyncio
async def test_update_task_sends_partial_fields():
    def handler(request):
        assert request.method == "PATCH"
        assert request.url.path == "/api/tasks/t-1"
        assert json.loads(request.content) == {"column": "done"}
        return httpx.Response(200, json={**TASK, "column": "done"})

    task = await make_client(handler).update_task("t-1", column="done")

    assert task.column == Column.DONE


@pytest.mark.asyncio
async def test_non_2xx_raises_api_error():
    client = make_client(lambda request: httpx.Response(404, json={"error": "Task not found"}))

    with pytest.raises(ApiError) as exc_info:
        await client.delete_task("missing")

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_transport_error_raises_api_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ApiError) as exc_info:
        await make_client(handler).get_tasks("c1")

    assert exc_info.value.status_code is None


@pytest.mark.asyncio
async def test_malformed_task_raises_api_error():
    client = make_client(lambda request: httpx.Response(200, json={"id": "t-1"}))

    with pytest.raises(ApiError):
        await client.get_task("t-1")


@pytest.mark.asyncio
async def test_get_tasks_skips_unreadable_records():
    """A task with a column outside the board does not fail the whole list"""
    stray = {**TASK, "id": "t-2", "column": "backlog"}
    client = make_client(lambda request: httpx.Response(200, json=[TASK, stray]))

    tasks = await client.get_tasks("c1")

    assert [t.id for t in tasks] == ["t-1"]
