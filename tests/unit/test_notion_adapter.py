"""Unit tests for the NotionAdapter class and related Notion operations."""

import json
from typing import Any, Callable

import httpx
import pytest

from gitlab_notion_sync.notion.adapter import NotionAdapter
from gitlab_notion_sync.notion.client import get_notion_client
from gitlab_notion_sync.notion.exceptions import NotionRequestError
from gitlab_notion_sync.utils.constants import NOTION_VERSION

DATABASE_ID = "d9824bdc-8445-4327-be8b-5b47500af6ce"


def make_adapter(handler: Callable[[httpx.Request], httpx.Response], **kwargs: Any) -> NotionAdapter:
    """Build an adapter whose HTTP traffic goes to handler."""
    client = httpx.AsyncClient(base_url="https://api.notion.com/v1", transport=httpx.MockTransport(handler))
    return NotionAdapter(client, DATABASE_ID, **kwargs)


def page_json(page_id: str) -> dict[str, Any]:
    return {"object": "page", "id": page_id, "archived": False, "properties": {}}


@pytest.mark.asyncio
async def test_list_pages_follows_cursor_until_exhausted() -> None:
    """Test that every query page is fetched and the cursor is passed back each time."""
    responses = {
        None: {"object": "list", "results": [page_json("p1"), page_json("p2")], "next_cursor": "c1", "has_more": True},
        "c1": {"object": "list", "results": [page_json("p3")], "next_cursor": "c2", "has_more": True},
        "c2": {"object": "list", "results": [page_json("p4")], "next_cursor": None, "has_more": False},
    }
    cursors: list[str | None] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "POST"
        assert request.url.path == f"/v1/databases/{DATABASE_ID}/query"
        body = json.loads(request.content)
        assert body["page_size"] == 100
        cursors.append(body.get("start_cursor"))
        return httpx.Response(200, json=responses[body.get("start_cursor")])

    adapter = make_adapter(handler)

    pages = await adapter.list_pages()

    assert cursors == [None, "c1", "c2"]
    assert [page.id for page in pages] == ["p1", "p2", "p3", "p4"]


@pytest.mark.asyncio
async def test_list_pages_stops_when_cursor_absent() -> None:
    """Test that a response without next_cursor ends the scan."""
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"object": "list", "results": [page_json("p1")]})

    adapter = make_adapter(handler)

    pages = await adapter.list_pages()

    assert len(calls) == 1
    assert [page.id for page in pages] == ["p1"]


@pytest.mark.asyncio
async def test_create_page_targets_database() -> None:
    """Test that create_page posts the properties under the database parent."""
    seen: dict[str, Any] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=page_json("new-page"))

    adapter = make_adapter(handler)
    properties = {"open": {"checkbox": True}}

    page = await adapter.create_page(properties)

    assert page.id == "new-page"
    assert seen["method"] == "POST"
    assert seen["path"] == "/v1/pages"
    assert seen["body"] == {"parent": {"database_id": DATABASE_ID}, "properties": properties}


@pytest.mark.asyncio
async def test_update_page_patches_page() -> None:
    """Test that update_page patches the given page with the properties."""
    seen: dict[str, Any] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=page_json("page_A"))

    adapter = make_adapter(handler)

    await adapter.update_page("page_A", {"open": {"checkbox": False}})

    assert seen == {"method": "PATCH", "path": "/v1/pages/page_A", "body": {"properties": {"open": {"checkbox": False}}}}


@pytest.mark.asyncio
async def test_replace_select_options_patches_database_schema() -> None:
    """Test that option replacement sends the full option list for one multi-select property."""
    seen: dict[str, Any] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"object": "database", "id": DATABASE_ID})

    adapter = make_adapter(handler)
    options = [{"name": "bug", "color": "default"}]

    await adapter.replace_select_options("tags", options)

    assert seen["method"] == "PATCH"
    assert seen["path"] == f"/v1/databases/{DATABASE_ID}"
    assert seen["body"] == {"properties": {"tags": {"multi_select": {"options": options}}}}


@pytest.mark.asyncio
async def test_validation_error_raises_notion_request_error() -> None:
    """Test that a 400 response is raised as NotionRequestError with Notion's code and message."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"object": "error", "status": 400, "code": "validation_error", "message": "tags is not a property"})

    adapter = make_adapter(handler)

    with pytest.raises(NotionRequestError) as exc_info:
        await adapter.update_page("page_A", {"tags": {"multi_select": []}})

    assert exc_info.value.code == "validation_error"
    assert exc_info.value.message == "tags is not a property"
    assert exc_info.value.function == "update_page"


@pytest.mark.asyncio
async def test_validation_error_with_non_object_body() -> None:
    """Test that a 400 whose JSON body is not an object still raises NotionRequestError with default details."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json=["bad"])

    adapter = make_adapter(handler)

    with pytest.raises(NotionRequestError) as exc_info:
        await adapter.update_page("page_A", {})

    assert exc_info.value.code == "validation_error"
    assert exc_info.value.message == "Bad Request"


@pytest.mark.asyncio
async def test_rate_limited_update_is_retried() -> None:
    """Test that a 429 response is retried after the advertised delay."""
    statuses = [429, 200]
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        status = statuses[len(calls) - 1]
        if status == 429:
            return httpx.Response(429, headers={"Retry-After": "0"}, json={"code": "rate_limited"})
        return httpx.Response(200, json=page_json("page_A"))

    adapter = make_adapter(handler)

    page = await adapter.update_page("page_A", {})

    assert page.id == "page_A"
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_create_page_not_retried_after_server_error() -> None:
    """Test that a create which may have been applied is not repeated."""
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(502, json={"code": "bad_gateway"})

    adapter = make_adapter(handler)

    with pytest.raises(httpx.HTTPStatusError):
        await adapter.create_page({})
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_create_page_retried_when_rate_limited() -> None:
    """Test that a rate limited create is repeated, since Notion did not apply it."""
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if len(calls) == 1:
            return httpx.Response(429, headers={"Retry-After": "0"}, json={"code": "rate_limited"})
        return httpx.Response(200, json=page_json("new-page"))

    adapter = make_adapter(handler)

    page = await adapter.create_page({})

    assert page.id == "new-page"
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_get_notion_client_headers() -> None:
    """Test that the client sends the bearer token and pinned API version."""
    client = get_notion_client("secret_abc", timeout=12.0)
    try:
        assert client.headers["Authorization"] == "Bearer secret_abc"
        assert client.headers["Notion-Version"] == NOTION_VERSION
        assert str(client.base_url) == "https://api.notion.com/v1/"
        assert client.timeout.connect == 12.0
    finally:
        await client.aclose()


def test_get_notion_client_requires_key() -> None:
    """Test that a missing integration token is refused."""
    with pytest.raises(RuntimeError):
        get_notion_client("")
