"""Notion client adapter built on httpx."""

from functools import wraps
from types import TracebackType
from typing import Any, Awaitable, Callable, Self, TypeVar

import httpx
import structlog

from gitlab_notion_sync.schemas.notion import NotionPage, NotionQueryResult
from gitlab_notion_sync.utils.constants import DEFAULT_MAX_ATTEMPTS, DEFAULT_REQUEST_TIMEOUT, NOTION_PAGE_SIZE
from gitlab_notion_sync.utils.retry import retry_on_transient_error

from .abc import TargetStoreBase
from .client import get_notion_client
from .exceptions import NotionRequestError

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def handle_notion_400(func: F) -> F:
    """Decorator to handle Notion 400 Bad Request errors, logging and raising with details."""

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == 400:
                try:
                    error_data = exc.response.json()
                except ValueError:
                    error_data = {}
                if not isinstance(error_data, dict):
                    error_data = {}
                code = error_data.get("code", "validation_error")
                message = error_data.get("message", "Bad Request")
                logger.error(
                    "Notion 400 Bad Request",
                    function=func.__name__,
                    code=code,
                    message=message,
                    url=str(exc.request.url),
                    status_code=400,
                )
                raise NotionRequestError(func.__name__, code, message) from exc
            raise

    return wrapper  # type: ignore


class NotionAdapter(TargetStoreBase):
    """Notion client adapter for a single database."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        database_id: str,
        page_size: int = NOTION_PAGE_SIZE,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        """Initialize the Notion adapter with an already-initialized client."""
        self.client = client
        self.database_id = database_id
        self.page_size = page_size
        self.max_attempts = max_attempts

    @classmethod
    def create(
        cls,
        notion_key: str,
        database_id: str,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> Self:
        """Create a new Notion adapter bound to one database."""
        logger.info("Creating client for Notion database", database_id=database_id)
        client = get_notion_client(notion_key, timeout=timeout)
        return cls(client, database_id, max_attempts=max_attempts)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    @staticmethod
    def _json_object(response: httpx.Response) -> dict[str, Any]:
        """Raise for error statuses and return the JSON object body."""
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object from Notion {response.request.url}, got {type(data).__name__}")
        return data

    # Database operations
    @handle_notion_400
    @retry_on_transient_error()
    async def query_database(self, start_cursor: str | None = None, **kwargs: Any) -> NotionQueryResult:
        """Fetch one page of records from the database."""
        body: dict[str, Any] = {"page_size": self.page_size, **kwargs}
        if start_cursor is not None:
            body["start_cursor"] = start_cursor
        response = await self.client.post(f"/databases/{self.database_id}/query", json=body)
        return NotionQueryResult.model_validate(self._json_object(response))

    async def list_pages(self, **kwargs: Any) -> list[NotionPage]:
        """Fetch every record of the database, following the cursor until it runs out."""
        pages: list[NotionPage] = []
        cursor: str | None = None
        while True:
            result = await self.query_database(start_cursor=cursor, **kwargs)
            pages.extend(result.results)
            logger.debug("Fetched page of Notion database", database_id=self.database_id, record_count=len(result.results))
            if not result.next_cursor:
                break
            cursor = result.next_cursor
        return pages

    @handle_notion_400
    @retry_on_transient_error()
    async def replace_select_options(self, property_name: str, options: list[dict[str, str]]) -> dict[str, Any]:
        """Replace the option set of a multi-select property of the database."""
        response = await self.client.patch(
            f"/databases/{self.database_id}",
            json={"properties": {property_name: {"multi_select": {"options": options}}}},
        )
        return self._json_object(response)

    # Page operations
    @handle_notion_400
    @retry_on_transient_error(idempotent=False)
    async def create_page(self, properties: dict[str, Any], **kwargs: Any) -> NotionPage:
        """Create a page in the database."""
        response = await self.client.post(
            "/pages",
            json={"parent": {"database_id": self.database_id}, "properties": properties, **kwargs},
        )
        return NotionPage.model_validate(self._json_object(response))

    @handle_notion_400
    @retry_on_transient_error()
    async def update_page(self, page_id: str, properties: dict[str, Any], **kwargs: Any) -> NotionPage:
        """Update the properties of an existing page."""
        response = await self.client.patch(f"/pages/{page_id}", json={"properties": properties, **kwargs})
        return NotionPage.model_validate(self._json_object(response))
