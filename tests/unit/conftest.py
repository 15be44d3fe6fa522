"""Fixtures for unit tests."""

from typing import Any, Callable, Generator

import pytest
import structlog

from gitlab_notion_sync.schemas.gitlab import GitLabIssue
from gitlab_notion_sync.schemas.notion import NotionPage


@pytest.fixture(autouse=True)
def configure_structlog_for_caplog() -> Generator[None, None, None]:
    """Configure structlog for use with caplog."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    yield
    structlog.reset_defaults()


def issue_payload(iid: int, **overrides: Any) -> dict[str, Any]:
    """Return a GitLab issue as the REST API serializes it, trimmed to realistic fields."""
    payload: dict[str, Any] = {
        "id": 1000 + iid,
        "iid": iid,
        "project_id": 51934668,
        "title": f"Issue {iid}",
        "description": None,
        "state": "opened",
        "created_at": "2023-01-05T10:00:00.000Z",
        "updated_at": "2023-01-06T12:30:00.000Z",
        "closed_at": None,
        "closed_by": None,
        "labels": [],
        "milestone": None,
        "assignees": [],
        "author": {"id": 1, "username": "alice", "name": "Alice"},
        "user_notes_count": 0,
        "web_url": f"https://gitlab.com/group/project/-/issues/{iid}",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_issue_payload() -> Callable[..., dict[str, Any]]:
    """Factory for raw GitLab issue payloads."""
    return issue_payload


@pytest.fixture
def make_issue() -> Callable[..., GitLabIssue]:
    """Factory for GitLab issues; keyword arguments override API fields."""

    def _make_issue(iid: int, **overrides: Any) -> GitLabIssue:
        return GitLabIssue.model_validate(issue_payload(iid, **overrides))

    return _make_issue


def page_payload(page_id: str, identifier: str | None, property_type: str = "rich_text") -> dict[str, Any]:
    """Return a Notion database page whose 'id' property holds the given display text."""
    properties: dict[str, Any] = {
        "title": {"id": "title", "type": "title", "title": [{"type": "text", "plain_text": "Some issue"}]},
    }
    if identifier is not None:
        properties["id"] = {
            "id": "%3AaBc",
            "type": property_type,
            property_type: [
                {
                    "type": "text",
                    "text": {"content": identifier, "link": None},
                    "plain_text": identifier,
                    "href": None,
                }
            ],
        }
    return {"object": "page", "id": page_id, "archived": False, "properties": properties}


@pytest.fixture
def make_page() -> Callable[..., NotionPage]:
    """Factory for Notion pages carrying an issue identifier."""

    def _make_page(page_id: str, identifier: str | None, property_type: str = "rich_text") -> NotionPage:
        return NotionPage.model_validate(page_payload(page_id, identifier, property_type))

    return _make_page
