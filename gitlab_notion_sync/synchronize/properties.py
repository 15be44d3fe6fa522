"""Translates GitLab issues into Notion page properties."""

from typing import Any

from gitlab_notion_sync.schemas.gitlab import GitLabIssue
from gitlab_notion_sync.schemas.notion import DEFAULT_DATABASE_SCHEMA, DatabaseSchema
from gitlab_notion_sync.utils.constants import ISSUE_ID_PREFIX


def _text(content: str, url: str | None = None) -> dict[str, Any]:
    return {"type": "text", "text": {"content": content, "link": {"url": url} if url else None}}


def format_issue_identifier(iid: int) -> str:
    """Display text stored in the identifier property, e.g. '#42'."""
    return f"{ISSUE_ID_PREFIX}{iid}"


def get_properties_from_issue(issue: GitLabIssue, schema: DatabaseSchema = DEFAULT_DATABASE_SCHEMA) -> dict[str, Any]:
    """Return the GitLab issue as properties conforming to the database schema.

    Pure and deterministic: the same issue always yields an equal mapping. The
    timespan end is only present for closed issues.
    """
    timespan: dict[str, str] = {"start": issue.created_at}
    if not issue.is_open and issue.closed_at is not None:
        timespan["end"] = issue.closed_at

    return {
        # The identifier links back to the issue on GitLab
        schema.id_property: {"rich_text": [_text(format_issue_identifier(issue.iid), issue.web_url)]},
        schema.open_property: {"checkbox": issue.is_open},
        schema.title_property: {"title": [_text(issue.title)]},
        schema.assignees_property: {"rich_text": [_text(", ".join(assignee.name for assignee in issue.assignees))]},
        schema.timespan_property: {"date": timespan},
        schema.last_updated_property: {"date": {"start": issue.updated_at}},
        schema.tags_property: {"multi_select": [{"name": label} for label in issue.labels]},
        schema.milestones_property: {"multi_select": [] if issue.milestone is None else [{"name": issue.milestone.title}]},
    }
