"""Pydantic schema for Notion pages and the layout of the target database."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class NotionPage(BaseModel):
    """Pydantic model for a page returned by a Notion database query."""

    model_config = ConfigDict(extra="ignore")

    id: str
    archived: bool = False
    properties: dict[str, Any] = {}


class NotionQueryResult(BaseModel):
    """Pydantic model for one page of Notion database query results."""

    model_config = ConfigDict(extra="ignore")

    results: list[NotionPage]
    next_cursor: str | None = None
    has_more: bool = False


class DatabaseSchema(BaseModel):
    """Property names of the Notion database that mirrors GitLab issues.

    Bump `version` whenever the layout changes in a way that older databases
    cannot satisfy.
    """

    model_config = ConfigDict(frozen=True)

    version: int = 1
    id_property: str = "id"
    open_property: str = "open"
    title_property: str = "title"
    assignees_property: str = "assignees"
    timespan_property: str = "timespan"
    last_updated_property: str = "last_updated_at"
    tags_property: str = "tags"
    milestones_property: str = "milestones"


DEFAULT_DATABASE_SCHEMA = DatabaseSchema()
