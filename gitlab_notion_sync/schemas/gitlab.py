"""Pydantic schema for the subset of GitLab REST API objects the sync consumes."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class IssueState(str, Enum):
    """Lifecycle state of a GitLab issue as reported by the API."""

    OPENED = "opened"
    CLOSED = "closed"


class GitLabUser(BaseModel):
    """Pydantic model for a GitLab user reference (author, assignee)."""

    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    username: str | None = None
    name: str


class GitLabMilestoneReference(BaseModel):
    """Pydantic model for the milestone embedded in an issue."""

    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    iid: int | None = None
    title: str


class GitLabIssue(BaseModel):
    """Pydantic model for a GitLab issue.

    Timestamps are kept as the ISO-8601 strings GitLab returns, so they can be passed
    through to Notion unchanged.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    iid: int
    title: str
    state: IssueState
    created_at: str
    updated_at: str
    closed_at: str | None = None
    labels: list[str] = []
    milestone: GitLabMilestoneReference | None = None
    assignees: list[GitLabUser] = []
    web_url: str

    @property
    def is_open(self) -> bool:
        """Whether the issue is currently open."""
        return self.state == IssueState.OPENED


class GitLabLabel(BaseModel):
    """Pydantic model for a GitLab project label."""

    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    name: str
    color: str | None = None
    description: str | None = None


class GitLabMilestone(BaseModel):
    """Pydantic model for a GitLab project milestone."""

    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    iid: int | None = None
    title: str
    description: str | None = None
    state: str | None = None
    due_date: str | None = None
    web_url: str | None = None
