"""Data models shared by the synchronization steps."""

from dataclasses import dataclass, field
from enum import Enum

from gitlab_notion_sync.schemas.gitlab import GitLabIssue


class SyncDecision(str, Enum):
    """What the sync does with a GitLab issue."""

    CREATE = "create"
    UPDATE = "update"


@dataclass
class IdentityMap:
    """Maps GitLab issue iids to the Notion pages that mirror them.

    Built once per run by scanning the database and read-only afterwards. Every
    page id seen for an iid is kept in scan order; lookups return the last one.
    """

    page_ids_by_iid: dict[int, list[str]] = field(default_factory=dict)

    def add(self, iid: int, page_id: str) -> None:
        """Record that page_id carries issue iid."""
        self.page_ids_by_iid.setdefault(iid, []).append(page_id)

    def get(self, iid: int) -> str | None:
        """Return the page mirroring iid, or None if the issue was never synced."""
        page_ids = self.page_ids_by_iid.get(iid)
        if not page_ids:
            return None
        return page_ids[-1]

    def duplicates(self) -> dict[int, list[str]]:
        """Return every iid carried by more than one page, with all of its page ids."""
        return {iid: list(page_ids) for iid, page_ids in self.page_ids_by_iid.items() if len(page_ids) > 1}

    def __contains__(self, iid: object) -> bool:
        return iid in self.page_ids_by_iid

    def __len__(self) -> int:
        return len(self.page_ids_by_iid)


@dataclass(frozen=True)
class PageUpdate:
    """A GitLab issue paired with the Notion page it updates."""

    page_id: str
    issue: GitLabIssue


@dataclass
class IssuePartition:
    """GitLab issues split into pages to create and pages to update."""

    to_create: list[GitLabIssue] = field(default_factory=list)
    to_update: list[PageUpdate] = field(default_factory=list)
