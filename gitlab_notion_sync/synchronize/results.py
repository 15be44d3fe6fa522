"""Contains results of application execution."""

from gitlab_notion_sync.synchronize.models import SyncDecision


class OperationFailure:
    """A single page write that Notion or the network rejected."""

    def __init__(self, decision: SyncDecision, issue_iid: int, error: Exception, page_id: str | None = None) -> None:
        """Initialize the failure with the attempted operation, the issue and the error."""
        self.decision = decision
        self.issue_iid = issue_iid
        self.page_id = page_id
        self.error = error

    def __repr__(self) -> str:
        return f"OperationFailure(decision={self.decision.value!r}, issue_iid={self.issue_iid}, page_id={self.page_id!r}, error={self.error!r})"


class BatchResult:
    """Contains results of writing one partition of issues to Notion."""

    def __init__(self, decision: SyncDecision, succeeded_iids: list[int] | None = None, failures: list[OperationFailure] | None = None) -> None:
        """Initialize the result with the iids written and the failures encountered."""
        self.decision = decision
        self.succeeded_iids = succeeded_iids or []
        self.failures = failures or []

    @property
    def attempted(self) -> int:
        return len(self.succeeded_iids) + len(self.failures)


class SyncResult:
    """Contains results of the sync workflow."""

    def __init__(
        self,
        issues_fetched: int,
        pages_indexed: int,
        created: BatchResult,
        updated: BatchResult,
        labels_synced: int | None = None,
        milestones_synced: int | None = None,
    ) -> None:
        """Initialize the result with per-phase counts and the batch results."""
        self.issues_fetched = issues_fetched
        self.pages_indexed = pages_indexed
        self.created = created
        self.updated = updated
        self.labels_synced = labels_synced
        self.milestones_synced = milestones_synced

    @property
    def failures(self) -> list[OperationFailure]:
        return self.created.failures + self.updated.failures

    @property
    def failed_issue_iids(self) -> list[int]:
        """Iids of every issue whose page could not be written, in processing order."""
        return [failure.issue_iid for failure in self.failures]

    @property
    def success(self) -> bool:
        return not self.failures
