"""Writes Notion pages in fixed-size groups of concurrent requests."""

import asyncio
from typing import Any, Awaitable, Callable, Sequence, TypeVar

import structlog

from gitlab_notion_sync.notion.abc import TargetStoreBase
from gitlab_notion_sync.schemas.gitlab import GitLabIssue
from gitlab_notion_sync.schemas.notion import DEFAULT_DATABASE_SCHEMA, DatabaseSchema
from gitlab_notion_sync.synchronize.models import PageUpdate, SyncDecision
from gitlab_notion_sync.synchronize.properties import get_properties_from_issue
from gitlab_notion_sync.synchronize.results import BatchResult, OperationFailure
from gitlab_notion_sync.utils.constants import OPERATION_BATCH_SIZE
from gitlab_notion_sync.utils.helpers import chunked

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

T = TypeVar("T")


async def run_in_groups(
    items: Sequence[T],
    operation: Callable[[T], Awaitable[Any]],
    group_size: int = OPERATION_BATCH_SIZE,
) -> list[tuple[T, Exception | None]]:
    """Run operation over items, one group at a time.

    The operations of a group run concurrently and the next group starts only once
    every one of them has finished. A failing operation does not stop its group or
    the groups after it; its exception is returned next to its item instead.
    """
    outcomes: list[tuple[T, Exception | None]] = []
    for group_number, group in enumerate(chunked(items, group_size), start=1):
        results = await asyncio.gather(*(operation(item) for item in group), return_exceptions=True)
        failure_count = 0
        for item, result in zip(group, results):
            if isinstance(result, Exception):
                failure_count += 1
                outcomes.append((item, result))
            elif isinstance(result, BaseException):
                raise result
            else:
                outcomes.append((item, None))
        logger.info("Completed batch", group_number=group_number, group_size=len(group), failure_count=failure_count)
    return outcomes


async def create_pages(
    notion_adapter: TargetStoreBase,
    issues: Sequence[GitLabIssue],
    schema: DatabaseSchema = DEFAULT_DATABASE_SCHEMA,
    group_size: int = OPERATION_BATCH_SIZE,
) -> BatchResult:
    """Create one Notion page per issue."""

    async def create_page(issue: GitLabIssue) -> Any:
        return await notion_adapter.create_page(get_properties_from_issue(issue, schema))

    result = BatchResult(SyncDecision.CREATE)
    for issue, error in await run_in_groups(issues, create_page, group_size):
        if error is None:
            result.succeeded_iids.append(issue.iid)
            continue
        logger.warning("Failed to create Notion page for issue", issue_iid=issue.iid, error=str(error), error_type=type(error).__name__)
        result.failures.append(OperationFailure(SyncDecision.CREATE, issue.iid, error))
    return result


async def update_pages(
    notion_adapter: TargetStoreBase,
    updates: Sequence[PageUpdate],
    schema: DatabaseSchema = DEFAULT_DATABASE_SCHEMA,
    group_size: int = OPERATION_BATCH_SIZE,
) -> BatchResult:
    """Update each existing Notion page from its issue."""

    async def update_page(update: PageUpdate) -> Any:
        return await notion_adapter.update_page(update.page_id, get_properties_from_issue(update.issue, schema))

    result = BatchResult(SyncDecision.UPDATE)
    for update, error in await run_in_groups(updates, update_page, group_size):
        if error is None:
            result.succeeded_iids.append(update.issue.iid)
            continue
        logger.warning(
            "Failed to update Notion page for issue",
            issue_iid=update.issue.iid,
            page_id=update.page_id,
            error=str(error),
            error_type=type(error).__name__,
        )
        result.failures.append(OperationFailure(SyncDecision.UPDATE, update.issue.iid, error, page_id=update.page_id))
    return result
