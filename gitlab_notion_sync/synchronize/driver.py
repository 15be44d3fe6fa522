"""Orchestrates the synchronization of GitLab issues into a Notion database."""

import time

import structlog

from gitlab_notion_sync.configuration.models import SyncConfig
from gitlab_notion_sync.gitlab.abc import IssueTrackerBase
from gitlab_notion_sync.gitlab.adapter import GitLabAdapter
from gitlab_notion_sync.notion.abc import TargetStoreBase
from gitlab_notion_sync.notion.adapter import NotionAdapter
from gitlab_notion_sync.schemas.notion import DEFAULT_DATABASE_SCHEMA, DatabaseSchema
from gitlab_notion_sync.synchronize.batch import create_pages, update_pages
from gitlab_notion_sync.synchronize.identity import build_identity_map
from gitlab_notion_sync.synchronize.partition import partition_issues
from gitlab_notion_sync.synchronize.results import SyncResult
from gitlab_notion_sync.synchronize.taxonomy import sync_taxonomy
from gitlab_notion_sync.utils.constants import OPERATION_BATCH_SIZE

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


async def sync_gitlab_issues_to_notion(
    gitlab_adapter: IssueTrackerBase,
    notion_adapter: TargetStoreBase,
    schema: DatabaseSchema = DEFAULT_DATABASE_SCHEMA,
    group_size: int = OPERATION_BATCH_SIZE,
    taxonomy: bool = True,
) -> SyncResult:
    """Mirror every GitLab issue of the project into the Notion database.

    Steps run in order: index existing pages, fetch issues, replace the label and
    milestone options (when taxonomy is True), then create missing pages and update
    existing ones. Failures while reading from either service propagate; failures of
    individual page writes are collected in the result.
    """
    identity_map = await build_identity_map(notion_adapter, schema)

    start_time = time.time()
    logger.info("Fetching issues from GitLab")
    issues = await gitlab_adapter.list_issues()
    logger.info("Fetched issues from GitLab", issue_count=len(issues), duration=round(time.time() - start_time, 2))

    labels_synced: int | None = None
    milestones_synced: int | None = None
    if taxonomy:
        labels = await gitlab_adapter.list_labels()
        milestones = await gitlab_adapter.list_milestones()
        logger.info("Fetched labels and milestones from GitLab", label_count=len(labels), milestone_count=len(milestones))
        await sync_taxonomy(notion_adapter, labels, milestones, schema)
        labels_synced = len(labels)
        milestones_synced = len(milestones)

    partition = partition_issues(issues, identity_map)

    logger.info("Creating pages for new issues", issue_count=len(partition.to_create))
    created = await create_pages(notion_adapter, partition.to_create, schema, group_size)

    logger.info("Updating pages for existing issues", issue_count=len(partition.to_update))
    updated = await update_pages(notion_adapter, partition.to_update, schema, group_size)

    result = SyncResult(
        issues_fetched=len(issues),
        pages_indexed=len(identity_map),
        created=created,
        updated=updated,
        labels_synced=labels_synced,
        milestones_synced=milestones_synced,
    )
    logger.info(
        "Finished syncing Notion database with GitLab",
        created=len(created.succeeded_iids),
        updated=len(updated.succeeded_iids),
        failed=len(result.failures),
        failed_issue_iids=result.failed_issue_iids,
    )
    return result


async def run_sync_workflow(config: SyncConfig, schema: DatabaseSchema = DEFAULT_DATABASE_SCHEMA) -> SyncResult:
    """Run the sync workflow: build both clients from config and mirror the project."""
    start_time = time.time()
    async with (
        GitLabAdapter.create(
            gitlab_domain=config.gitlab_domain,
            project_id=config.gitlab_project_id,
            gitlab_token=config.gitlab_token,
            timeout=config.request_timeout,
            max_attempts=config.max_attempts,
        ) as gitlab_adapter,
        NotionAdapter.create(
            notion_key=config.notion_key,
            database_id=config.notion_database_id,
            timeout=config.request_timeout,
            max_attempts=config.max_attempts,
        ) as notion_adapter,
    ):
        result = await sync_gitlab_issues_to_notion(
            gitlab_adapter,
            notion_adapter,
            schema=schema,
            group_size=config.operation_batch_size,
            taxonomy=config.sync_taxonomy,
        )
    logger.info("Sync workflow finished", duration=round(time.time() - start_time, 2))
    return result
