"""Decides which GitLab issues need a new Notion page and which update an existing one."""

from typing import Sequence

import structlog

from gitlab_notion_sync.schemas.gitlab import GitLabIssue
from gitlab_notion_sync.synchronize.models import IdentityMap, IssuePartition, PageUpdate

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def partition_issues(issues: Sequence[GitLabIssue], identity_map: IdentityMap) -> IssuePartition:
    """Split issues into pages to create and pages to update, preserving input order."""
    partition = IssuePartition()
    for issue in issues:
        page_id = identity_map.get(issue.iid)
        if page_id is None:
            partition.to_create.append(issue)
        else:
            partition.to_update.append(PageUpdate(page_id=page_id, issue=issue))
    logger.debug("Partitioned issues", to_create=len(partition.to_create), to_update=len(partition.to_update))
    return partition
