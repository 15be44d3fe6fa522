"""GitLab client adapter built on python-gitlab."""

import asyncio
from types import TracebackType
from typing import Any, Self, TypeVar

import gitlab
import structlog
from pydantic import BaseModel

from gitlab_notion_sync.schemas.gitlab import GitLabIssue, GitLabLabel, GitLabMilestone
from gitlab_notion_sync.utils.constants import DEFAULT_MAX_ATTEMPTS, DEFAULT_REQUEST_TIMEOUT, GITLAB_PAGE_SIZE
from gitlab_notion_sync.utils.retry import retry_on_transient_error

from .abc import IssueTrackerBase
from .client import get_gitlab_client

logger = structlog.get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class GitLabAdapter(IssueTrackerBase):
    """GitLab client adapter for a single project.

    python-gitlab is synchronous, so every request runs in a worker thread.
    """

    def __init__(
        self,
        client: gitlab.Gitlab,
        project_id: str,
        page_size: int = GITLAB_PAGE_SIZE,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        """Initialize the GitLab adapter with an already-initialized client."""
        self.client = client
        self.project_id = str(project_id)
        self.page_size = page_size
        self.max_attempts = max_attempts
        # Lazy objects issue no request; python-gitlab encodes path-style IDs itself
        self.project = client.projects.get(self.project_id, lazy=True)

    @classmethod
    def create(
        cls,
        gitlab_domain: str,
        project_id: str,
        gitlab_token: str,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> Self:
        """Create a new GitLab adapter.

        Args:
            gitlab_domain: Host of the GitLab instance, e.g. 'gitlab.com'
            project_id: Numeric project ID or full project path
            gitlab_token: Private access token
            timeout: Per-request timeout in seconds
            max_attempts: Attempts per request for transient failures

        Returns:
            Configured GitLabAdapter instance
        """
        logger.info("Creating client for GitLab instance and project", gitlab_domain=gitlab_domain, project_id=project_id)
        client = get_gitlab_client(gitlab_domain, gitlab_token, timeout=timeout)
        return cls(client, project_id, max_attempts=max_attempts)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        self.client.session.close()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    @retry_on_transient_error()
    async def _get_page(self, manager_name: str, page: int, **params: Any) -> list[dict[str, Any]]:
        """Fetch one page of a project list endpoint."""
        manager = getattr(self.project, manager_name)
        objects = await asyncio.to_thread(manager.list, page=page, per_page=self.page_size, get_all=False, **params)
        return [obj.attributes for obj in objects]

    async def _paginate(self, manager_name: str, model: type[ModelT], **params: Any) -> list[ModelT]:
        """Collect every record of a project list endpoint.

        A page shorter than the page size ends the listing. When the last page is
        exactly full, one extra request comes back empty, which ends it as well.
        """
        records: list[ModelT] = []
        page: int = 1
        while True:
            data = await self._get_page(manager_name, page, **params)
            records.extend(model.model_validate(item) for item in data)
            logger.debug("Fetched page from GitLab", resource=manager_name, page=page, record_count=len(data))
            if len(data) < self.page_size:
                break
            page += 1
        return records

    async def list_issues(self, **kwargs: Any) -> list[GitLabIssue]:
        """List all issues of the project in ascending creation order."""
        return await self._paginate("issues", GitLabIssue, scope="all", sort="asc", **kwargs)

    async def list_labels(self, **kwargs: Any) -> list[GitLabLabel]:
        """List all labels of the project."""
        return await self._paginate("labels", GitLabLabel, **kwargs)

    async def list_milestones(self, **kwargs: Any) -> list[GitLabMilestone]:
        """List all milestones of the project."""
        return await self._paginate("milestones", GitLabMilestone, **kwargs)
