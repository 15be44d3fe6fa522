"""Models for configuration between CLI arguments and environment variables."""

from dataclasses import dataclass

from gitlab_notion_sync.utils.constants import DEFAULT_MAX_ATTEMPTS, DEFAULT_REQUEST_TIMEOUT, OPERATION_BATCH_SIZE


@dataclass(frozen=True)
class SyncConfig:
    """Configuration class for the sync command."""

    gitlab_domain: str
    gitlab_project_id: str
    gitlab_token: str
    notion_key: str
    notion_database_id: str
    sync_taxonomy: bool = True
    operation_batch_size: int = OPERATION_BATCH_SIZE
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    debug: bool = False
