"""Pydantic Settings model for application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from gitlab_notion_sync.utils import constants


class Settings(BaseSettings):
    """Environment variable settings for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Generic application-wide settings
    DEBUG: bool = False

    # GitLab settings
    GITLAB_DOMAIN: str | None = None
    GITLAB_PROJECT_ID: str | None = None
    GITLAB_TOKEN: str | None = None

    # Notion settings
    NOTION_KEY: str | None = None
    NOTION_DATABASE_ID: str | None = None

    # Sync behavior
    SYNC_TAXONOMY: bool = True
    OPERATION_BATCH_SIZE: int = constants.OPERATION_BATCH_SIZE
    REQUEST_TIMEOUT: float = constants.DEFAULT_REQUEST_TIMEOUT
    MAX_ATTEMPTS: int = constants.DEFAULT_MAX_ATTEMPTS
