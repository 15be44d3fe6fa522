"""Reconciles configuration between CLI arguments and environment variables."""

from typing import Any

from pydantic import ValidationError

from gitlab_notion_sync.configuration.env import Settings
from gitlab_notion_sync.configuration.exceptions import (
    InvalidConfigurationError,
    MissingConfigurationError,
    RequiredConfigurationElementError,
)
from gitlab_notion_sync.configuration.models import SyncConfig

REQUIRED_CONFIGURATION_ELEMENTS: list[dict[str, str]] = [
    {"field": "gitlab_domain", "name": "GitLab domain", "cli_name": "--gitlab-domain", "env_name": "GITLAB_DOMAIN"},
    {"field": "gitlab_project_id", "name": "GitLab project ID", "cli_name": "--gitlab-project-id", "env_name": "GITLAB_PROJECT_ID"},
    {"field": "gitlab_token", "name": "GitLab token", "cli_name": "--gitlab-token", "env_name": "GITLAB_TOKEN"},
    {"field": "notion_key", "name": "Notion integration token", "cli_name": "--notion-key", "env_name": "NOTION_KEY"},
    {"field": "notion_database_id", "name": "Notion database ID", "cli_name": "--notion-database-id", "env_name": "NOTION_DATABASE_ID"},
]


def _pick(cli_value: Any, env_value: Any) -> Any:
    """Prefer the command line value over the environment value."""
    return cli_value if cli_value is not None else env_value


async def reconcile_sync_configuration(
    cli_gitlab_domain: str | None = None,
    cli_gitlab_project_id: str | None = None,
    cli_gitlab_token: str | None = None,
    cli_notion_key: str | None = None,
    cli_notion_database_id: str | None = None,
    cli_sync_taxonomy: bool | None = None,
    cli_operation_batch_size: int | None = None,
    cli_request_timeout: float | None = None,
    cli_max_attempts: int | None = None,
    cli_debug: bool | None = None,
    settings: Settings | None = None,
) -> SyncConfig:
    """Reconciles the sync configuration from CLI arguments and environment settings.

    Args:
        cli_gitlab_domain (str | None): The GitLab host from the command line.
        cli_gitlab_project_id (str | None): The GitLab project ID from the command line.
        cli_gitlab_token (str | None): The GitLab token from the command line.
        cli_notion_key (str | None): The Notion integration token from the command line.
        cli_notion_database_id (str | None): The Notion database ID from the command line.
        cli_sync_taxonomy (bool | None): Whether to replace label and milestone options.
        cli_operation_batch_size (int | None): Number of concurrent page writes per group.
        cli_request_timeout (float | None): Per-request timeout in seconds.
        cli_max_attempts (int | None): Attempts per remote call.
        cli_debug (bool | None): Whether debug logging is enabled.
        settings (Settings | None): Environment settings; read from the environment when omitted.

    Raises:
        RequiredConfigurationElementError: If exactly one required element is missing.
        MissingConfigurationError: If several required elements are missing.
        InvalidConfigurationError: If an environment value cannot be parsed or a numeric setting is not positive.

    Returns:
        SyncConfig: The reconciled configuration.
    """
    if settings is None:
        try:
            settings = Settings()
        except ValidationError as exc:
            invalid = ", ".join(f"{'.'.join(str(part) for part in error['loc'])} ({error['msg']})" for error in exc.errors())
            raise InvalidConfigurationError(f"Invalid environment configuration: {invalid}") from exc

    values: dict[str, Any] = {
        "gitlab_domain": _pick(cli_gitlab_domain, settings.GITLAB_DOMAIN),
        "gitlab_project_id": _pick(cli_gitlab_project_id, settings.GITLAB_PROJECT_ID),
        "gitlab_token": _pick(cli_gitlab_token, settings.GITLAB_TOKEN),
        "notion_key": _pick(cli_notion_key, settings.NOTION_KEY),
        "notion_database_id": _pick(cli_notion_database_id, settings.NOTION_DATABASE_ID),
        "sync_taxonomy": _pick(cli_sync_taxonomy, settings.SYNC_TAXONOMY),
        "operation_batch_size": _pick(cli_operation_batch_size, settings.OPERATION_BATCH_SIZE),
        "request_timeout": _pick(cli_request_timeout, settings.REQUEST_TIMEOUT),
        "max_attempts": _pick(cli_max_attempts, settings.MAX_ATTEMPTS),
        "debug": _pick(cli_debug, settings.DEBUG),
    }

    missing_settings: list[RequiredConfigurationElementError] = [
        RequiredConfigurationElementError(element["name"], element["cli_name"], element["env_name"])
        for element in REQUIRED_CONFIGURATION_ELEMENTS
        if not values[element["field"]] or not str(values[element["field"]]).strip()
    ]
    if len(missing_settings) == 1:
        raise missing_settings[0]
    if missing_settings:
        raise MissingConfigurationError(missing_settings)

    for field, label in (("operation_batch_size", "Operation batch size"), ("request_timeout", "Request timeout"), ("max_attempts", "Max attempts")):
        if values[field] <= 0:
            raise InvalidConfigurationError(f"{label} must be positive, got {values[field]}")

    return SyncConfig(**values)
