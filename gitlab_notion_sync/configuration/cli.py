"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
import logging
import sys

import structlog
import typer
from dotenv import load_dotenv
from typer import Option
from typing_extensions import Annotated

from gitlab_notion_sync.configuration.exceptions import ConfigurationError
from gitlab_notion_sync.configuration.reconcile import reconcile_sync_configuration
from gitlab_notion_sync.synchronize.driver import run_sync_workflow
from gitlab_notion_sync.synchronize.results import SyncResult

load_dotenv()

typer_app = typer.Typer(pretty_exceptions_show_locals=False, add_completion=False)

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def configure_logging(debug: bool = False) -> None:
    """Route structlog through the standard library logger at INFO, or DEBUG when asked."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level, force=True)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def echo_sync_summary(result: SyncResult) -> None:
    """Print the per-phase counts of a finished sync."""
    typer.echo("")
    typer.echo("=" * 70)
    typer.echo("SYNC SUMMARY")
    typer.echo("=" * 70)
    typer.echo(f"Existing pages indexed: {result.pages_indexed}")
    typer.echo(f"Issues fetched from GitLab: {result.issues_fetched}")
    if result.labels_synced is not None:
        typer.echo(f"Labels synced: {result.labels_synced}")
    if result.milestones_synced is not None:
        typer.echo(f"Milestones synced: {result.milestones_synced}")
    typer.echo(f"Pages created: {len(result.created.succeeded_iids)}")
    typer.echo(f"Pages updated: {len(result.updated.succeeded_iids)}")
    typer.echo("=" * 70)


@typer_app.command(name="sync")
def sync_cli(
    gitlab_domain: Annotated[str | None, Option(envvar="GITLAB_DOMAIN", help="GitLab host, e.g. gitlab.com.")] = None,
    gitlab_project_id: Annotated[str | None, Option(envvar="GITLAB_PROJECT_ID", help="GitLab project ID or path.")] = None,
    gitlab_token: Annotated[str | None, Option(envvar="GITLAB_TOKEN", help="GitLab private token.")] = None,
    notion_key: Annotated[str | None, Option(envvar="NOTION_KEY", help="Notion integration token.")] = None,
    notion_database_id: Annotated[str | None, Option(envvar="NOTION_DATABASE_ID", help="Notion database ID.")] = None,
    debug: Annotated[bool, Option("--debug", envvar="DEBUG", help="Enable debug logging.")] = False,
) -> None:
    """Mirror every issue of a GitLab project into a Notion database."""
    try:
        config = asyncio.run(
            reconcile_sync_configuration(
                cli_gitlab_domain=gitlab_domain,
                cli_gitlab_project_id=gitlab_project_id,
                cli_gitlab_token=gitlab_token,
                cli_notion_key=notion_key,
                cli_notion_database_id=notion_database_id,
                cli_debug=debug or None,
            )
        )
    except ConfigurationError as exc:
        typer.echo(f"Configuration error: {exc}", err=True)
        raise typer.Exit(2) from exc

    configure_logging(config.debug)

    try:
        result = asyncio.run(run_sync_workflow(config))
    except Exception as exc:
        logger.exception("Sync failed", error=str(exc), error_type=type(exc).__name__)
        typer.echo(f"Sync failed: {exc}", err=True)
        raise typer.Exit(1) from exc

    echo_sync_summary(result)

    if result.failures:
        typer.echo(f"Failed to write {len(result.failures)} page(s) for issue(s): " + ", ".join(f"#{iid}" for iid in result.failed_issue_iids), err=True)
        for failure in result.failures:
            typer.echo(f"  - #{failure.issue_iid} ({failure.decision.value}): {failure.error}", err=True)
        raise typer.Exit(1)

    typer.echo("✅ Notion database is synced with GitLab.")


if __name__ == "__main__":
    typer_app()
