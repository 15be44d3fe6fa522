"""Allows running the CLI with ``python -m gitlab_notion_sync``."""

from gitlab_notion_sync.configuration.cli import typer_app

if __name__ == "__main__":
    typer_app()
