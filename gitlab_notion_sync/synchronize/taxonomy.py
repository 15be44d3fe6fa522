"""Contains synchronization logic for the label and milestone vocabularies in Notion."""

from typing import Sequence

import structlog

from gitlab_notion_sync.notion.abc import TargetStoreBase
from gitlab_notion_sync.schemas.gitlab import GitLabLabel, GitLabMilestone
from gitlab_notion_sync.schemas.notion import DEFAULT_DATABASE_SCHEMA, DatabaseSchema
from gitlab_notion_sync.utils.constants import NOTION_COLOR_PALETTE

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def assign_option_colors(names: Sequence[str], palette: Sequence[str] = NOTION_COLOR_PALETTE) -> list[dict[str, str]]:
    """Build select options for names, cycling through the palette by position.

    Repeated names are dropped after their first occurrence.
    """
    if not palette:
        raise ValueError("Color palette must not be empty")
    unique_names = list(dict.fromkeys(names))
    return [{"name": name, "color": palette[index % len(palette)]} for index, name in enumerate(unique_names)]


async def replace_category_vocabulary(
    notion_adapter: TargetStoreBase,
    property_name: str,
    names: Sequence[str],
    palette: Sequence[str] = NOTION_COLOR_PALETTE,
) -> list[dict[str, str]]:
    """Replace the options of a multi-select property with names.

    The option set is emptied first and then written again, because Notion refuses
    to change the color of an existing option. Options absent from names are gone
    afterwards, including from pages that used them.
    """
    options = assign_option_colors(names, palette)
    await notion_adapter.replace_select_options(property_name, [])
    await notion_adapter.replace_select_options(property_name, options)
    logger.info("Replaced Notion property options", property_name=property_name, option_count=len(options))
    return options


async def sync_taxonomy(
    notion_adapter: TargetStoreBase,
    labels: Sequence[GitLabLabel],
    milestones: Sequence[GitLabMilestone],
    schema: DatabaseSchema = DEFAULT_DATABASE_SCHEMA,
    palette: Sequence[str] = NOTION_COLOR_PALETTE,
) -> None:
    """Mirror the project's labels and milestones into the database's tag and milestone options."""
    await replace_category_vocabulary(notion_adapter, schema.tags_property, [label.name for label in labels], palette)
    await replace_category_vocabulary(notion_adapter, schema.milestones_property, [milestone.title for milestone in milestones], palette)
