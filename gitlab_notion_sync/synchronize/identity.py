"""Builds the map from GitLab issues to the Notion pages that already mirror them."""

import re
import time

import structlog

from gitlab_notion_sync.notion.abc import TargetStoreBase
from gitlab_notion_sync.schemas.notion import DEFAULT_DATABASE_SCHEMA, DatabaseSchema, NotionPage
from gitlab_notion_sync.synchronize.exceptions import MalformedIssueIdentifierError
from gitlab_notion_sync.synchronize.models import IdentityMap
from gitlab_notion_sync.utils.constants import ISSUE_ID_PREFIX

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

ISSUE_ID_PATTERN = re.compile(rf"{re.escape(ISSUE_ID_PREFIX)}(\d+)", re.ASCII)


def extract_issue_iid(page: NotionPage, schema: DatabaseSchema = DEFAULT_DATABASE_SCHEMA) -> int:
    """Read the GitLab issue iid from a page's identifier property.

    The property holds display text of the form ``#<iid>``, as a rich text or title
    property.

    Raises:
        MalformedIssueIdentifierError: If the property is missing, of an unsupported
            type, or does not hold ``#`` followed by an integer.
    """
    prop = page.properties.get(schema.id_property)
    if not isinstance(prop, dict):
        raise MalformedIssueIdentifierError(page.id, f"property '{schema.id_property}' is missing")

    prop_type = prop.get("type", "rich_text")
    items = prop.get(prop_type)
    if not isinstance(items, list):
        raise MalformedIssueIdentifierError(page.id, f"property '{schema.id_property}' has unsupported type '{prop_type}'")

    text = "".join(item.get("plain_text") or (item.get("text") or {}).get("content") or "" for item in items if isinstance(item, dict)).strip()
    match = ISSUE_ID_PATTERN.fullmatch(text)
    if match is None:
        raise MalformedIssueIdentifierError(page.id, f"expected '{ISSUE_ID_PREFIX}<number>'", raw_value=text)
    return int(match.group(1))


async def build_identity_map(notion_adapter: TargetStoreBase, schema: DatabaseSchema = DEFAULT_DATABASE_SCHEMA) -> IdentityMap:
    """Scan the whole database and map each GitLab issue iid to its Notion page.

    Pages without a readable identifier are skipped with a warning. When several pages
    carry the same iid, the last one scanned wins and a warning lists all of them.
    """
    start_time = time.time()
    pages = await notion_adapter.list_pages()
    identity_map = IdentityMap()
    skipped = 0
    for page in pages:
        try:
            iid = extract_issue_iid(page, schema)
        except MalformedIssueIdentifierError as exc:
            skipped += 1
            logger.warning("Skipping Notion page without a usable issue identifier", page_id=page.id, reason=exc.reason, raw_value=exc.raw_value)
            continue
        identity_map.add(iid, page.id)

    for iid, page_ids in identity_map.duplicates().items():
        logger.warning("Multiple Notion pages mirror the same issue, using the last one", issue_iid=iid, page_ids=page_ids, kept_page_id=page_ids[-1])

    logger.info(
        "Built identity map from Notion database",
        page_count=len(pages),
        mapped_issue_count=len(identity_map),
        skipped_page_count=skipped,
        duplicate_issue_count=len(identity_map.duplicates()),
        duration=round(time.time() - start_time, 2),
    )
    return identity_map
