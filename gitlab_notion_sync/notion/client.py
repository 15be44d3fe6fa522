"""Sets up the authenticated httpx client for the Notion REST API."""

import httpx

from gitlab_notion_sync.utils.constants import DEFAULT_REQUEST_TIMEOUT, NOTION_API_URL, NOTION_VERSION


def get_notion_client(
    notion_key: str,
    timeout: float = DEFAULT_REQUEST_TIMEOUT,
    notion_api_url: str = NOTION_API_URL,
) -> httpx.AsyncClient:
    """Returns an httpx client authenticated with a Notion integration token."""
    if not notion_key:
        raise RuntimeError("Notion authentication requires a Notion integration token in config.")
    return httpx.AsyncClient(
        base_url=notion_api_url,
        headers={
            "Authorization": f"Bearer {notion_key}",
            "Notion-Version": NOTION_VERSION,
            "Content-Type": "application/json",
        },
        timeout=httpx.Timeout(timeout),
    )
