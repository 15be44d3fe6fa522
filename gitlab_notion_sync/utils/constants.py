"""Shared constants used across the application."""

# GitLab Constants
# ----------------

GITLAB_PAGE_SIZE = 100
"""Number of records requested per page from GitLab list endpoints (the API maximum)."""

# Notion Constants
# ----------------

NOTION_API_URL = "https://api.notion.com/v1"
"""Base URL of the Notion REST API."""

NOTION_VERSION = "2022-06-28"
"""Value of the Notion-Version header sent with every request."""

NOTION_PAGE_SIZE = 100
"""Number of pages requested per database query (the API maximum)."""

NOTION_COLOR_PALETTE: tuple[str, ...] = (
    "default",
    "gray",
    "brown",
    "orange",
    "yellow",
    "green",
    "blue",
    "purple",
    "pink",
    "red",
)
"""Select option colors accepted by Notion, cycled by index when options are written."""

# Synchronization Constants
# -------------------------

OPERATION_BATCH_SIZE = 10
"""Number of page writes dispatched concurrently as one group."""

ISSUE_ID_PREFIX = "#"
"""Marker preceding the GitLab issue iid in the Notion identifier property."""

# Request Policy Constants
# ------------------------

DEFAULT_REQUEST_TIMEOUT = 30.0
"""Default per-request timeout in seconds."""

DEFAULT_MAX_ATTEMPTS = 3
"""Default number of attempts for a remote call, including the first one."""

RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})
"""HTTP status codes treated as transient."""
