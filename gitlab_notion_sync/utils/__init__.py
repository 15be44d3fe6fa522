"""Utility modules for shared functionality."""

from .constants import (
    GITLAB_PAGE_SIZE,
    ISSUE_ID_PREFIX,
    NOTION_COLOR_PALETTE,
    OPERATION_BATCH_SIZE,
)
from .helpers import chunked
from .retry import retry_on_transient_error

__all__ = [
    "GITLAB_PAGE_SIZE",
    "ISSUE_ID_PREFIX",
    "NOTION_COLOR_PALETTE",
    "OPERATION_BATCH_SIZE",
    "chunked",
    "retry_on_transient_error",
]
