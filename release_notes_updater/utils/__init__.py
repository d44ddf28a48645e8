"""Utility modules for shared functionality."""

from .constants import (
    DEFAULT_DOCS_BASE_URL,
    DEFAULT_RELEASE_LIST_PAGE_SIZE,
    FALLBACK_SECTION_TITLE,
    LINE_ENDING,
    RELEASE_NOTES_HEADING_PATTERN,
)
from .retry import retry_on_rate_limit

__all__ = [
    "RELEASE_NOTES_HEADING_PATTERN",
    "DEFAULT_DOCS_BASE_URL",
    "DEFAULT_RELEASE_LIST_PAGE_SIZE",
    "FALLBACK_SECTION_TITLE",
    "LINE_ENDING",
    "retry_on_rate_limit",
]
