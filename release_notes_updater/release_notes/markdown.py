"""Markdown rendering for release notes."""

import structlog

from ..utils.constants import (
    DEFAULT_DOCS_BASE_URL,
    FALLBACK_SECTION_TITLE,
    ITEM_BULLET_PREFIX,
    LINE_ENDING,
    SECTION_HEADING_PREFIX,
    SUB_ENTRY_INDENT,
)
from .links import render_component_link
from .models import Document, Item, Section

logger = structlog.get_logger(__name__)


class MarkdownWriter:
    """Renders release notes documents back to Markdown."""

    def __init__(self, version: str, docs_base_url: str = DEFAULT_DOCS_BASE_URL) -> None:
        """Initialize with the release version every component link should point at."""
        self.version = version
        self.docs_base_url = docs_base_url

    def render_item(self, item: Item) -> list[str]:
        """Render one item as a list of lines without terminators."""
        if item.component is None:
            return [f"{ITEM_BULLET_PREFIX}{item.first_line}", *item.continuation_lines]

        link = render_component_link(item.component, self.version, self.docs_base_url)
        if item.is_merged:
            lines = [f"{ITEM_BULLET_PREFIX}{link}:"]
            for entry in item.sub_entries:
                lines.append(f"{SUB_ENTRY_INDENT}{ITEM_BULLET_PREFIX}{entry.text}")
                lines.extend(entry.extra_lines)
            lines.extend(item.body_lines)
            return lines

        header = f"{ITEM_BULLET_PREFIX}{link}: {item.first_line}" if item.first_line else f"{ITEM_BULLET_PREFIX}{link}:"
        return [header, *item.continuation_lines]

    def render_section(self, section: Section) -> list[str]:
        """Render a section heading, its lead lines and its items."""
        lines = [f"{SECTION_HEADING_PREFIX}{section.title}", *section.lead_lines]
        for item in section.items:
            lines.extend(self.render_item(item))
        return lines

    def render(self, document: Document, new_section_titles: list[str] | None = None) -> str:
        """Render a rebuilt document with every line terminated by CRLF.

        A blank line follows each section, except when the last section of the
        document was newly appended by the merge.
        """
        new_titles = set(new_section_titles or [])
        lines: list[str] = []
        for index, section in enumerate(document.sections):
            lines.extend(self.render_section(section))
            is_last = index == len(document.sections) - 1
            if not (is_last and section.title in new_titles):
                lines.append("")
        rendered = "".join(f"{line}{LINE_ENDING}" for line in lines)
        return document.preamble + rendered

    @staticmethod
    def append_fallback_section(existing_body: str, pr_number: int) -> str:
        """Append the section flagging a pull request without release notes.

        The existing body is kept byte for byte; only the appended lines use CRLF.
        """
        logger.info("Pull request has no release notes", pr_number=pr_number)
        return f"{existing_body}{LINE_ENDING}{SECTION_HEADING_PREFIX}{FALLBACK_SECTION_TITLE}{LINE_ENDING}#{pr_number}"
