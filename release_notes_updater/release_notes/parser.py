"""Parse release notes Markdown into the document model."""

import re

import structlog

from ..utils.constants import (
    ITEM_BULLET_PREFIX,
    RELEASE_NOTES_HEADING_PATTERN,
    SECTION_HEADING_PREFIX,
    SUB_ENTRY_PATTERN,
)
from .links import parse_component_link
from .models import ComponentRef, Document, Item, Section, SubEntry

logger = structlog.get_logger(__name__)

_FIRST_HEADING_PATTERN = re.compile(rf"^{re.escape(SECTION_HEADING_PREFIX)}", re.MULTILINE)


def _trim_trailing_blank(lines: list[str], keep: int = 0) -> list[str]:
    """Drop blank lines from the end of ``lines``, never shrinking below ``keep`` lines."""
    end = len(lines)
    while end > keep and not lines[end - 1].strip():
        end -= 1
    return lines[:end]


class _ItemBuilder:
    """Accumulates the lines of one bullet while the parser walks the document."""

    def __init__(self, component: ComponentRef | None, first_line: str) -> None:
        self.component = component
        self.body_lines: list[str] = [first_line]
        self.sub_entries: list[tuple[str, list[str]]] = []

    def accepts_sub_entry(self) -> bool:
        # Only `- [Label](url):` headers with nothing after the colon own a sub-list.
        if self.component is None:
            return False
        return bool(self.sub_entries) or self.body_lines == [""]

    def add_line(self, line: str) -> None:
        sub_match = SUB_ENTRY_PATTERN.match(line)
        if sub_match and self.accepts_sub_entry():
            self.body_lines = []
            self.sub_entries.append((sub_match.group("text"), []))
        elif self.sub_entries:
            self.sub_entries[-1][1].append(line)
        else:
            self.body_lines.append(line)

    def build(self) -> Item:
        sub_entries = tuple(SubEntry(text=text, extra_lines=tuple(_trim_trailing_blank(extra))) for text, extra in self.sub_entries)
        return Item(
            component=self.component,
            body_lines=tuple(_trim_trailing_blank(self.body_lines, keep=1)),
            sub_entries=sub_entries,
        )


class _SectionBuilder:
    """Accumulates the lead lines and items of one section."""

    def __init__(self, title: str) -> None:
        self.title = title
        self.lead_lines: list[str] = []
        self.items: list[Item] = []

    def build(self) -> Section:
        return Section(title=self.title, items=tuple(self.items), lead_lines=tuple(_trim_trailing_blank(self.lead_lines)))


def _start_item(text: str) -> _ItemBuilder:
    parsed = parse_component_link(text)
    if parsed is None:
        return _ItemBuilder(component=None, first_line=text)
    component, rest = parsed
    return _ItemBuilder(component=component, first_line=rest)


def parse_document(text: str | None) -> Document:
    """Parse release notes Markdown into a Document.

    Everything before the first ``## `` heading is kept verbatim as the
    preamble. A ``- `` line starts an item; any other line continues the item
    being built (or the section lead when no item has started). Input without a
    heading yields a document with zero sections.

    Args:
        text: Release body or release notes fragment.

    Returns:
        The parsed document.
    """
    if not text or not text.strip():
        return Document(preamble=text or "")

    first_heading = _FIRST_HEADING_PATTERN.search(text)
    if first_heading is None:
        logger.debug("No release notes sections found")
        return Document(preamble=text)

    preamble = text[: first_heading.start()]
    sections: list[_SectionBuilder] = []
    by_title: dict[str, _SectionBuilder] = {}
    section: _SectionBuilder | None = None
    item: _ItemBuilder | None = None

    for raw_line in text[first_heading.start() :].split("\n"):
        line = raw_line.removesuffix("\r")
        if line.startswith(SECTION_HEADING_PREFIX):
            if item is not None and section is not None:
                section.items.append(item.build())
            item = None
            title = line[len(SECTION_HEADING_PREFIX) :].strip()
            section = by_title.get(title)
            if section is None:
                section = _SectionBuilder(title)
                by_title[title] = section
                sections.append(section)
            else:
                logger.warning("Repeated release notes section merged into the first one", title=title)
        elif section is None:
            continue
        elif line.startswith(ITEM_BULLET_PREFIX):
            if item is not None:
                section.items.append(item.build())
            item = _start_item(line[len(ITEM_BULLET_PREFIX) :])
        elif item is not None:
            item.add_line(line)
        else:
            section.lead_lines.append(line)

    if item is not None and section is not None:
        section.items.append(item.build())

    document = Document(sections=tuple(s.build() for s in sections), preamble=preamble)
    logger.debug("Parsed release notes", sections=document.titles)
    return document


def extract_release_notes_fragment(pull_request_body: str | None) -> str | None:
    """Return the part of a pull request description that follows its ``## Release notes`` heading."""
    if not pull_request_body:
        return None
    lines = pull_request_body.split("\n")
    for index, line in enumerate(lines):
        if RELEASE_NOTES_HEADING_PATTERN.match(line.removesuffix("\r")):
            return "\n".join(lines[index + 1 :])
    return None
