"""Data models for release notes merging."""

from dataclasses import dataclass, field, replace
from enum import Enum

from pydantic import BaseModel


class ReleaseNotesStatus(str, Enum):
    """Status of a release notes update."""

    SUCCESS = "success"
    NEEDS_DESCRIPTION = "needs_description"
    DRY_RUN = "dry_run"
    ERROR = "error"


@dataclass(frozen=True)
class ComponentRef:
    """Component identity recovered from a documentation link.

    Only ``path`` takes part in matching; the label, the documentation root and
    the version found in the link are carried for rendering.
    """

    label: str
    path: str
    base_url: str | None = None
    version: str | None = None


@dataclass(frozen=True)
class SubEntry:
    """One note of a component item that collected several notes."""

    text: str
    extra_lines: tuple[str, ...] = ()


@dataclass(frozen=True)
class Item:
    """A single bullet of a release notes section."""

    component: ComponentRef | None = None
    body_lines: tuple[str, ...] = ()
    sub_entries: tuple[SubEntry, ...] = ()

    @property
    def first_line(self) -> str:
        """First body line, or an empty string for items without a body."""
        return self.body_lines[0] if self.body_lines else ""

    @property
    def continuation_lines(self) -> tuple[str, ...]:
        """Body lines after the first one."""
        return self.body_lines[1:]

    @property
    def is_merged(self) -> bool:
        """Whether the item renders its notes as an indented sub-list."""
        return bool(self.sub_entries)

    def matches(self, other: "Item") -> bool:
        """Whether both items describe the same documented component."""
        if self.component is None or other.component is None:
            return False
        return self.component.path == other.component.path

    def with_suffix(self, suffix: str) -> "Item":
        """Return a copy whose notes end with ``suffix``.

        A merged item carries the suffix on every sub-entry, a plain item on its
        first body line.
        """
        if self.is_merged:
            sub_entries = tuple(replace(entry, text=f"{entry.text} {suffix}" if entry.text else suffix) for entry in self.sub_entries)
            return replace(self, sub_entries=sub_entries)
        first_line = f"{self.first_line} {suffix}" if self.first_line else suffix
        return replace(self, body_lines=(first_line, *self.continuation_lines))

    def as_sub_entry(self) -> SubEntry:
        """Collapse the item's own body into a single sub-entry."""
        return SubEntry(text=self.first_line, extra_lines=self.continuation_lines)

    def notes(self) -> tuple[SubEntry, ...]:
        """The item's notes in sub-entry form; an item with an empty body has none."""
        if self.is_merged:
            return self.sub_entries
        if not any(line.strip() for line in self.body_lines):
            return ()
        return (self.as_sub_entry(),)

    def note_texts(self) -> set[str]:
        """All note lines this item already publishes."""
        texts = {entry.text for entry in self.sub_entries}
        if self.first_line:
            texts.add(self.first_line)
        return texts


@dataclass(frozen=True)
class Section:
    """A titled section of a release notes document."""

    title: str
    items: tuple[Item, ...] = ()
    lead_lines: tuple[str, ...] = ()

    def with_items(self, items: tuple[Item, ...]) -> "Section":
        """Return a copy holding ``items``."""
        return replace(self, items=items)


@dataclass(frozen=True)
class Document:
    """Release notes document: free text preamble followed by ordered sections."""

    sections: tuple[Section, ...] = ()
    preamble: str = ""

    @property
    def titles(self) -> list[str]:
        """Section titles in document order."""
        return [section.title for section in self.sections]

    def get_section(self, title: str) -> Section | None:
        """Find a section by its exact title."""
        for section in self.sections:
            if section.title == title:
                return section
        return None


@dataclass(frozen=True)
class Attribution:
    """Origin of the notes being merged."""

    pr_number: int
    author_login: str
    is_external_author: bool = False


@dataclass
class MergeOutcome:
    """Merged release body together with how it was produced."""

    body: str
    used_fallback: bool = False
    new_section_titles: list[str] = field(default_factory=list)


class ReleaseNotesResult(BaseModel):
    """Result of a release notes update."""

    status: ReleaseNotesStatus
    pr_number: int | None = None
    release_id: int | None = None
    version: str | None = None
    created_release: bool = False
    error: str | None = None
    body: str | None = None
