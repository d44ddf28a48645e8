"""Release notes merging module."""

from .detector import VersionBump, VersionDetector
from .extractor import DataExtractor, PullRequestContext
from .markdown import MarkdownWriter
from .merger import merge, merge_documents, merge_release_notes
from .models import (
    Attribution,
    ComponentRef,
    Document,
    Item,
    MergeOutcome,
    ReleaseNotesResult,
    ReleaseNotesStatus,
    Section,
    SubEntry,
)
from .parser import extract_release_notes_fragment, parse_document
from .updater import ReleaseNotesUpdater

__all__ = [
    "Attribution",
    "ComponentRef",
    "DataExtractor",
    "Document",
    "Item",
    "MarkdownWriter",
    "MergeOutcome",
    "PullRequestContext",
    "ReleaseNotesResult",
    "ReleaseNotesStatus",
    "ReleaseNotesUpdater",
    "Section",
    "SubEntry",
    "VersionBump",
    "VersionDetector",
    "extract_release_notes_fragment",
    "merge",
    "merge_documents",
    "merge_release_notes",
    "parse_document",
]
