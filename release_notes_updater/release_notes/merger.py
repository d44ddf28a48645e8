"""Merge a pull request's release notes into a draft release body."""

from dataclasses import replace

import structlog

from ..utils.constants import DEFAULT_DOCS_BASE_URL
from .markdown import MarkdownWriter
from .models import Attribution, Document, MergeOutcome, Section
from .parser import parse_document
from .reconciler import reconcile_items

logger = structlog.get_logger(__name__)


def merge_documents(existing: Document, incoming: Document, attribution: Attribution) -> tuple[Document, list[str]]:
    """Merge the sections of ``incoming`` into ``existing``.

    Existing sections keep their order and absorb the lead lines they lack and the
    items of the incoming section with the same title. Incoming sections without
    a counterpart are appended afterwards, in incoming order.

    Returns:
        The merged document and the titles of the sections that were appended.
    """
    sections: list[Section] = []
    for section in existing.sections:
        counterpart = incoming.get_section(section.title)
        if counterpart is None:
            sections.append(section)
            continue
        lead_lines = (*section.lead_lines, *(line for line in counterpart.lead_lines if line not in section.lead_lines))
        sections.append(
            replace(section, items=reconcile_items(section.items, counterpart.items, attribution), lead_lines=lead_lines)
        )

    existing_titles = set(existing.titles)
    new_section_titles: list[str] = []
    for section in incoming.sections:
        if section.title in existing_titles:
            continue
        sections.append(section.with_items(reconcile_items((), section.items, attribution)))
        new_section_titles.append(section.title)

    return Document(sections=tuple(sections), preamble=existing.preamble), new_section_titles


def merge_release_notes(
    existing_release_body: str | None,
    pull_request_notes_fragment: str | None,
    version: str,
    pr_number: int,
    author_login: str,
    is_external_author: bool,
    docs_base_url: str = DEFAULT_DOCS_BASE_URL,
) -> MergeOutcome:
    """Merge a release notes fragment into a release body and report how it went."""
    existing_release_body = existing_release_body or ""
    incoming = parse_document(pull_request_notes_fragment)
    if not incoming.sections:
        return MergeOutcome(body=MarkdownWriter.append_fallback_section(existing_release_body, pr_number), used_fallback=True)

    attribution = Attribution(pr_number=pr_number, author_login=author_login, is_external_author=is_external_author)
    merged, new_section_titles = merge_documents(parse_document(existing_release_body), incoming, attribution)
    body = MarkdownWriter(version, docs_base_url).render(merged, new_section_titles)
    logger.info(
        "Merged release notes",
        pr_number=pr_number,
        version=version,
        sections=len(merged.sections),
        new_sections=new_section_titles,
    )
    return MergeOutcome(body=body, new_section_titles=new_section_titles)


def merge(
    existing_release_body: str | None,
    pull_request_notes_fragment: str | None,
    version: str,
    pr_number: int,
    author_login: str,
    is_external_author: bool,
    docs_base_url: str = DEFAULT_DOCS_BASE_URL,
) -> str:
    """Merge a pull request's release notes fragment into the draft release body.

    Args:
        existing_release_body: Current body of the draft release.
        pull_request_notes_fragment: Text following the pull request's release
            notes heading, or None when it has none.
        version: Version of the draft release; every component link is rewritten to it.
        pr_number: Number of the merged pull request.
        author_login: Login of the pull request author.
        is_external_author: Whether the pull request comes from a fork.
        docs_base_url: Documentation root for components mentioned without a link.

    Returns:
        The new release body.
    """
    return merge_release_notes(
        existing_release_body,
        pull_request_notes_fragment,
        version=version,
        pr_number=pr_number,
        author_login=author_login,
        is_external_author=is_external_author,
        docs_base_url=docs_base_url,
    ).body
