"""Reconcile incoming release notes items with the items of an existing section."""

import structlog

from ..utils.constants import EXTERNAL_AUTHOR_THANKS
from .models import Attribution, Item

logger = structlog.get_logger(__name__)


def attribution_suffix(attribution: Attribution) -> str:
    """Build the suffix crediting a note to its pull request (and external author)."""
    if attribution.is_external_author:
        return f"(#{attribution.pr_number}, {EXTERNAL_AUTHOR_THANKS} @{attribution.author_login})"
    return f"(#{attribution.pr_number})"


def merge_items(existing: Item, incoming: Item) -> Item:
    """Merge an already attributed incoming item into a matching existing item.

    The existing item keeps its component label and path; its notes become (or
    stay) the leading sub-entries and the incoming notes are appended after them.
    """
    trailing_lines = existing.body_lines if existing.is_merged else ()
    return Item(
        component=existing.component,
        body_lines=trailing_lines,
        sub_entries=(*existing.notes(), *incoming.notes()),
    )


def reconcile_item(items: tuple[Item, ...], incoming: Item, attribution: Attribution) -> tuple[Item, ...]:
    """Fold one incoming item into a section's items.

    Args:
        items: Items of the section, in order.
        incoming: Item taken from the pull request, without attribution.
        attribution: Pull request the incoming item comes from.

    Returns:
        The section's new items. A matching component item is replaced in place
        by its merged form, absorbing any later items about the same component;
        anything else is appended at the end. Notes the section already carries
        with the same attribution are not added again.
    """
    attributed = incoming.with_suffix(attribution_suffix(attribution))

    for index, existing in enumerate(items):
        if not existing.matches(attributed):
            continue
        duplicates = [i for i in range(index + 1, len(items)) if existing.matches(items[i])]
        target = existing
        for i in duplicates:
            target = merge_items(target, items[i])

        known = target.note_texts()
        fresh = tuple(entry for entry in attributed.notes() if entry.text not in known)
        if fresh:
            target = merge_items(target, Item(component=attributed.component, sub_entries=fresh))
            logger.debug("Merged note into component item", path=target.component.path if target.component else None, notes=len(target.sub_entries))
        elif not duplicates:
            logger.info("Note already merged", path=existing.component.path if existing.component else None, pr_number=attribution.pr_number)
            return items
        if duplicates:
            logger.info("Collapsed repeated component items", path=existing.component.path if existing.component else None, count=len(duplicates) + 1)
        return tuple(target if i == index else item for i, item in enumerate(items) if i not in duplicates)

    known: set[str] = set()
    for existing in items:
        known |= existing.note_texts()
    if all(entry.text in known for entry in attributed.notes()):
        logger.info("Note already present in section", pr_number=attribution.pr_number)
        return items
    return (*items, attributed)


def reconcile_items(items: tuple[Item, ...], incoming_items: tuple[Item, ...], attribution: Attribution) -> tuple[Item, ...]:
    """Fold every incoming item, in order, into a section's items."""
    for incoming in incoming_items:
        items = reconcile_item(items, incoming, attribution)
    return items
