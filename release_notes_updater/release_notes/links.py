"""Component documentation link parsing and version rewriting."""

import structlog

from ..utils.constants import (
    BARE_COMPONENT_PATTERN,
    COMPONENT_LINK_PATTERN,
    COMPONENT_URL_PATTERN,
    DEFAULT_DOCS_BASE_URL,
    NON_COMPONENT_LABELS,
)
from .models import ComponentRef

logger = structlog.get_logger(__name__)


def parse_component_link(text: str) -> tuple[ComponentRef, str] | None:
    """Split a bullet text into its leading component reference and the remaining note.

    Recognizes both a documentation link (``[List](https://host/6.3.0/#/List): text``)
    and a bare component name (``List: text``).

    Returns:
        The component reference and the note text after the colon, or None when
        the text does not start with a usable component reference.
    """
    link_match = COMPONENT_LINK_PATTERN.match(text)
    if link_match:
        url_match = COMPONENT_URL_PATTERN.match(link_match.group("url"))
        if url_match is None:
            logger.debug("Component link without a versioned path", url=link_match.group("url"))
            return None
        component = ComponentRef(
            label=link_match.group("label"),
            path=url_match.group("path"),
            base_url=url_match.group("base"),
            version=url_match.group("version"),
        )
        return component, link_match.group("rest")

    bare_match = BARE_COMPONENT_PATTERN.match(text)
    if bare_match and bare_match.group("label") not in NON_COMPONENT_LABELS:
        label = bare_match.group("label")
        return ComponentRef(label=label, path=f"/{label}"), bare_match.group("rest")

    return None


def render_component_link(component: ComponentRef, version: str, docs_base_url: str = DEFAULT_DOCS_BASE_URL) -> str:
    """Render the component link pointing at the documentation of ``version``."""
    # Links keep the documentation host they were written with; only bare names get docs_base_url.
    base_url = (component.base_url or docs_base_url).rstrip("/")
    return f"[{component.label}]({base_url}/{version}/#{component.path})"


def rewrite_version(component: ComponentRef, version: str) -> ComponentRef:
    """Return a component reference that points at ``version``."""
    return ComponentRef(label=component.label, path=component.path, base_url=component.base_url, version=version)
