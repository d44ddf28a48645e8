"""Shared constants used across the application."""

import re

# Release Notes Constants
# -----------------------

# Regex Patterns
RELEASE_NOTES_HEADING_PATTERN = re.compile(r"^\s*##\s+release\s+notes\s*$", re.IGNORECASE)
"""Pattern matching the pull request heading that introduces the release notes fragment."""

SECTION_HEADING_PREFIX = "## "
"""Prefix of a line that starts a release notes section."""

ITEM_BULLET_PREFIX = "- "
"""Prefix of a line that starts a release notes item."""

COMPONENT_LINK_PATTERN = re.compile(r"^\[(?P<label>[^\]]+)\]\((?P<url>[^)\s]*)\):[ \t]?(?P<rest>.*)$")
"""Pattern for a bullet that begins with a component link, e.g. `[List](https://.../6.3.0/#/List): text`."""

COMPONENT_URL_PATTERN = re.compile(r"^(?P<base>\S+?)/(?P<version>v?\d+(?:\.\d+)*[^/#\s]*)/#(?P<path>/\S+)$")
"""Pattern splitting a documentation URL into its base, version and component path."""

BARE_COMPONENT_PATTERN = re.compile(r"^(?P<label>[A-Z][A-Za-z0-9]*):[ \t]+(?P<rest>.*)$")
"""Pattern for a bullet that names a component without a link, e.g. `ChipsInput: text`."""

NON_COMPONENT_LABELS = frozenset(
    {"Breaking", "Deprecated", "Docs", "Example", "Fix", "Fixed", "Important", "Info", "Note", "Notes", "See", "TODO", "Tip", "Warning"}
)
"""Capitalised words that introduce prose rather than name a component when followed by a colon."""

SUB_ENTRY_PATTERN = re.compile(r"^\s+- (?P<text>.*)$")
"""Pattern for an indented sub-entry of a merged item."""

# Rendering
DEFAULT_DOCS_BASE_URL = "https://vkcom.github.io/VKUI"
"""Documentation root used for components that were mentioned without a link."""

LINE_ENDING = "\r\n"
"""Line terminator used for every line of a rebuilt release body."""

SUB_ENTRY_INDENT = "  "
"""Indentation of sub-entries under a merged item."""

FALLBACK_SECTION_TITLE = "Нужно описать"
"""Section collecting pull requests that did not describe their changes."""

EXTERNAL_AUTHOR_THANKS = "спасибо"
"""Word used to thank external contributors in the attribution suffix."""

# Release Lookup Settings
DEFAULT_RELEASE_LIST_PAGE_SIZE = 10
"""Number of recent releases searched for an in-progress draft."""

DEFAULT_INITIAL_VERSION = "0.0.0"
"""Version assumed when the repository has no published release yet."""

DEFAULT_VERSION_BUMP_LABELS = {
    "major": "major",
    "minor": "minor",
    "patch": "patch",
}
"""Default mapping of pull request labels to version bump categories."""
