"""Version detection and draft release selection."""

from enum import Enum
from typing import Any, Iterable, Mapping

import structlog
from packaging import version as packaging_version

from ..utils.constants import DEFAULT_INITIAL_VERSION, DEFAULT_VERSION_BUMP_LABELS

logger = structlog.get_logger(__name__)


class VersionBump(str, Enum):
    """Category of version increment requested for the next release."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"


def strip_version_prefix(name: str | None) -> str | None:
    """Turn a release name or tag such as ``v6.6.0`` into ``6.6.0``."""
    if name is None:
        return None
    name = name.strip()
    return name[1:] if name[:1] in ("v", "V") else name


class VersionDetector:
    """Chooses the version of the release a pull request belongs to."""

    def __init__(
        self,
        label_bumps: Mapping[str, str] | None = None,
        default_bump: VersionBump = VersionBump.MINOR,
    ) -> None:
        """Initialize with the label to bump category mapping."""
        mapping = label_bumps if label_bumps is not None else DEFAULT_VERSION_BUMP_LABELS
        self.label_bumps = {label.lower(): VersionBump(bump) for label, bump in mapping.items()}
        self.default_bump = default_bump

    def bump_from_labels(self, labels: Iterable[str]) -> VersionBump:
        """Pick the bump category from the first label that names one."""
        for label in labels:
            bump = self.label_bumps.get(label.lower())
            if bump is not None:
                logger.debug("Version bump chosen by label", label=label, bump=bump.value)
                return bump
        return self.default_bump

    def next_version(self, latest: str | None, bump: VersionBump) -> str:
        """Increment ``latest`` according to ``bump``."""
        parsed = packaging_version.parse(strip_version_prefix(latest) or DEFAULT_INITIAL_VERSION)
        major, minor, patch = (list(parsed.release) + [0, 0, 0])[:3]
        if bump == VersionBump.MAJOR:
            return f"{major + 1}.0.0"
        if bump == VersionBump.MINOR:
            return f"{major}.{minor + 1}.0"
        return f"{major}.{minor}.{patch + 1}"

    def target_version(self, latest: str | None, labels: Iterable[str], milestone: str | None = None) -> str:
        """Version the pull request should be released in.

        A milestone titled with a version wins over the label-driven bump of the
        latest published release.
        """
        if milestone:
            candidate = strip_version_prefix(milestone) or ""
            try:
                packaging_version.Version(candidate)
            except packaging_version.InvalidVersion:
                logger.debug("Milestone is not a version", milestone=milestone)
            else:
                return candidate
        return self.next_version(latest, self.bump_from_labels(labels))

    def find_draft(self, releases: Iterable[Any], expected_version: str | None = None) -> Any | None:
        """Find the in-progress draft release.

        Prefers the draft named after ``expected_version`` and falls back to the
        first draft in the list.
        """
        drafts = [release for release in releases if release is not None and getattr(release, "draft", False)]
        if not drafts:
            return None
        if expected_version:
            for release in drafts:
                names = (strip_version_prefix(getattr(release, "name", None)), strip_version_prefix(getattr(release, "tag_name", None)))
                if expected_version in names:
                    return release
        logger.debug("Using first draft release", name=getattr(drafts[0], "name", None))
        return drafts[0]
