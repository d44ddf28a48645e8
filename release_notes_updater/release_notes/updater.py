"""Main release notes update orchestration."""

from typing import Any

import structlog

from ..configuration.models import ReleaseNotesConfig
from ..github.abc import GitHubClientBase
from .detector import VersionBump, VersionDetector, strip_version_prefix
from .extractor import DataExtractor, PullRequestContext
from .merger import merge_release_notes
from .models import ReleaseNotesResult, ReleaseNotesStatus

logger = structlog.get_logger(__name__)


class ReleaseNotesUpdater:
    """Merges the release notes of a merged pull request into the draft release.

    This class handles all GitHub operations around the merge: it reads the pull
    request, finds (or creates) the draft release the pull request belongs to,
    merges the notes into the draft body and writes the body back.

    Updates of one draft are a read-modify-write cycle; runs for two pull
    requests must not overlap or one of the updates is lost.
    """

    def __init__(self, adapter: GitHubClientBase, config: ReleaseNotesConfig) -> None:
        """Initialize with an authenticated GitHub adapter and the run configuration."""
        self.adapter = adapter
        self.config = config
        self.detector = VersionDetector(
            label_bumps=config.version_bump_labels,
            default_bump=VersionBump(config.default_version_bump),
        )
        self.extractor = DataExtractor(adapter)

    async def find_or_create_draft(self, pull_request: PullRequestContext) -> tuple[Any, bool]:
        """Locate the draft release for ``pull_request``, creating it when there is none.

        Returns:
            The draft release and whether it was created by this call.
        """
        releases = await self.adapter.list_releases(per_page=self.config.release_list_page_size)
        latest = await self.adapter.get_latest_release()
        latest_version = strip_version_prefix((latest.name or latest.tag_name) if latest is not None else None)
        expected_version = self.detector.target_version(latest_version, pull_request.labels, pull_request.milestone)

        draft = self.detector.find_draft(releases, expected_version)
        if draft is not None:
            logger.info("Found draft release", release_id=draft.id, name=draft.name, expected_version=expected_version)
            return draft, False

        tag_name = f"v{expected_version}"
        logger.info("No draft release found, creating one", tag_name=tag_name, latest_version=latest_version)
        draft = await self.adapter.create_release(tag_name=tag_name, name=tag_name, body="", draft=True)
        return draft, True

    async def update(self, pr_number: int, dry_run: bool = False) -> ReleaseNotesResult:
        """Merge the release notes of pull request ``pr_number`` into its draft release.

        Args:
            pr_number: Number of the merged pull request.
            dry_run: If True, compute the new body but don't write it back.

        Returns:
            Result of the update.
        """
        try:
            pull_request = await self.extractor.extract_pull_request(pr_number)
            draft, created = await self.find_or_create_draft(pull_request)
            version = strip_version_prefix(draft.name or draft.tag_name) or ""

            outcome = merge_release_notes(
                draft.body,
                pull_request.release_notes_fragment,
                version=version,
                pr_number=pr_number,
                author_login=pull_request.author_login,
                is_external_author=pull_request.is_external_author,
                docs_base_url=self.config.docs_base_url,
            )

            if dry_run:
                logger.info("Dry run mode - not updating release", release_id=draft.id)
                logger.debug(outcome.body)
                return ReleaseNotesResult(
                    status=ReleaseNotesStatus.DRY_RUN,
                    pr_number=pr_number,
                    release_id=draft.id,
                    version=version,
                    created_release=created,
                    body=outcome.body,
                )

            await self.adapter.update_release(release_id=draft.id, body=outcome.body)
            logger.info("Updated draft release", release_id=draft.id, version=version, pr_number=pr_number, fallback=outcome.used_fallback)

            return ReleaseNotesResult(
                status=ReleaseNotesStatus.NEEDS_DESCRIPTION if outcome.used_fallback else ReleaseNotesStatus.SUCCESS,
                pr_number=pr_number,
                release_id=draft.id,
                version=version,
                created_release=created,
                body=outcome.body,
            )

        except Exception as e:
            logger.exception("Failed to update release notes", pr_number=pr_number)
            return ReleaseNotesResult(
                status=ReleaseNotesStatus.ERROR,
                pr_number=pr_number,
                error=str(e),
            )
