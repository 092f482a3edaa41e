"""Sequential YouTrack to GitHub migration."""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field

from youtrack2github.exceptions import DispatchError
from youtrack2github.github_client import GitHubIssueWriter
from youtrack2github.youtrack_csv import YouTrackIssue

logger = logging.getLogger(__name__)

# Pause between two create calls, on top of any rate limit wait
DEFAULT_COOLDOWN = 2.0


@dataclass
class MigrationSummary:
    """Outcome of a migration run"""

    total: int
    created: int = 0
    failures: list[tuple[str, str]] = field(default_factory=list)
    dry_run: bool = False

    @property
    def failed(self) -> int:
        return len(self.failures)


class YouTrackToGitHubMigrator:
    """Push YouTrack issues to GitHub, strictly one after the other

    Issues are sent in export order so GitHub numbers them in the same order.
    A failed issue is logged and skipped; the run always continues with the
    next one.
    """

    def __init__(
        self,
        writer: GitHubIssueWriter,
        label: str,
        milestone: int,
        cooldown: float = DEFAULT_COOLDOWN,
    ):
        self.writer = writer
        self.label = label
        self.milestone = milestone
        self.cooldown = cooldown

    def migrate(self, issues: Sequence[YouTrackIssue]) -> MigrationSummary:
        """Create a GitHub issue for every YouTrack issue

        Args:
            issues: Decoded export, in file order

        Returns:
            Counts of created and failed issues
        """
        summary = MigrationSummary(total=len(issues), dry_run=self.writer.dry_run)

        logger.info("🔄 Starting YouTrack → GitHub migration of %d issues...", len(issues))
        if not summary.dry_run:
            logger.warning(
                "Due to the API rate limiting, don't create any issues on %s/%s "
                "until the migration is done!",
                self.writer.owner,
                self.writer.repo,
            )

        for position, issue in enumerate(issues):
            if position > 0 and not summary.dry_run:
                time.sleep(self.cooldown)

            try:
                self.writer.create_issue(issue, self.label, self.milestone)
            except DispatchError as e:
                summary.failures.append((issue.issue_id, str(e)))
                logger.error("❌ Unable to add issue %s: %s", issue.issue_id, e)
                continue

            summary.created += 1
            logger.info("✅ Issue %s created", issue.issue_id)

        self._report(summary)
        return summary

    def _report(self, summary: MigrationSummary) -> None:
        logger.info("")
        logger.info("=" * 60)
        logger.info("📊 MIGRATION SUMMARY")
        logger.info("=" * 60)

        if summary.dry_run:
            logger.info(f"🎯 Dry run complete. Would create {summary.total} issues")
            return

        logger.info(f"Issues Created: {summary.created}/{summary.total}")
        if summary.failures:
            logger.warning(f"\n⚠️  Failed Issue Creation ({summary.failed}):")
            for issue_id, error in summary.failures[:10]:
                logger.warning(f"    - {issue_id}: {error}")
            if summary.failed > 10:
                logger.warning(f"    ... and {summary.failed - 10} more")
            logger.warning("Re-running repeats every issue; delete the created ones first.")
        else:
            logger.info("\n✅ All issues created")
