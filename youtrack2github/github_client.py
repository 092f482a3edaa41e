"""GitHub Issues client with rate limit aware retries."""

from __future__ import annotations

import json
import logging
from typing import Any

import requests

from youtrack2github.exceptions import (
    DispatchError,
    GitHubTransportError,
    IssueCreationError,
    TokenPolicyError,
)
from youtrack2github.rate_limiter import RateLimitState, wait_for_reset
from youtrack2github.youtrack_csv import YouTrackIssue

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"
LEGACY_TOKEN_PREFIX = "ghp_"
REQUEST_TIMEOUT = 30


def is_legacy_token(token: str) -> bool:
    """True for classic personal access tokens, which we refuse to use"""
    return token.startswith(LEGACY_TOKEN_PREFIX)


class GitHubIssueWriter:
    """Create GitHub issues one at a time, honouring the REST rate limits

    Every issue is assigned to the repository owner and gets the same label
    and milestone. When a response reports fewer than 5 remaining requests,
    or GitHub answers 403, the writer sleeps until the advertised reset time
    and sends the very same request again. There is no retry cap: a server
    that keeps throttling keeps us waiting on that issue.

    Example:
        >>> writer = GitHubIssueWriter("github_pat_...", "octocat", "hello-world")
        >>> writer.create_issue(issue, label="youtrack", milestone=3)

    Thread Safety:
        Not thread-safe. The migration is sequential by design.
    """

    def __init__(
        self,
        token: str,
        owner: str,
        repo: str,
        api_url: str = GITHUB_API_URL,
        dry_run: bool = False,
        session: requests.Session | None = None,
    ):
        """
        Args:
            token: Fine-grained personal access token
            owner: Repository owner, also used as the assignee
            repo: Repository name
            api_url: REST API base URL (GitHub Enterprise installs differ)
            dry_run: If True, log the requests instead of sending them
            session: Optional requests session to reuse

        Raises:
            TokenPolicyError: If a classic ghp_ token is supplied
        """
        if is_legacy_token(token):
            raise TokenPolicyError(
                "Classic GitHub personal access tokens are disallowed. "
                "Create a fine-grained token at "
                "https://github.com/settings/personal-access-tokens/new"
            )

        self.token = token
        self.owner = owner
        self.repo = repo
        self.dry_run = dry_run
        self.issues_url = f"{api_url.rstrip('/')}/repos/{owner}/{repo}/issues"
        self.session = session or requests.Session()

        mode = " (dry-run mode)" if dry_run else ""
        logger.info("GitHubIssueWriter initialized for %s/%s%s", owner, repo, mode)

    def build_payload(self, issue: YouTrackIssue, label: str, milestone: int) -> dict[str, Any]:
        """Map a YouTrack issue onto the GitHub create-issue body"""
        return {
            "title": issue.summary,
            "body": issue.description,
            "assignees": [self.owner],
            "milestone": milestone,
            "labels": [label],
        }

    def _prepare(self, payload: dict[str, Any]) -> requests.PreparedRequest:
        try:
            data = json.dumps(payload).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise DispatchError(f"Cannot serialize issue payload: {e}") from e

        request = requests.Request(
            "POST",
            self.issues_url,
            data=data,
            headers={
                "Accept": "application/vnd.github+json",
                "Authorization": f"Bearer {self.token}",
                "X-GitHub-Api-Version": GITHUB_API_VERSION,
                "Content-Type": "application/json",
            },
        )
        try:
            return self.session.prepare_request(request)
        except requests.RequestException as e:
            raise DispatchError(f"Cannot build request for {self.issues_url}: {e}") from e

    def _send(self, prepared: requests.PreparedRequest) -> requests.Response:
        try:
            return self.session.send(prepared, timeout=REQUEST_TIMEOUT)
        except requests.RequestException as e:
            raise GitHubTransportError(f"Request to {self.issues_url} failed: {e}") from e

    def create_issue(self, issue: YouTrackIssue, label: str, milestone: int) -> None:
        """Create one GitHub issue from a YouTrack issue

        Args:
            issue: Issue to migrate
            label: Label applied to the new issue
            milestone: Milestone number the issue is filed under

        Raises:
            DispatchError: If the request cannot be built (bad API URL or token)
            GitHubTransportError: If the request could not be sent
            RateLimitHeaderError: If the rate limit headers are missing or malformed
            ThrottleError: If the computed wait until reset is not positive
            IssueCreationError: If GitHub does not answer 201 Created
        """
        payload = self.build_payload(issue, label, milestone)

        if self.dry_run:
            logger.info("[DRY-RUN] Would POST %s: %s", self.issues_url, json.dumps(payload))
            return

        # Built once: a throttled request is re-sent byte for byte
        prepared = self._prepare(payload)

        while True:
            logger.debug("POST %s (YouTrack %s)", self.issues_url, issue.issue_id)
            response = self._send(prepared)
            limit = RateLimitState.from_response(response)
            logger.debug(
                "HTTP %d, %d requests remaining until %s",
                response.status_code,
                limit.remaining,
                limit.reset_time.isoformat(),
            )

            if not limit.is_throttled(response.status_code):
                break

            logger.warning(
                "Rate limited on %s (HTTP %d, %d requests remaining), resuming after %s",
                issue.issue_id,
                response.status_code,
                limit.remaining,
                limit.reset_time.isoformat(),
            )
            wait_for_reset(limit.reset_at)

        if response.status_code != 201:
            raise IssueCreationError(
                f"unable to create issue: status code: {response.status_code}",
                status_code=response.status_code,
                response_text=response.text,
            )
