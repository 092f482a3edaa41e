"""Rate limit aware migration of YouTrack issues to GitHub Issues."""

from __future__ import annotations

from youtrack2github.cli import main
from youtrack2github.exceptions import (
    ArgumentError,
    DecodeError,
    DispatchError,
    GitHubTransportError,
    IssueCreationError,
    MigrationError,
    RateLimitHeaderError,
    ThrottleError,
    TokenPolicyError,
)
from youtrack2github.github_client import GitHubIssueWriter, is_legacy_token
from youtrack2github.logging_config import setup_logging
from youtrack2github.migrator import MigrationSummary, YouTrackToGitHubMigrator
from youtrack2github.rate_limiter import RateLimitState, get_eta, wait_for_reset
from youtrack2github.youtrack_csv import (
    YouTrackIssue,
    decode_youtrack_csv,
    parse_youtrack_issues,
    sanitize_header,
)

__version__ = "0.1.0"

__all__ = [
    # Core classes
    "YouTrackIssue",
    "GitHubIssueWriter",
    "YouTrackToGitHubMigrator",
    "MigrationSummary",
    "RateLimitState",
    # Functions
    "parse_youtrack_issues",
    "decode_youtrack_csv",
    "sanitize_header",
    "get_eta",
    "wait_for_reset",
    "is_legacy_token",
    "setup_logging",
    # Exceptions
    "MigrationError",
    "ArgumentError",
    "TokenPolicyError",
    "DecodeError",
    "DispatchError",
    "GitHubTransportError",
    "RateLimitHeaderError",
    "ThrottleError",
    "IssueCreationError",
    # CLI
    "main",
]
