"""Custom exception classes for youtrack2github.

This module defines the exception hierarchy for the run-level failures
(arguments, token policy, record decoding) and for the per-issue GitHub
dispatch errors.
"""

from __future__ import annotations


class MigrationError(Exception):
    """Base exception for all youtrack2github errors"""

    pass


class ArgumentError(MigrationError):
    """Raised when command line arguments cannot be used (e.g. non-numeric milestone)"""

    pass


class TokenPolicyError(MigrationError):
    """Raised when a classic (ghp_) personal access token is supplied.

    Resolution:
        Create a fine-grained token at
        https://github.com/settings/personal-access-tokens/new
    """

    pass


class DecodeError(MigrationError):
    """Raised when the YouTrack CSV export cannot be decoded.

    Attributes:
        path: Path of the export file (if known)
        line: Line number in the export where decoding failed (if known)
    """

    def __init__(self, message: str, path: str | None = None, line: int | None = None):
        self.path = path
        self.line = line
        super().__init__(message)


class DispatchError(MigrationError):
    """Base exception for a single issue that could not be created on GitHub.

    Dispatch errors are recovered per issue: the migrator logs them and moves
    on to the next record.

    Attributes:
        status_code: HTTP status of the last response (if any)
        response_text: Body of the last response (if any)
    """

    def __init__(
        self, message: str, status_code: int | None = None, response_text: str | None = None
    ):
        self.status_code = status_code
        self.response_text = response_text
        super().__init__(message)


class GitHubTransportError(DispatchError):
    """Raised when the request never produced a response (DNS, TLS, timeout...)"""

    pass


class RateLimitHeaderError(DispatchError):
    """Raised when X-Ratelimit-Remaining or X-Ratelimit-Reset is missing or malformed"""

    pass


class ThrottleError(DispatchError):
    """Raised when the wait until the rate limit reset is zero or negative"""

    pass


class IssueCreationError(DispatchError):
    """Raised when GitHub answers with anything other than 201 Created.

    Common causes:
    - 404: repository does not exist or the token cannot see it
    - 422: milestone or label does not exist, or the assignee cannot be assigned
    - 401: token expired or revoked
    """

    pass
