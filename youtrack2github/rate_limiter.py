"""GitHub rate limit header handling and throttle waits."""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from youtrack2github.exceptions import RateLimitHeaderError, ThrottleError

logger = logging.getLogger(__name__)

REMAINING_HEADER = "X-Ratelimit-Remaining"
RESET_HEADER = "X-Ratelimit-Reset"

# Below this many remaining requests we stop and wait for the window to reset
MIN_REMAINING = 5
FORBIDDEN = 403

INTEGER_PATTERN = re.compile(r"-?[0-9]+")


@dataclass(frozen=True)
class RateLimitState:
    """Rate limit window as reported by a single GitHub response

    GitHub REST limits (per token):
    - 5000 requests per hour for fine-grained tokens
    - content-creating endpoints additionally trigger secondary limits (403)

    Attributes:
        remaining: Requests left in the current window
        reset_at: Unix timestamp (seconds) when the window resets
    """

    remaining: int
    reset_at: int

    @classmethod
    def from_response(cls, response: Any) -> RateLimitState:
        """Read the rate limit headers of a response

        Raises:
            RateLimitHeaderError: If either header is missing, not an integer,
                or the reset is not a representable timestamp
        """
        state = cls(
            remaining=_int_header(response, REMAINING_HEADER),
            reset_at=_int_header(response, RESET_HEADER),
        )
        try:
            datetime.fromtimestamp(state.reset_at, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise RateLimitHeaderError(
                f"Out of range {RESET_HEADER} header: {state.reset_at}",
                status_code=response.status_code,
                response_text=response.text,
            ) from e
        return state

    def is_throttled(self, status_code: int) -> bool:
        """True when the quota is nearly spent or GitHub refused the request (403)"""
        return self.remaining < MIN_REMAINING or status_code == FORBIDDEN

    @property
    def reset_time(self) -> datetime:
        return datetime.fromtimestamp(self.reset_at, tz=timezone.utc)


def _int_header(response: Any, name: str) -> int:
    value = response.headers.get(name)
    if value is None:
        raise RateLimitHeaderError(
            f"Response has no {name} header",
            status_code=response.status_code,
            response_text=response.text,
        )
    # Plain decimal only: int() would also take " 3 ", "+3" and "3_000"
    if not INTEGER_PATTERN.fullmatch(value):
        raise RateLimitHeaderError(
            f"Invalid {name} header: {value!r}",
            status_code=response.status_code,
            response_text=response.text,
        )
    return int(value)


def get_eta(reset_at: int, now: float | None = None) -> int:
    """Whole seconds left until ``reset_at``

    Args:
        reset_at: Unix timestamp of the rate limit reset
        now: Current unix time (defaults to the wall clock)

    Returns:
        Seconds to wait, always at least 1

    Raises:
        ThrottleError: If the reset instant is not in the future
    """
    if now is None:
        now = time.time()
    eta = reset_at - int(now)
    if eta <= 0:
        raise ThrottleError(f"ETA is less than or equal to 0 ({eta}s until rate limit reset)")
    return eta


def wait_for_reset(reset_at: int) -> int:
    """Block until the wall clock passes ``reset_at``

    Returns:
        Total seconds slept (0 if the reset was already behind us)

    Raises:
        ThrottleError: If an ETA inside the wait comes out non-positive
    """
    waited = 0
    while time.time() < reset_at:
        eta = get_eta(reset_at)
        logger.info("⏳ Waiting %ds to pass rate limit threshold", eta)
        time.sleep(eta)
        waited += eta
    return waited
