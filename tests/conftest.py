"""
Shared pytest fixtures for youtrack2github tests
"""
from pathlib import Path
from unittest.mock import patch

import pytest


class FakeClock:
    """Stand-in for the time module: sleep() advances time() instead of blocking"""

    def __init__(self, start=1_700_000_000.0):
        self.now = start
        self.sleeps = []

    def time(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fixtures_dir():
    """Return path to test fixtures directory"""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def quoted_export(fixtures_dir):
    """YouTrack export with quoted header names (as YouTrack writes them)"""
    return fixtures_dir / "youtrack_export.csv"


@pytest.fixture
def unquoted_export(fixtures_dir):
    """Same export with a plain header row"""
    return fixtures_dir / "youtrack_export_unquoted.csv"


@pytest.fixture
def clock():
    """Patch the clock used by rate limit waits and the migration cooldown"""
    fake = FakeClock()
    with (
        patch("youtrack2github.rate_limiter.time", fake),
        patch("youtrack2github.migrator.time", fake),
    ):
        yield fake
