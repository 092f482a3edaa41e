"""CLI entry point for youtrack2github."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from youtrack2github.exceptions import ArgumentError, DecodeError
from youtrack2github.github_client import GITHUB_API_URL, GitHubIssueWriter, is_legacy_token
from youtrack2github.logging_config import setup_logging
from youtrack2github.migrator import DEFAULT_COOLDOWN, YouTrackToGitHubMigrator
from youtrack2github.youtrack_csv import parse_youtrack_issues

logger = logging.getLogger("youtrack2github.cli")

# Module docstring for --help
__doc__ = """
youtrack2github - Migrate a YouTrack CSV export to GitHub Issues

Usage:
    youtrack2github [options] [--] token owner repo inputFile label milestone

    token       Fine-grained GitHub token (classic ghp_ tokens are refused)
    owner       Repository owner, every issue is assigned to them
    repo        Repository name
    inputFile   YouTrack CSV export
    label       Label put on every created issue
    milestone   Milestone number every issue is filed under

Options:
    -n, --dry-run        Log the issues that would be created, send nothing
    -v, --verbose        Debug output (every request and rate limit reading)
    -q, --quiet          Errors only
    --log-level LEVEL    DEBUG, INFO, WARNING or ERROR
    --log-file PATH      Also write a timestamped log to PATH
    --                   End of options, the rest are arguments

Environment:
    GITHUB_API_URL       REST API base URL (default: https://api.github.com)
    MIGRATION_COOLDOWN   Seconds between two issues (default: 2)

    Variables can also be put in a .env file (or the file named by
    YOUTRACK2GITHUB_ENV_FILE).
"""

USAGE = (
    "Wrong number of arguments\n"
    "Input in this form: youtrack2github token owner repo inputFile label milestone"
)

LEGACY_TOKEN_MESSAGE = (
    "Classic GitHub personal access tokens are disallowed\n"
    "Please create a fine-grained token at "
    "https://github.com/settings/personal-access-tokens/new"
)

FLAGS = {"-h", "--help", "-v", "--verbose", "-q", "--quiet", "-n", "--dry-run"}
VALUE_OPTIONS = {"--log-level", "--log-file"}


def split_args(argv: list[str]) -> tuple[dict[str, str | bool], list[str]]:
    """Separate options from positional arguments

    Unknown dashed arguments are kept as positionals so that they show up
    as a wrong argument count. Everything after ``--`` is positional, which
    lets a label or repository be named like an option (e.g. ``-n``).
    """
    options: dict[str, str | bool] = {}
    positionals: list[str] = []
    args = iter(argv)
    for arg in args:
        if arg == "--":
            positionals.extend(args)
            break
        if arg in FLAGS:
            options[arg] = True
        elif arg in VALUE_OPTIONS:
            value = next(args, None)
            if value is not None:
                options[arg] = value
        else:
            positionals.append(arg)
    return options, positionals


def parse_milestone(value: str) -> int:
    """Milestone numbers are the integer ids shown in the milestone URL

    Raises:
        ArgumentError: If the value is not an integer
    """
    try:
        return int(value)
    except ValueError as e:
        raise ArgumentError(f"milestone must be a number, got: {value}") from e


def load_env_file(path: str) -> None:
    """Load KEY=VALUE lines into os.environ without overriding existing variables"""
    if not Path(path).exists():
        return
    with open(path) as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#") and "=" in line:
                key, value = line.split("=", 1)
                if key not in os.environ:
                    os.environ[key] = value


def main() -> None:
    options, positionals = split_args(sys.argv[1:])

    if "--help" in options or "-h" in options:
        print(__doc__)
        sys.exit(0)

    log_level = "INFO"
    if "--verbose" in options or "-v" in options:
        log_level = "DEBUG"
    elif "--quiet" in options or "-q" in options:
        log_level = "ERROR"
    elif "--log-level" in options:
        log_level = str(options["--log-level"]).upper()
    log_file = options.get("--log-file")

    setup_logging(log_level, str(log_file) if log_file else None)

    if len(positionals) != 6:
        print(USAGE)
        sys.exit(0)

    token, owner, repo, input_file, label, milestone_arg = positionals
    dry_run = "--dry-run" in options or "-n" in options

    try:
        milestone = parse_milestone(milestone_arg)
    except ArgumentError as e:
        logger.error(f"❌ Error: {e}")
        sys.exit(1)

    if is_legacy_token(token):
        print(LEGACY_TOKEN_MESSAGE)
        sys.exit(0)

    load_env_file(os.getenv("YOUTRACK2GITHUB_ENV_FILE", ".env"))
    api_url = os.getenv("GITHUB_API_URL") or GITHUB_API_URL

    cooldown = DEFAULT_COOLDOWN
    if os.getenv("MIGRATION_COOLDOWN"):
        try:
            cooldown = float(os.environ["MIGRATION_COOLDOWN"])
        except ValueError:
            logger.error(
                f"❌ Error: MIGRATION_COOLDOWN must be a number, "
                f"got: {os.environ['MIGRATION_COOLDOWN']}"
            )
            sys.exit(1)

    try:
        issues = parse_youtrack_issues(input_file)
    except DecodeError as e:
        logger.error(f"❌ Error loading YouTrack export: {e}")
        sys.exit(1)

    logger.info(f"📂 Loaded {len(issues)} issues from {input_file}")

    writer = GitHubIssueWriter(token, owner, repo, api_url=api_url, dry_run=dry_run)
    migrator = YouTrackToGitHubMigrator(writer, label, milestone, cooldown=cooldown)

    try:
        migrator.migrate(issues)
    except KeyboardInterrupt:
        logger.warning("\n⚠️  Migration interrupted. Issues already created stay on GitHub.")
        sys.exit(130)


if __name__ == "__main__":
    main()
