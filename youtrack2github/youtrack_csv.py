"""YouTrack CSV export decoding."""

from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass
from pathlib import Path

from youtrack2github.exceptions import DecodeError

logger = logging.getLogger(__name__)

# Export column -> YouTrackIssue attribute
HEADER_FIELDS = {
    "Issue Id": "issue_id",
    "Project": "project",
    "Tags": "tags",
    "Summary": "summary",
    "Reporter": "reporter",
    "Created": "created",
    "Updated": "updated",
    "Resolved": "resolved",
    "Priority": "priority",
    "Motivation": "motivation",
    "State": "state",
    "Area": "area",
    "Description": "description",
    "Votes": "votes",
}


@dataclass(frozen=True)
class YouTrackIssue:
    """One row of a YouTrack issue export, kept as the raw exported text"""

    issue_id: str = ""
    project: str = ""
    tags: str = ""
    summary: str = ""
    reporter: str = ""
    created: str = ""
    updated: str = ""
    resolved: str = ""
    priority: str = ""
    motivation: str = ""
    state: str = ""
    area: str = ""
    description: str = ""
    votes: str = ""


def sanitize_header(line: str) -> str:
    """Strip the double quotes YouTrack puts around header names

    The CSV reader would otherwise keep ``"Issue Id"`` and ``Issue Id`` as
    different column names. Surrounding whitespace (and a trailing ``\\r``)
    is removed from each name as well. Already clean headers come back unchanged.

    Examples:
        >>> sanitize_header('"Issue Id","Project","Summary"')
        'Issue Id,Project,Summary'
        >>> sanitize_header('Issue Id,Project,Summary')
        'Issue Id,Project,Summary'
    """
    return ",".join(name.strip() for name in line.replace('"', "").split(","))


def decode_youtrack_csv(text: str, source: str | None = None) -> list[YouTrackIssue]:
    """Decode the text of a YouTrack export into issues, in file order

    Only the header line is sanitized. Data lines are handed to the CSV
    reader untouched, so quoted descriptions may contain commas and newlines.

    Args:
        text: Whole export contents
        source: Path used in error messages (optional)

    Returns:
        Issues in the order they appear in the export

    Raises:
        DecodeError: If the export is empty, a required column is missing,
            the CSV is malformed, or a row has the wrong number of fields
    """
    label = source or "<export>"
    header_line, _, body = text.partition("\n")
    header_line = sanitize_header(header_line)
    if not header_line.strip(","):
        raise DecodeError(f"YouTrack export is empty: {label}", path=source, line=1)

    reader = csv.reader(io.StringIO(header_line + "\n" + body), strict=True)
    issues: list[YouTrackIssue] = []
    try:
        columns = next(reader)
        missing = [name for name in HEADER_FIELDS if name not in columns]
        if missing:
            raise DecodeError(
                f"YouTrack export {label} is missing required columns: {', '.join(missing)}",
                path=source,
                line=1,
            )
        positions = {field: columns.index(name) for name, field in HEADER_FIELDS.items()}

        for row in reader:
            if not row:
                continue
            if len(row) != len(columns):
                raise DecodeError(
                    f"{label}, line {reader.line_num}: expected {len(columns)} fields, "
                    f"got {len(row)}",
                    path=source,
                    line=reader.line_num,
                )
            issues.append(YouTrackIssue(**{field: row[i] for field, i in positions.items()}))
    except csv.Error as e:
        raise DecodeError(
            f"Malformed CSV in {label}, line {reader.line_num}: {e}",
            path=source,
            line=reader.line_num,
        ) from e

    logger.debug("Decoded %d issues from %s", len(issues), label)
    return issues


def parse_youtrack_issues(path: str | Path) -> list[YouTrackIssue]:
    """Load a YouTrack CSV export from disk

    Args:
        path: Path to the export file

    Returns:
        Issues in file order

    Raises:
        DecodeError: If the file is missing, unreadable, or cannot be decoded
    """
    export_path = Path(path)
    if not export_path.is_file():
        raise DecodeError(f"YouTrack export not found: {path}", path=str(path))

    try:
        # utf-8-sig: YouTrack writes a byte-order mark in front of the header
        with open(export_path, encoding="utf-8-sig", newline="") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise DecodeError(f"Cannot read YouTrack export {path}: {e}", path=str(path)) from e

    return decode_youtrack_csv(text, source=str(path))
