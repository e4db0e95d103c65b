"""
Log line parser.

Turns raw text lines of the form

    2024-01-15 10:30:45 [ERROR] Failed to connect

into LogEntry objects. Lines that do not follow this grammar are
reported as None, never as an exception.
"""

import re
from datetime import datetime
from typing import Iterable

from ..models.log_entry import LogEntry, LogLevel, TIMESTAMP_FORMAT


# Regex pattern for parsing log lines
# Format: YYYY-MM-DD HH:MM:SS [LEVEL] Message
_LOG_PATTERN = re.compile(
    r'(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})\s+'   # Timestamp
    r'\[(\w+)\]\s+'                                 # Level: [INFO], [ERROR], etc.
    r'(.+)',                                        # Message (rest of line)
    re.ASCII,
)


def parse_log_line(line: str) -> LogEntry | None:
    """
    Parse a single log line into a LogEntry object.

    The line must already be stripped of its line terminator. The message
    is kept verbatim, including any brackets or surrounding whitespace.

    Args:
        line: Raw log line string

    Returns:
        LogEntry if parsing succeeded, None otherwise
    """
    match = _LOG_PATTERN.fullmatch(line)
    if not match:
        return None

    timestamp, token, message = match.groups()

    level = LogLevel.from_token(token)
    if level is None:
        return None

    try:
        parsed = datetime.strptime(timestamp, TIMESTAMP_FORMAT)
    except ValueError:
        # Right shape, impossible date (month 13, Feb 30, ...)
        return None

    return LogEntry(
        timestamp=timestamp,
        datetime=parsed,
        level=level,
        message=message,
    )


def strip_line_ending(line: str) -> str:
    """Remove trailing "\\n" and "\\r" characters."""
    return line.rstrip("\r\n")


def parse_log_lines(lines: Iterable[str]) -> tuple[list[LogEntry], int]:
    """
    Parse a batch of log lines into LogEntry objects.

    Used by the parallel ingestion workers, one chunk per call.

    Args:
        lines: Raw lines, with or without their line ending

    Returns:
        Tuple of (parsed entries in source order, number of unparsable lines)
    """
    entries = []
    skipped = 0
    for line in lines:
        entry = parse_log_line(strip_line_ending(line))
        if entry is not None:
            entries.append(entry)
        else:
            skipped += 1
    return entries, skipped
