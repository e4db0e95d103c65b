"""
Log Entry data model.

Represents a single parsed line of a leveled, timestamped text log.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class LogLevel(Enum):
    """Severity of a log entry."""
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    DEBUG = "DEBUG"

    @classmethod
    def from_token(cls, token: str) -> Optional["LogLevel"]:
        """
        Map a bracketed level token to a LogLevel.

        Matching is case-insensitive and goes through LEVEL_ALIASES first,
        so "warn" and "WARNING" both give LogLevel.WARNING.

        Returns:
            The level, or None if the token is not a known level name
        """
        name = token.upper()
        name = LEVEL_ALIASES.get(name, name)
        try:
            return cls(name)
        except ValueError:
            return None

    def __str__(self) -> str:
        return self.value


# Alternate spellings accepted on input
LEVEL_ALIASES: dict[str, str] = {
    "WARN": "WARNING",
}


@dataclass(frozen=True)
class LogEntry:
    """
    Represents a single log entry parsed from a log file.

    Log format: YYYY-MM-DD HH:MM:SS [LEVEL] Message
    Example: 2024-01-15 10:30:45 [ERROR] Failed to connect to API: timeout
    """

    timestamp: str          # "2024-01-15 10:30:45", kept verbatim
    datetime: datetime      # Parsed form of timestamp, used for comparisons
    level: LogLevel         # INFO, WARNING, ERROR, DEBUG
    message: str            # "Failed to connect to API: timeout"

    def is_error(self) -> bool:
        """Check if this log entry represents an error."""
        return self.level is LogLevel.ERROR

    @property
    def hour_bucket(self) -> Optional[str]:
        """Hour of the stored timestamp as "HH:00"."""
        return extract_hour(self.timestamp)

    def render(self) -> str:
        """Canonical one-line form, used for substring search."""
        return f"{self.timestamp} [{self.level.value}] {self.message}"

    def __str__(self) -> str:
        return self.render()


def extract_hour(timestamp: str) -> Optional[str]:
    """
    Get the "HH:00" bucket of a "YYYY-MM-DD HH:MM:SS" timestamp string.

    This is a purely textual operation on the stored string: minutes and
    seconds are dropped, no timezone handling takes place.

    Returns:
        The hour bucket, or None if the string has no time component
    """
    parts = timestamp.split()
    if len(parts) < 2:
        return None
    hour = parts[1].split(":")[0]
    return f"{hour}:00"
