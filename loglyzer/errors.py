"""
Exceptions raised while reading log files.

Both subclass the matching builtin so callers may catch either the
specific or the generic form.
"""

from pathlib import Path


class LogFileNotFoundError(FileNotFoundError):
    """The log file does not exist."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        super().__init__(f"File not found: {self.path}")


class LogReadError(OSError):
    """The log file exists but could not be opened or read."""

    def __init__(self, path: str | Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot read file {self.path}: {reason}")
