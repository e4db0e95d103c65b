"""
Configuration management for loglyzer.

Loads settings from environment variables and .env file.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


ENV_PREFIX = "LOGLYZER_"

DEFAULT_PARALLEL_THRESHOLD = 10 * 1024 * 1024  # 10 MiB
DEFAULT_PROGRESS_THRESHOLD = 5 * 1024 * 1024   # 5 MiB
DEFAULT_TOP = 5
DEFAULT_CHUNK_SIZE = 5000

PARALLEL_BACKENDS = ("thread", "process")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Config:
    """
    Configuration manager for loglyzer.

    Loads configuration from environment variables, with fallback to .env file.
    Values that fail to parse are recorded in `problems` and replaced by
    their defaults.
    """

    _instance: Optional["Config"] = None

    def __new__(cls) -> "Config":
        """Singleton pattern to ensure single config instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        """Initialize configuration (only runs once due to singleton)."""
        if self._initialized:
            return

        self.problems: list[str] = []

        # Find and load .env file
        self._load_env()

        # Ingestion strategy thresholds (bytes)
        self.parallel_threshold: int = self._get_int(
            "PARALLEL_THRESHOLD", DEFAULT_PARALLEL_THRESHOLD
        )
        self.progress_threshold: int = self._get_int(
            "PROGRESS_THRESHOLD", DEFAULT_PROGRESS_THRESHOLD
        )

        # Parallel ingestion
        self.max_workers: Optional[int] = self._get_int("MAX_WORKERS", None)
        self.chunk_size: int = self._get_int("CHUNK_SIZE", DEFAULT_CHUNK_SIZE)
        self.parallel_backend: str = self._get_choice(
            "PARALLEL_BACKEND", PARALLEL_BACKENDS, "thread"
        )

        # Report
        self.default_top: int = self._get_int("DEFAULT_TOP", DEFAULT_TOP)

        # Logging
        self.log_level: str = self._get_choice("LOG_LEVEL", LOG_LEVELS, "WARNING")

        self._initialized = True

    def _load_env(self) -> None:
        """Load .env file if it exists."""
        # Try to find .env in current directory or parent directories
        current = Path.cwd()
        for _ in range(5):  # Search up to 5 levels up
            env_path = current / ".env"
            if env_path.exists():
                load_dotenv(env_path)
                return
            current = current.parent

    def _get_int(self, key: str, default: Optional[int]) -> Optional[int]:
        raw = os.getenv(ENV_PREFIX + key, "").strip()
        if not raw:
            return default
        try:
            value = int(raw)
        except ValueError:
            self.problems.append(f"{ENV_PREFIX}{key} - expected an integer, got {raw!r}")
            return default
        if value < 1:
            self.problems.append(f"{ENV_PREFIX}{key} - must be at least 1, got {value}")
            return default
        return value

    def _get_choice(self, key: str, choices: tuple[str, ...], default: str) -> str:
        raw = os.getenv(ENV_PREFIX + key, "").strip()
        if not raw:
            return default
        normalized = raw.upper() if choices == LOG_LEVELS else raw.lower()
        if normalized not in choices:
            self.problems.append(
                f"{ENV_PREFIX}{key} - expected one of {', '.join(choices)}, got {raw!r}"
            )
            return default
        return normalized

    def validate(self) -> list[str]:
        """
        Validate configuration and return list of problems.

        Returns:
            List of invalid configuration items (empty if all valid)
        """
        problems = list(self.problems)
        if self.progress_threshold > self.parallel_threshold:
            problems.append(
                f"{ENV_PREFIX}PROGRESS_THRESHOLD - larger than PARALLEL_THRESHOLD "
                f"({self.progress_threshold} > {self.parallel_threshold})"
            )
        return problems

    def __repr__(self) -> str:
        return (
            f"Config(\n"
            f"  parallel_threshold={self.parallel_threshold},\n"
            f"  progress_threshold={self.progress_threshold},\n"
            f"  max_workers={self.max_workers or 'auto'},\n"
            f"  chunk_size={self.chunk_size},\n"
            f"  parallel_backend={self.parallel_backend},\n"
            f"  default_top={self.default_top},\n"
            f"  log_level={self.log_level}\n"
            f")"
        )


def get_config() -> Config:
    """Get the configuration singleton."""
    return Config()


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() reloads it."""
    Config._instance = None
