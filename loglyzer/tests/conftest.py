"""
Pytest configuration and shared fixtures for loglyzer tests
"""

from pathlib import Path

import pytest

from loglyzer.utils.config import reset_config

from loglyzer.tests.sample_logs import SAMPLE_LOG


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch, tmp_path):
    """Each test gets its own configuration, free of any .env file."""
    monkeypatch.chdir(tmp_path)
    for key in (
        "PARALLEL_THRESHOLD",
        "PROGRESS_THRESHOLD",
        "MAX_WORKERS",
        "CHUNK_SIZE",
        "PARALLEL_BACKEND",
        "DEFAULT_TOP",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(f"LOGLYZER_{key}", raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def log_file(tmp_path) -> Path:
    """Small log file with two errors and two info entries."""
    path = tmp_path / "app.log"
    path.write_text(SAMPLE_LOG, encoding="utf-8")
    return path


@pytest.fixture
def mixed_log_file(tmp_path) -> Path:
    """Log file mixing valid, invalid and CRLF-terminated lines."""
    lines = []
    for i in range(300):
        minute = i % 60
        hour = 8 + (i // 60)
        if i % 7 == 0:
            lines.append(f"garbage line {i}")
        elif i % 5 == 0:
            lines.append(f"2024-01-15 {hour:02d}:{minute:02d}:00 [ERROR] Error number {i % 3}")
        elif i % 3 == 0:
            lines.append(f"2024-01-15 {hour:02d}:{minute:02d}:00 [warn] Slow request {i}")
        else:
            lines.append(f"2024-01-15 {hour:02d}:{minute:02d}:00 [INFO] Request {i}")
    content = "\r\n".join(lines[:150]) + "\r\n" + "\n".join(lines[150:]) + "\n"
    path = tmp_path / "mixed.log"
    path.write_bytes(content.encode("utf-8"))
    return path
