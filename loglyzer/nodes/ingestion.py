"""
Log ingestion strategies.

Reads a log file and turns it into an IngestionResult. Two strategies
exist: a sequential scan that parses line by line while streaming, and a
parallel scan that first loads every line and then parses chunks of
lines on a worker pool. Which one runs is decided by a pure predicate
over the file size and an explicit override flag.
"""

import logging
import time
from abc import ABC, abstractmethod
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor
from pathlib import Path
from typing import Any, BinaryIO, Callable, Optional

from ..errors import LogFileNotFoundError, LogReadError
from ..models.stats import IngestionResult
from ..utils.config import (
    Config,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_PARALLEL_THRESHOLD,
    DEFAULT_PROGRESS_THRESHOLD,
    get_config,
)
from .log_parser import parse_log_line, parse_log_lines, strip_line_ending


logger = logging.getLogger(__name__)

# Receives the number of bytes consumed since the previous call
ProgressCallback = Callable[[int], None]

ENCODING = "utf-8"


def should_use_parallel(
    force: bool,
    size: int,
    threshold: int = DEFAULT_PARALLEL_THRESHOLD
) -> bool:
    """Parallel ingestion when forced or when the file is larger than threshold."""
    return force or size > threshold


def should_show_progress(size: int, threshold: int = DEFAULT_PROGRESS_THRESHOLD) -> bool:
    """Progress reporting pays off only for files of at least threshold bytes."""
    return size >= threshold


def _decode(raw: bytes) -> str:
    return strip_line_ending(raw.decode(ENCODING, errors="replace"))


class IngestionStrategy(ABC):
    """
    Reads a log file into an IngestionResult.

    Subclasses implement scan() over an open binary stream; read() takes
    care of opening the file and translating I/O failures.
    """

    name: str = ""

    def read(
        self,
        path: str | Path,
        on_progress: Optional[ProgressCallback] = None
    ) -> IngestionResult:
        """
        Open and scan a log file.

        Raises:
            LogFileNotFoundError: the file does not exist
            LogReadError: the file could not be opened or read
        """
        path = Path(path)
        try:
            with path.open("rb") as stream:
                return self.scan(stream, on_progress)
        except FileNotFoundError as e:
            raise LogFileNotFoundError(path) from e
        except OSError as e:
            raise LogReadError(path, e.strerror or str(e)) from e

    @abstractmethod
    def scan(
        self,
        stream: BinaryIO,
        on_progress: Optional[ProgressCallback] = None
    ) -> IngestionResult:
        """Consume every line of stream."""


class SequentialIngestion(IngestionStrategy):
    """Streams the file, parsing one line at a time."""

    name = "sequential"

    def scan(
        self,
        stream: BinaryIO,
        on_progress: Optional[ProgressCallback] = None
    ) -> IngestionResult:
        result = IngestionResult(mode=self.name)

        for raw in stream:
            result.total_lines += 1
            result.bytes_read += len(raw)

            entry = parse_log_line(_decode(raw))
            if entry is not None:
                result.entries.append(entry)
            else:
                result.skipped += 1

            if on_progress is not None:
                on_progress(len(raw))

        return result


class ParallelIngestion(IngestionStrategy):
    """
    Loads every line, then parses chunks of lines concurrently.

    Each chunk reports its own skipped count; the totals are summed in
    chunk order.
    """

    name = "parallel"

    def __init__(
        self,
        max_workers: Optional[int] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        backend: str = "thread"
    ):
        """
        Args:
            max_workers: Pool size (None lets the executor decide)
            chunk_size: Number of lines handed to a worker at once
            backend: "thread" or "process"
        """
        if backend not in ("thread", "process"):
            raise ValueError(f"Unknown parallel backend: {backend}")
        self.max_workers = max_workers
        self.chunk_size = max(chunk_size, 1)
        self.backend = backend

    def _make_executor(self) -> Executor:
        if self.backend == "process":
            return ProcessPoolExecutor(max_workers=self.max_workers)
        return ThreadPoolExecutor(max_workers=self.max_workers)

    def scan(
        self,
        stream: BinaryIO,
        on_progress: Optional[ProgressCallback] = None
    ) -> IngestionResult:
        result = IngestionResult(mode=self.name)

        # Materialize lines; progress is only reported from this phase
        lines = []
        for raw in stream:
            result.bytes_read += len(raw)
            lines.append(_decode(raw))
            if on_progress is not None:
                on_progress(len(raw))
        result.total_lines = len(lines)

        chunks = [
            lines[start:start + self.chunk_size]
            for start in range(0, len(lines), self.chunk_size)
        ]
        if chunks:
            with self._make_executor() as pool:
                # map() yields in submission order, keeping source order
                for parsed, skipped in pool.map(parse_log_lines, chunks):
                    result.entries.extend(parsed)
                    result.skipped += skipped

        return result


def select_strategy(
    force_parallel: bool,
    size: int,
    config: Optional[Config] = None
) -> IngestionStrategy:
    """
    Pick the ingestion strategy for a file of the given size.
    """
    config = config or get_config()
    if should_use_parallel(force_parallel, size, config.parallel_threshold):
        return ParallelIngestion(
            max_workers=config.max_workers,
            chunk_size=config.chunk_size,
            backend=config.parallel_backend,
        )
    return SequentialIngestion()


def get_source_size(path: str | Path) -> int:
    """
    Size of the log file in bytes.

    Raises:
        LogFileNotFoundError: the file does not exist
        LogReadError: the file could not be inspected
    """
    path = Path(path)
    try:
        return path.stat().st_size
    except FileNotFoundError as e:
        raise LogFileNotFoundError(path) from e
    except OSError as e:
        raise LogReadError(path, e.strerror or str(e)) from e


def read_logs(
    file_path: str | Path,
    force_parallel: bool = False,
    on_progress: Optional[ProgressCallback] = None,
    config: Optional[Config] = None
) -> IngestionResult:
    """
    Read and parse a log file with the strategy its size calls for.

    Args:
        file_path: Path to the log file
        force_parallel: Use the parallel strategy regardless of size
        on_progress: Optional callback receiving consumed byte counts
        config: Settings to use instead of the global configuration

    Returns:
        IngestionResult with parsed entries and the unparsable line count
    """
    path = Path(file_path)
    size = get_source_size(path)
    strategy = select_strategy(force_parallel, size, config)

    logger.debug("Reading %s (%d bytes) in %s mode", path, size, strategy.name)
    started = time.perf_counter()
    result = strategy.read(path, on_progress)
    result.elapsed = time.perf_counter() - started
    logger.debug(
        "Parsed %d of %d lines from %s, %d skipped",
        result.parsed, result.total_lines, path, result.skipped
    )
    return result


def ingest_logs_node(state: dict[str, Any]) -> dict[str, Any]:
    """
    Pipeline node for reading the log file.

    Expects state to contain:
        - log_file_path: str - Path to the log file
        - force_parallel: bool - Optional parallel override
        - on_progress: ProgressCallback - Optional progress callback
        - settings: Config - Optional configuration override

    Updates state with:
        - ingestion: IngestionResult
    """
    if not state.get("log_file_path"):
        raise ValueError("State must contain 'log_file_path'")

    result = read_logs(
        state["log_file_path"],
        force_parallel=state.get("force_parallel", False),
        on_progress=state.get("on_progress"),
        config=state.get("settings"),
    )
    return {
        **state,
        "ingestion": result,
    }
