"""loglyzer - parse, filter and summarize leveled text logs."""

from .errors import LogFileNotFoundError, LogReadError
from .graph import run_pipeline
from .models import ErrorFrequency, IngestionResult, LogEntry, LogLevel, LogStats
from .nodes.aggregator import analyze_logs
from .nodes.filters import FilterOptions, filter_entries
from .nodes.ingestion import read_logs
from .nodes.log_parser import parse_log_line

__version__ = "0.1.0"

__all__ = [
    "ErrorFrequency",
    "FilterOptions",
    "IngestionResult",
    "LogEntry",
    "LogFileNotFoundError",
    "LogLevel",
    "LogReadError",
    "LogStats",
    "analyze_logs",
    "filter_entries",
    "parse_log_line",
    "read_logs",
    "run_pipeline",
]
