# Pipeline nodes package
from .aggregator import aggregate_node
from .filters import filter_logs_node
from .ingestion import ingest_logs_node

__all__ = [
    "ingest_logs_node",
    "filter_logs_node",
    "aggregate_node",
]
