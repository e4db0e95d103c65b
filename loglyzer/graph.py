"""
LangGraph state machine for the log analysis pipeline.

Defines the graph structure with nodes and edges for reading the log
file, filtering its entries and computing statistics.
"""

from pathlib import Path
from typing import Any, Literal, Optional, TypedDict

from langgraph.graph import END, StateGraph

from .models.log_entry import LogEntry
from .models.stats import IngestionResult, LogStats
from .nodes.aggregator import aggregate_node
from .nodes.filters import FilterOptions, filter_logs_node
from .nodes.ingestion import ProgressCallback, ingest_logs_node
from .utils.config import Config


class PipelineState(TypedDict, total=False):
    """
    State for the log analysis graph.

    This state flows through all nodes and accumulates
    information as processing progresses.
    """
    # Input
    log_file_path: str                  # Path to the log file
    force_parallel: bool                # Parallel ingestion regardless of size
    on_progress: Optional[ProgressCallback]  # Receives consumed byte counts
    settings: Optional[Config]          # Configuration override

    # Parameters
    filters: FilterOptions              # Level / time / search filters
    top_n: int                          # Number of top errors to keep

    # Results
    ingestion: IngestionResult          # Parsed entries + skipped count
    filtered_entries: list[LogEntry]    # Entries left after filtering
    no_matches: bool                    # Filtering left nothing
    stats: Optional[LogStats]           # Aggregated statistics


def should_aggregate(state: PipelineState) -> Literal["aggregate", "done"]:
    """
    Skip aggregation when filtering left no entries.
    """
    if state.get("no_matches", True):
        return "done"
    return "aggregate"


def create_pipeline_graph() -> StateGraph:
    """
    Create the LangGraph state machine for the analysis pipeline.

    Graph structure:

    START -> ingest -> filter -> aggregate -> END
                          |
                          v
                         END  (no entries matched)
    """
    graph = StateGraph(PipelineState)

    # Add nodes
    graph.add_node("ingest", ingest_logs_node)
    graph.add_node("filter", filter_logs_node)
    graph.add_node("aggregate", aggregate_node)

    # Define edges
    graph.set_entry_point("ingest")
    graph.add_edge("ingest", "filter")

    graph.add_conditional_edges(
        "filter",
        should_aggregate,
        {
            "aggregate": "aggregate",
            "done": END
        }
    )

    graph.add_edge("aggregate", END)

    return graph


def compile_pipeline():
    """
    Compile the pipeline graph for execution.

    Returns:
        Compiled LangGraph that can be invoked
    """
    return create_pipeline_graph().compile()


def run_pipeline(
    log_file_path: str | Path,
    filters: Optional[FilterOptions] = None,
    top_n: int = 5,
    force_parallel: bool = False,
    on_progress: Optional[ProgressCallback] = None,
    config: Optional[Config] = None
) -> dict[str, Any]:
    """
    Run the whole pipeline on one log file.

    Args:
        log_file_path: Path to the log file
        filters: Filters to apply (none when omitted)
        top_n: Number of top error messages to report
        force_parallel: Use parallel ingestion regardless of file size
        on_progress: Optional callback receiving consumed byte counts
        config: Settings to use instead of the global configuration

    Returns:
        Final pipeline state. `stats` is absent when no entry matched
        the filters; check `no_matches`.

    Raises:
        LogFileNotFoundError: the file does not exist
        LogReadError: the file could not be read
    """
    pipeline = compile_pipeline()

    initial_state = PipelineState(
        log_file_path=str(log_file_path),
        force_parallel=force_parallel,
        on_progress=on_progress,
        settings=config,
        filters=filters or FilterOptions(),
        top_n=top_n,
    )

    return pipeline.invoke(initial_state)
