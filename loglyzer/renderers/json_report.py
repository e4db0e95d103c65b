"""
JSON report.
"""

import json

from ..models.stats import LogStats


def render_json(stats: LogStats) -> str:
    """Pretty-printed JSON document of the statistics."""
    return json.dumps(stats.to_dict(), indent=2, ensure_ascii=False)
