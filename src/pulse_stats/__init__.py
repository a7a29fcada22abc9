"""pulse-stats: reduce developer activity into weekly and sprint metrics."""

from .aggregator import analyze_sprint_activity, calculate_weekly_metrics, merge_latency_hours

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "analyze_sprint_activity",
    "calculate_weekly_metrics",
    "merge_latency_hours",
]
