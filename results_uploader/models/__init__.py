"""Domain models for analysis results and metrics."""

from results_uploader.models.metrics import (
    FileMetrics,
    LineComplexity,
    MetricsResult,
    MetricsResults,
)
from results_uploader.models.results import (
    FileError,
    FileResults,
    Issue,
    ToolResult,
    ToolResults,
    group_by_file,
)

__all__ = [
    "FileError",
    "FileMetrics",
    "FileResults",
    "Issue",
    "LineComplexity",
    "MetricsResult",
    "MetricsResults",
    "ToolResult",
    "ToolResults",
    "group_by_file",
]
