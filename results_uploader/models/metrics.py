"""Data models for code metrics produced by the analysis pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class LineComplexity:
    line: int
    value: int


@dataclass(frozen=True)
class FileMetrics:
    """Metrics of a single file. Unknown values are ``None``."""

    filename: Path
    complexity: int | None = None
    loc: int | None = None  # lines of code
    cloc: int | None = None  # comment lines
    nr_methods: int | None = None
    nr_classes: int | None = None
    line_complexities: frozenset[LineComplexity] = frozenset()


@dataclass(frozen=True)
class MetricsResult:
    """Metrics of a set of files, plus the error of the metrics tool if it failed."""

    files: frozenset[FileMetrics] = frozenset()
    analysis_error: str | None = None


@dataclass
class MetricsResults:
    """All metrics computed for one language."""

    language: str
    metrics: set[MetricsResult] = field(default_factory=set)
