"""Load the analysis pipeline's JSON report into domain models."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from results_uploader.exceptions import ReportError
from results_uploader.models.metrics import (
    FileMetrics,
    LineComplexity,
    MetricsResult,
    MetricsResults,
)
from results_uploader.models.results import FileError, Issue, ToolResult, ToolResults


class _ReportModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class IssueEntry(_ReportModel):
    kind: Literal["issue"]
    pattern_id: str
    filename: str
    message: str
    level: str = "Info"
    category: str = "CodeStyle"
    line: int
    suggestion: str | None = None


class FileErrorEntry(_ReportModel):
    kind: Literal["fileError"]
    filename: str
    message: str


class ToolEntry(_ReportModel):
    tool: str
    uuid: str | None = None
    filenames: list[str] = Field(default_factory=list)
    results: list[Annotated[IssueEntry | FileErrorEntry, Field(discriminator="kind")]] = Field(
        default_factory=list
    )


class LineComplexityEntry(_ReportModel):
    line: int
    value: int


class FileMetricsEntry(_ReportModel):
    filename: str
    complexity: int | None = None
    loc: int | None = None
    cloc: int | None = None
    nr_methods: int | None = None
    nr_classes: int | None = None
    line_complexities: list[LineComplexityEntry] = Field(default_factory=list)


class MetricsEntry(_ReportModel):
    files: list[FileMetricsEntry] = Field(default_factory=list)
    analysis_error: str | None = None


class LanguageMetricsEntry(_ReportModel):
    language: str
    metrics: list[MetricsEntry] = Field(default_factory=list)


class ReportSchema(_ReportModel):
    tools: list[ToolEntry] = Field(default_factory=list)
    metrics: list[LanguageMetricsEntry] = Field(default_factory=list)


@dataclass
class AnalysisReport:
    """Everything one analysis run produced, ready for upload."""

    tools: list[ToolResults] = field(default_factory=list)
    metrics: list[MetricsResults] = field(default_factory=list)

    @property
    def result_count(self) -> int:
        return sum(len(t.results) for t in self.tools)


def _to_result(entry: IssueEntry | FileErrorEntry) -> ToolResult:
    if isinstance(entry, IssueEntry):
        return Issue(
            pattern_id=entry.pattern_id,
            filename=Path(entry.filename),
            message=entry.message,
            level=entry.level,
            category=entry.category,
            line=entry.line,
            suggestion=entry.suggestion,
        )
    return FileError(filename=Path(entry.filename), message=entry.message)


def _to_file_metrics(entry: FileMetricsEntry) -> FileMetrics:
    return FileMetrics(
        filename=Path(entry.filename),
        complexity=entry.complexity,
        loc=entry.loc,
        cloc=entry.cloc,
        nr_methods=entry.nr_methods,
        nr_classes=entry.nr_classes,
        line_complexities=frozenset(
            LineComplexity(lc.line, lc.value) for lc in entry.line_complexities
        ),
    )


def parse_report(data: object) -> AnalysisReport:
    """Convert already-decoded report JSON into an :class:`AnalysisReport`.

    Raises :class:`pydantic.ValidationError` on schema violations.
    """
    schema = ReportSchema.model_validate(data)
    tools = [
        ToolResults(
            tool=t.tool,
            uuid=t.uuid,
            filenames={Path(f) for f in t.filenames},
            results={_to_result(r) for r in t.results},
        )
        for t in schema.tools
    ]
    metrics = [
        MetricsResults(
            language=m.language,
            metrics={
                MetricsResult(
                    files=frozenset(_to_file_metrics(f) for f in entry.files),
                    analysis_error=entry.analysis_error,
                )
                for entry in m.metrics
            },
        )
        for m in schema.metrics
    ]
    return AnalysisReport(tools=tools, metrics=metrics)


def load_report(path: str | Path) -> AnalysisReport:
    """Read and parse a report file, raising :class:`ReportError` on any problem."""
    path = Path(path)
    try:
        data = json.loads(path.read_text())
    except OSError as exc:
        raise ReportError(f"cannot read report {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ReportError(f"invalid JSON in {path}: {exc}") from exc
    try:
        return parse_report(data)
    except ValidationError as exc:
        raise ReportError(
            f"invalid report {path}: {exc.error_count()} schema error(s)\n{exc}"
        ) from exc
