"""Remote service schemas: project configuration and upload payloads."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from results_uploader.models.metrics import FileMetrics, MetricsResult
from results_uploader.models.results import FileError, FileResults, Issue, ToolResult


class _RemoteModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# ── project configuration ─────────────────────────────────────────────────


class Parameter(_RemoteModel):
    name: str
    value: Any = None


class ToolPattern(_RemoteModel):
    id: str
    parameters: list[Parameter] = Field(default_factory=list)


class ToolConfiguration(_RemoteModel):
    uuid: str
    is_enabled: bool
    not_edited: bool = False
    patterns: list[ToolPattern] = Field(default_factory=list)


class ProjectConfiguration(_RemoteModel):
    """Remote-side enablement state of a project."""

    project_extensions: list[Any] = Field(default_factory=list)
    ignored_paths: list[str] | None = None
    project_tool_ids: list[str] = Field(default_factory=list)
    tool_configuration: list[ToolConfiguration] = Field(default_factory=list)

    def tool(self, *keys: str | None) -> ToolConfiguration | None:
        """Return the configuration matching the first of *keys* that has one."""
        by_uuid = {tool.uuid: tool for tool in self.tool_configuration}
        for key in keys:
            if key and key in by_uuid:
                return by_uuid[key]
        return None


# ── result payloads ───────────────────────────────────────────────────────


class IssuePayload(_RemoteModel):
    pattern_id: str
    filename: str
    message: str
    level: str
    category: str
    line: int
    suggestion: str | None = None


class FileErrorPayload(_RemoteModel):
    filename: str
    message: str


class FileResultsPayload(_RemoteModel):
    filename: str
    results: list[IssuePayload | FileErrorPayload]


class ToolIssuesPayload(_RemoteModel):
    """``{"tool": ..., "issues": {"Success": {"results": [...]}}}``."""

    tool: str
    issues: dict[str, dict[str, list[FileResultsPayload]]]


class LineComplexityPayload(_RemoteModel):
    line: int
    value: int


class FileMetricsPayload(_RemoteModel):
    filename: str
    complexity: int | None = None
    loc: int | None = None
    cloc: int | None = None
    nr_methods: int | None = None
    nr_classes: int | None = None
    line_complexities: list[LineComplexityPayload] = Field(default_factory=list)


class MetricsResultPayload(_RemoteModel):
    files: list[FileMetricsPayload]
    analysis_error: str | None = None


class LanguageMetricsPayload(_RemoteModel):
    language: str
    metrics: list[MetricsResultPayload]


# ── domain → payload ──────────────────────────────────────────────────────


def _result_payload(result: ToolResult) -> IssuePayload | FileErrorPayload:
    if isinstance(result, Issue):
        return IssuePayload(
            pattern_id=result.pattern_id,
            filename=result.filename.as_posix(),
            message=result.message,
            level=result.level,
            category=result.category,
            line=result.line,
            suggestion=result.suggestion,
        )
    if isinstance(result, FileError):
        return FileErrorPayload(filename=result.filename.as_posix(), message=result.message)
    raise TypeError(f"unsupported tool result: {type(result).__name__}")


def tool_issues_payload(tool: str, batch: set[FileResults]) -> ToolIssuesPayload:
    """Build the results body for one batch, entries sorted by filename."""
    files = [
        FileResultsPayload(
            filename=fr.filename.as_posix(),
            results=[_result_payload(r) for r in sorted(fr.results, key=lambda r: r.sort_key())],
        )
        for fr in sorted(batch, key=lambda fr: fr.filename.as_posix())
    ]
    return ToolIssuesPayload(tool=tool, issues={"Success": {"results": files}})


def _file_metrics_payload(fm: FileMetrics) -> FileMetricsPayload:
    return FileMetricsPayload(
        filename=fm.filename.as_posix(),
        complexity=fm.complexity,
        loc=fm.loc,
        cloc=fm.cloc,
        nr_methods=fm.nr_methods,
        nr_classes=fm.nr_classes,
        line_complexities=[
            LineComplexityPayload(line=lc.line, value=lc.value)
            for lc in sorted(fm.line_complexities, key=lambda lc: (lc.line, lc.value))
        ],
    )


def language_metrics_payload(language: str, metrics: set[MetricsResult]) -> LanguageMetricsPayload:
    """Build the metrics body for one language, files sorted by filename."""
    results = [
        MetricsResultPayload(
            files=[
                _file_metrics_payload(fm)
                for fm in sorted(mr.files, key=lambda fm: fm.filename.as_posix())
            ],
            analysis_error=mr.analysis_error,
        )
        for mr in metrics
    ]
    results.sort(key=lambda m: ([f.filename for f in m.files], m.analysis_error or ""))
    return LanguageMetricsPayload(language=language, metrics=results)
