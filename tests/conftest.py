"""Shared fixtures for results_uploader tests. No network access required."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from results_uploader.client.codacy_client import CodacyClient
from results_uploader.client.schemas import ProjectConfiguration, ToolConfiguration, ToolPattern
from results_uploader.client.tools import KNOWN_TOOL_UUIDS
from results_uploader.models.results import FileError, Issue, ToolResults

ESLINT_PATTERNS = ["ESLint_semi", "ESLint_no-undef", "ESLint_indent", "ESLint_no-empty"]


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture
def make_issues():
    """Factory: *count* distinct issues spread over *files* files and the given patterns."""

    def _make(count: int, *, files: int = 7, patterns: list[str] | None = None) -> set[Issue]:
        pats = patterns or ESLINT_PATTERNS
        return {
            Issue(
                pattern_id=pats[i % len(pats)],
                filename=Path(f"src/file{i % files}.js"),
                message=f"problem {i}",
                level="Warning",
                category="CodeStyle",
                line=i + 1,
            )
            for i in range(count)
        }

    return _make


@pytest.fixture
def eslint_configuration():
    """Factory: a project configuration holding only the eslint tool."""

    def _make(
        *,
        enabled: bool = True,
        patterns: list[str] | None = None,
        ignored: list[str] | None = None,
    ) -> ProjectConfiguration:
        return ProjectConfiguration(
            ignored_paths=ignored if ignored is not None else [],
            tool_configuration=[
                ToolConfiguration(
                    uuid=KNOWN_TOOL_UUIDS["eslint"],
                    is_enabled=enabled,
                    not_edited=False,
                    patterns=[
                        ToolPattern(id=p)
                        for p in (ESLINT_PATTERNS if patterns is None else patterns)
                    ],
                )
            ],
        )

    return _make


@pytest.fixture
def client(eslint_configuration) -> AsyncMock:
    """Remote client double: every call succeeds, eslint is enabled."""
    mock = AsyncMock(spec=CodacyClient)
    mock.get_remote_configuration.return_value = eslint_configuration()
    mock.send_remote_results.return_value = None
    mock.send_remote_metrics.return_value = None
    mock.send_end_of_results.return_value = None
    return mock


@pytest.fixture
def eslint_results(make_issues) -> ToolResults:
    issues = make_issues(61)
    return ToolResults(
        tool="eslint",
        uuid=KNOWN_TOOL_UUIDS["eslint"],
        filenames={i.filename for i in issues},
        results=set(issues),
    )


@pytest.fixture
def file_error() -> FileError:
    return FileError(filename=Path("src/broken.js"), message="Parsing error: Unexpected token")


@pytest.fixture
def sample_report() -> dict:
    """An analysis report: eslint findings, an empty rubocop run and JavaScript metrics."""
    return {
        "tools": [
            {
                "tool": "eslint",
                "uuid": "cf05f3aa-fd23-4586-8cce-5368917ec3e5",
                "filenames": ["src/a.js", "src/b.js", "src/clean.js"],
                "results": [
                    {
                        "kind": "issue",
                        "patternId": "ESLint_semi",
                        "filename": "src/a.js",
                        "message": "Missing semicolon.",
                        "level": "Warning",
                        "category": "CodeStyle",
                        "line": 3,
                    },
                    {"kind": "fileError", "filename": "src/b.js", "message": "Parsing error"},
                ],
            },
            {"tool": "rubocop", "filenames": ["lib/x.rb"], "results": []},
        ],
        "metrics": [
            {
                "language": "JavaScript",
                "metrics": [
                    {
                        "files": [
                            {
                                "filename": "src/a.js",
                                "complexity": 2,
                                "loc": 10,
                                "cloc": 1,
                                "nrMethods": 1,
                                "nrClasses": 0,
                                "lineComplexities": [{"line": 1, "value": 2}],
                            }
                        ],
                        "analysisError": None,
                    }
                ],
            }
        ],
    }


@pytest.fixture
def report_path(tmp_path, sample_report) -> Path:
    path = tmp_path / "report.json"
    path.write_text(json.dumps(sample_report))
    return path
