"""Tests for loading analysis reports."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from results_uploader.exceptions import ReportError
from results_uploader.models.metrics import LineComplexity
from results_uploader.models.results import FileError, Issue
from results_uploader.report import load_report, parse_report


class TestParseReport:
    def test_tools(self, sample_report):
        report = parse_report(sample_report)
        eslint, rubocop = report.tools
        assert eslint.tool == "eslint"
        assert eslint.uuid == "cf05f3aa-fd23-4586-8cce-5368917ec3e5"
        assert Path("src/clean.js") in eslint.filenames
        assert Issue(
            "ESLint_semi", Path("src/a.js"), "Missing semicolon.", "Warning", "CodeStyle", 3
        ) in eslint.results
        assert FileError(Path("src/b.js"), "Parsing error") in eslint.results
        assert rubocop.uuid is None
        assert rubocop.results == set()
        assert report.result_count == 2

    def test_metrics(self, sample_report):
        report = parse_report(sample_report)
        (js,) = report.metrics
        assert js.language == "JavaScript"
        (result,) = js.metrics
        (fm,) = result.files
        assert fm.filename == Path("src/a.js")
        assert fm.nr_methods == 1
        assert fm.line_complexities == frozenset({LineComplexity(1, 2)})
        assert result.analysis_error is None

    def test_empty_report(self):
        report = parse_report({})
        assert report.tools == []
        assert report.metrics == []

    def test_issue_defaults(self):
        data = {
            "tools": [
                {
                    "tool": "pylint",
                    "results": [
                        {"kind": "issue", "patternId": "C0301", "filename": "a.py",
                         "message": "Line too long", "line": 1}
                    ],
                }
            ]
        }
        (issue,) = parse_report(data).tools[0].results
        assert issue.level == "Info"
        assert issue.category == "CodeStyle"


class TestLoadReport:
    def test_reads_file(self, report_path):
        assert len(load_report(report_path).tools) == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(ReportError, match="cannot read report"):
            load_report(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(ReportError, match="invalid JSON"):
            load_report(path)

    def test_unknown_result_kind(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(
            {"tools": [{"tool": "x", "results": [{"kind": "warning", "filename": "a"}]}]}
        ))
        with pytest.raises(ReportError, match="invalid report"):
            load_report(path)

    def test_missing_required_field(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"metrics": [{"metrics": []}]}))
        with pytest.raises(ReportError, match="schema error"):
            load_report(path)
