"""Data models for tool findings produced by the analysis pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Union


@dataclass(frozen=True)
class Issue:
    """A finding reported by a tool at a file/line."""

    pattern_id: str
    filename: Path
    message: str
    level: str  # "Error" | "Warning" | "Info"
    category: str
    line: int
    suggestion: str | None = None

    def sort_key(self) -> tuple[str, int, int, str, str]:
        return (self.filename.as_posix(), 0, self.line, self.pattern_id, self.message)


@dataclass(frozen=True)
class FileError:
    """A tool failure on a single file."""

    filename: Path
    message: str

    def sort_key(self) -> tuple[str, int, int, str, str]:
        return (self.filename.as_posix(), 1, 0, "", self.message)


ToolResult = Union[Issue, FileError]


@dataclass(frozen=True)
class FileResults:
    """All results of one tool for a single file, the unit sent per batch entry."""

    filename: Path
    results: frozenset[ToolResult] = frozenset()


@dataclass
class ToolResults:
    """One tool's findings for the whole analyzed project.

    ``filenames`` is every file the tool analyzed, which may include files
    that have no entry in ``results``.
    """

    tool: str
    filenames: set[Path] = field(default_factory=set)
    results: set[ToolResult] = field(default_factory=set)
    uuid: str | None = None  # remote tool id, when known


def group_by_file(results: list[ToolResult], clean_files: set[Path] | None = None) -> set[FileResults]:
    """Group *results* per filename, adding an empty entry for each of *clean_files*."""
    by_file: dict[Path, set[ToolResult]] = {}
    for result in results:
        by_file.setdefault(result.filename, set()).add(result)
    for filename in clean_files or ():
        by_file.setdefault(filename, set())
    return {FileResults(filename, frozenset(items)) for filename, items in by_file.items()}
