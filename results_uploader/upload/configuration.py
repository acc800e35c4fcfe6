"""Remote project configuration: fetch once, filter results before batching."""

from __future__ import annotations

from collections.abc import Mapping
from fnmatch import fnmatch
from pathlib import Path

import structlog

from results_uploader.client.base import RemoteClient
from results_uploader.client.schemas import ProjectConfiguration, ToolConfiguration
from results_uploader.client.tools import tool_uuid
from results_uploader.exceptions import ConfigurationError, UnknownToolError
from results_uploader.models.results import Issue, ToolResult, ToolResults

log = structlog.get_logger("results_uploader.upload")


async def resolve_configuration(client: RemoteClient) -> ProjectConfiguration:
    """Fetch the project configuration, wrapping any failure in :class:`ConfigurationError`."""
    try:
        return await client.get_remote_configuration()
    except Exception as exc:
        raise ConfigurationError(
            f"failed to fetch remote configuration: {type(exc).__name__}: {exc}"
        ) from exc


def is_ignored(filename: Path, ignored_paths: list[str] | None) -> bool:
    """True if *filename* matches an ignored glob or sits under an ignored directory."""
    if not ignored_paths:
        return False
    path = filename.as_posix()
    for pattern in ignored_paths:
        pattern = pattern.strip().lstrip("/")
        if not pattern:
            continue
        if fnmatch(path, pattern) or path.startswith(pattern.rstrip("/") + "/"):
            return True
    return False


def find_tool_configuration(
    tool_results: ToolResults,
    configuration: ProjectConfiguration,
    tool_uuids: Mapping[str, str] | None = None,
) -> ToolConfiguration:
    """Find the remote configuration entry for a tool's results.

    Tried in order: the uuid carried by the results, the uuid registered for
    the tool's name (*tool_uuids* first, then the known tools), and the name
    itself. Raises :class:`UnknownToolError` when none of them matches.
    """
    tool_config = configuration.tool(
        tool_results.uuid,
        tool_uuid(tool_results.tool, tool_uuids),
        tool_results.tool,
    )
    if tool_config is None:
        raise UnknownToolError(tool_results.tool)
    return tool_config


def filter_tool_results(
    tool_results: ToolResults,
    configuration: ProjectConfiguration,
    tool_uuids: Mapping[str, str] | None = None,
) -> list[ToolResult]:
    """Keep the results the remote configuration enables, in a stable order.

    A disabled tool keeps nothing, and a tool missing from the configuration
    raises :class:`UnknownToolError`. When the tool lists patterns, issues of
    other patterns are dropped; file errors are always kept. Results under
    ignored paths are dropped.
    """
    tool_config = find_tool_configuration(tool_results, configuration, tool_uuids)
    if not tool_config.is_enabled:
        log.info(
            "upload.tool_disabled",
            tool=tool_results.tool,
            dropped=len(tool_results.results),
        )
        return []

    enabled_patterns = {p.id for p in tool_config.patterns}
    kept: list[ToolResult] = []
    for result in tool_results.results:
        if is_ignored(result.filename, configuration.ignored_paths):
            continue
        if isinstance(result, Issue) and enabled_patterns and result.pattern_id not in enabled_patterns:
            continue
        kept.append(result)

    if len(kept) != len(tool_results.results):
        log.debug(
            "upload.results_filtered",
            tool=tool_results.tool,
            kept=len(kept),
            dropped=len(tool_results.results) - len(kept),
        )
    kept.sort(key=lambda r: r.sort_key())
    return kept
