"""ResultsUploader: dispatches one commit's results and metrics to the remote service."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Mapping, Sequence
from dataclasses import dataclass, field

import structlog

from results_uploader.client.base import RemoteClient
from results_uploader.exceptions import (
    ConfigurationError,
    MissingCommitError,
    MissingCredentialsError,
    UnknownToolError,
)
from results_uploader.models.metrics import MetricsResults
from results_uploader.models.results import ToolResults, group_by_file
from results_uploader.upload.batching import plan_batches
from results_uploader.upload.configuration import (
    filter_tool_results,
    is_ignored,
    resolve_configuration,
)

log = structlog.get_logger("results_uploader.upload")

# Stands in for "no limit": every realistic result set fits in one batch.
DEFAULT_BATCH_SIZE = 2**31 - 1


@dataclass
class UploadResult:
    """Summary of a single ``send_results()`` call."""

    commit_uuid: str
    batches_sent: int = 0
    metrics_sent: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def error(self) -> str | None:
        """The first failure, in tool → batch → metrics → end-of-results order."""
        return self.errors[0] if self.errors else None

    @property
    def ok(self) -> bool:
        return not self.errors


def create_uploader(
    client: RemoteClient | None,
    upload: bool,
    commit_uuid: str | None,
    batch_size: int | None = None,
    tool_uuids: Mapping[str, str] | None = None,
) -> ResultsUploader | None:
    """Validate upload preconditions and build an uploader.

    Returns ``None`` when no upload is requested, whatever the other
    arguments are. Raises :class:`MissingCredentialsError` when there is no
    client and :class:`MissingCommitError` when the commit is unknown.
    """
    if not upload:
        return None
    if client is None:
        raise MissingCredentialsError()
    if not commit_uuid:
        raise MissingCommitError()
    effective = batch_size if batch_size is not None and batch_size > 0 else DEFAULT_BATCH_SIZE
    return ResultsUploader(client, commit_uuid, effective, tool_uuids)


class ResultsUploader:
    """Uploads the results of one commit, then signals the end of the session."""

    def __init__(
        self,
        client: RemoteClient,
        commit_uuid: str,
        batch_size: int,
        tool_uuids: Mapping[str, str] | None = None,
    ) -> None:
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self._client = client
        self._commit_uuid = commit_uuid
        self._batch_size = batch_size
        self._tool_uuids = dict(tool_uuids or {})

    @property
    def commit_uuid(self) -> str:
        return self._commit_uuid

    @property
    def batch_size(self) -> int:
        return self._batch_size

    async def send_results(
        self,
        tool_results: Sequence[ToolResults],
        metrics_results: Sequence[MetricsResults],
    ) -> UploadResult:
        """Upload every tool's results and every language's metrics.

        1. Fetch the remote configuration once
        2. Filter and batch each tool's results; one call per batch
        3. One call per metrics entry
        4. Run all calls concurrently and wait for every one of them
        5. Send the end-of-results signal exactly once

        Failures never cancel sibling calls; they are collected into
        ``UploadResult.errors`` in a stable order.
        """
        result = UploadResult(commit_uuid=self._commit_uuid)
        log.info(
            "upload.start",
            commit=self._commit_uuid,
            tools=len(tool_results),
            languages=len(metrics_results),
            batch_size=self._batch_size,
        )

        try:
            configuration = await resolve_configuration(self._client)
        except ConfigurationError as exc:
            log.error("upload.configuration_failed", commit=self._commit_uuid, error=str(exc))
            result.errors.append(str(exc))
            await self._end_of_results(result)
            return result

        labels: list[str] = []
        # Per label: the error raised before dispatch, or None when a call was queued.
        early: list[Exception | None] = []
        calls: list[Awaitable[None]] = []

        for tool in tool_results:
            if not tool.results:
                log.debug("upload.tool_skipped", tool=tool.tool, reason="no results")
                continue
            try:
                kept = filter_tool_results(tool, configuration, self._tool_uuids)
            except UnknownToolError as exc:
                log.error(
                    "upload.tool_unknown",
                    commit=self._commit_uuid,
                    tool=tool.tool,
                    dropped=len(tool.results),
                )
                labels.append(f"results for {tool.tool}")
                early.append(exc)
                continue
            batches = plan_batches(kept, self._batch_size)
            if not batches:
                log.debug("upload.tool_skipped", tool=tool.tool, reason="all results filtered")
                continue
            clean_files = {
                f
                for f in tool.filenames
                if not is_ignored(f, configuration.ignored_paths)
            } - {r.filename for r in kept}
            for index, batch in enumerate(batches, start=1):
                is_last = index == len(batches)
                labels.append(f"results for {tool.tool} (batch {index}/{len(batches)})")
                early.append(None)
                calls.append(
                    self._client.send_remote_results(
                        tool.tool,
                        self._commit_uuid,
                        group_by_file(batch, clean_files if is_last else None),
                    )
                )
            result.batches_sent += len(batches)

        for metrics in metrics_results:
            labels.append(f"metrics for {metrics.language}")
            early.append(None)
            calls.append(
                self._client.send_remote_metrics(
                    metrics.language, self._commit_uuid, metrics.metrics
                )
            )
            result.metrics_sent += 1

        gathered = iter(await asyncio.gather(*calls, return_exceptions=True))
        outcomes = [exc if exc is not None else next(gathered) for exc in early]

        for label, outcome in zip(labels, outcomes, strict=True):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                err = f"{label} failed: {type(outcome).__name__}: {outcome}"
                log.error(
                    "upload.call_failed",
                    commit=self._commit_uuid,
                    call=label,
                    error=str(outcome),
                )
                result.errors.append(err)

        await self._end_of_results(result)
        log.info(
            "upload.done",
            commit=self._commit_uuid,
            batches=result.batches_sent,
            metrics=result.metrics_sent,
            errors=len(result.errors),
        )
        return result

    async def _end_of_results(self, result: UploadResult) -> None:
        try:
            await self._client.send_end_of_results(self._commit_uuid)
        except Exception as exc:
            log.error("upload.end_of_results_failed", commit=self._commit_uuid, error=str(exc))
            result.errors.append(f"end of results failed: {type(exc).__name__}: {exc}")
