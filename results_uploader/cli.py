"""CLI entry point: results-upload.

Usage:
    results-upload report.json                       # upload for HEAD of the cwd checkout
    results-upload report.json --commit-uuid <sha>   # upload for a given commit
    results-upload report.json --no-upload           # validate the report only
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click
import structlog

from results_uploader.client.codacy_client import CodacyClient
from results_uploader.core.logging import setup_logging
from results_uploader.core.settings import UploadSettings
from results_uploader.exceptions import ReportError, UploadGateError
from results_uploader.git import current_commit_uuid
from results_uploader.report import AnalysisReport, load_report
from results_uploader.upload.uploader import UploadResult, create_uploader

log = structlog.get_logger("results_uploader.cli")


async def _upload(
    settings: UploadSettings,
    report: AnalysisReport,
    commit_uuid: str | None,
    batch_size: int | None,
    timeout: float,
) -> UploadResult:
    client = CodacyClient.from_settings(settings)
    try:
        uploader = create_uploader(
            client, True, commit_uuid, batch_size, tool_uuids=settings.tool_uuids
        )
        if uploader is None:
            raise RuntimeError("create_uploader returned no uploader for a requested upload")
        return await asyncio.wait_for(
            uploader.send_results(report.tools, report.metrics), timeout=timeout
        )
    finally:
        if client is not None:
            await client.close()


@click.command()
@click.argument("report_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--commit-uuid", default=None, help="Commit to upload results for")
@click.option("--batch-size", type=int, default=None, help="Results per request (<= 0: no limit)")
@click.option("--upload/--no-upload", default=True, help="Send results to the remote service")
@click.option(
    "--directory",
    type=click.Path(file_okay=False),
    default=".",
    help="Checkout used to discover the commit",
)
@click.option("--timeout", type=float, default=None, help="Seconds to wait for the whole upload")
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(
    report_file: str,
    commit_uuid: str | None,
    batch_size: int | None,
    upload: bool,
    directory: str,
    timeout: float | None,
    verbose: bool,
) -> None:
    """Upload an analysis report's issues and metrics for one commit."""
    setup_logging("DEBUG" if verbose else None)

    try:
        settings = UploadSettings.from_env()
        report = load_report(report_file)
    except (ValueError, ReportError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if not upload:
        click.echo(
            f"Upload not requested: {report.result_count} results from "
            f"{len(report.tools)} tool(s) left local."
        )
        return

    commit = commit_uuid or settings.commit_uuid or current_commit_uuid(Path(directory))
    size = batch_size if batch_size is not None else settings.batch_size
    wait = timeout if timeout is not None else settings.upload_timeout

    try:
        result = asyncio.run(_upload(settings, report, commit, size, wait))
    except UploadGateError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except asyncio.TimeoutError:
        click.echo(f"Error: upload did not finish within {wait:g}s", err=True)
        sys.exit(1)

    if not result.ok:
        for err in result.errors:
            log.debug("cli.upload_error", error=err)
        click.echo(f"Error: {result.error}", err=True)
        sys.exit(1)

    click.echo(f"\nUploaded results for commit {result.commit_uuid}:")
    click.echo(f"  Result batches: {result.batches_sent}")
    click.echo(f"  Metrics payloads: {result.metrics_sent}")
