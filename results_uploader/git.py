"""Resolve the commit of a local checkout."""

from __future__ import annotations

import subprocess
from pathlib import Path

import structlog

log = structlog.get_logger("results_uploader.git")


def current_commit_uuid(directory: str | Path = ".") -> str | None:
    """Return the HEAD commit SHA of the repository at *directory*, or ``None``."""
    try:
        proc = subprocess.run(
            ["git", "-C", str(directory), "rev-parse", "HEAD"],
            check=True,
            capture_output=True,
            text=True,
            timeout=30,
        )
    except FileNotFoundError:
        log.warning("git.not_installed")
        return None
    except (subprocess.CalledProcessError, subprocess.TimeoutExpired) as exc:
        log.debug("git.rev_parse_failed", directory=str(directory), error=str(exc))
        return None
    sha = proc.stdout.strip()
    return sha or None
