"""Structured logging for the CLI: structlog events rendered through stdlib logging on stderr."""

from __future__ import annotations

import logging
import os
import sys

import structlog

_PROCESSORS: list[structlog.types.Processor] = [
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
    structlog.processors.format_exc_info,
]


def setup_logging(level: str | None = None) -> None:
    """Route structlog events to stderr, so the CLI summary on stdout stays clean.

    Reads from environment variables:
        RESULTS_UPLOADER_LOG_LEVEL  - log level (default: INFO), *level* wins if given
        RESULTS_UPLOADER_LOG_FORMAT - console | json (default: console)
    """
    log_level = (level or os.environ.get("RESULTS_UPLOADER_LOG_LEVEL", "INFO")).upper()
    if os.environ.get("RESULTS_UPLOADER_LOG_FORMAT", "console").lower() == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[*_PROCESSORS, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_PROCESSORS,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(log_level)
    # httpx logs every request at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)
