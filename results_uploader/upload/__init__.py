"""Upload orchestration: gate, configuration filter, batching and dispatch."""

from results_uploader.upload.batching import plan_batches
from results_uploader.upload.configuration import filter_tool_results, resolve_configuration
from results_uploader.upload.uploader import (
    DEFAULT_BATCH_SIZE,
    ResultsUploader,
    UploadResult,
    create_uploader,
)

__all__ = [
    "DEFAULT_BATCH_SIZE",
    "ResultsUploader",
    "UploadResult",
    "create_uploader",
    "filter_tool_results",
    "plan_batches",
    "resolve_configuration",
]
