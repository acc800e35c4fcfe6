"""Upload static-analysis results and metrics for a commit to a remote service."""

from results_uploader.exceptions import (
    ConfigurationError,
    MissingCommitError,
    MissingCredentialsError,
    RemoteRequestError,
    ReportError,
    UploaderError,
    UploadGateError,
)
from results_uploader.upload.uploader import (
    DEFAULT_BATCH_SIZE,
    ResultsUploader,
    UploadResult,
    create_uploader,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_BATCH_SIZE",
    "ConfigurationError",
    "MissingCommitError",
    "MissingCredentialsError",
    "RemoteRequestError",
    "ReportError",
    "ResultsUploader",
    "UploadGateError",
    "UploadResult",
    "UploaderError",
    "create_uploader",
]
