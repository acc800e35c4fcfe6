"""Custom exceptions for the results uploader."""


class UploaderError(Exception):
    """Base exception for all uploader errors."""


class UploadGateError(UploaderError):
    """Raised when an upload is requested but its preconditions are not met."""


class MissingCredentialsError(UploadGateError):
    """Raised when no remote client could be built from the configured credentials."""

    def __init__(self) -> None:
        super().__init__("No credentials found.")


class MissingCommitError(UploadGateError):
    """Raised when the commit to upload results for is unknown."""

    def __init__(self) -> None:
        super().__init__("No commit found.")


class ConfigurationError(UploaderError):
    """Raised when the remote project configuration cannot be fetched."""


class RemoteRequestError(UploaderError):
    """Raised when the remote service answers with a non-2xx status."""

    def __init__(self, method: str, path: str, status_code: int, body: str = ""):
        self.method = method
        self.path = path
        self.status_code = status_code
        self.body = body
        detail = f": {body[:200]}" if body else ""
        super().__init__(f"{method} {path} returned {status_code}{detail}")


class ReportError(UploaderError):
    """Raised when an analysis report cannot be read or parsed."""


class UnknownToolError(UploaderError):
    """Raised when a tool's results cannot be matched to any remote tool configuration."""

    def __init__(self, tool: str):
        self.tool = tool
        super().__init__(f"no remote configuration found for tool {tool!r}")
