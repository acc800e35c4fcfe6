"""Environment-driven settings for the uploader."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_API_BASE_URL = "https://api.codacy.com"


def _env_str(key: str) -> str | None:
    value = os.environ.get(key, "").strip()
    return value or None


def _env_float(key: str, default: float) -> float:
    raw = os.environ.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{key} must be a number, got {raw!r}") from None


def _env_int(key: str) -> int | None:
    raw = os.environ.get(key)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None


def _env_mapping(key: str) -> dict[str, str]:
    """Parse a `name=value,name=value` variable."""
    raw = os.environ.get(key, "")
    mapping: dict[str, str] = {}
    for entry in raw.split(","):
        if not entry.strip():
            continue
        name, sep, value = entry.partition("=")
        if not sep or not name.strip() or not value.strip():
            raise ValueError(f"{key} entries must look like name=value, got {entry.strip()!r}")
        mapping[name.strip()] = value.strip()
    return mapping


@dataclass(frozen=True)
class UploadSettings:
    """Service location, credentials and limits for one upload run."""

    api_base_url: str = DEFAULT_API_BASE_URL
    project_token: str | None = None
    api_token: str | None = None
    username: str | None = None
    project_name: str | None = None
    commit_uuid: str | None = None
    batch_size: int | None = None
    request_timeout: float = 30.0
    upload_timeout: float = 600.0
    tool_uuids: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_env(cls) -> UploadSettings:
        """Read settings from environment variables.

        Reads:
            CODACY_API_BASE_URL        - service root (default: https://api.codacy.com)
            CODACY_PROJECT_TOKEN       - project-token credentials
            CODACY_API_TOKEN, CODACY_USERNAME, CODACY_PROJECT_NAME - api-token credentials
            CODACY_COMMIT_UUID         - commit to upload for
            RESULTS_UPLOADER_BATCH_SIZE       - results per request (default: unbounded)
            RESULTS_UPLOADER_REQUEST_TIMEOUT  - seconds per request (default: 30)
            RESULTS_UPLOADER_TIMEOUT          - seconds for the whole upload (default: 600)
            RESULTS_UPLOADER_TOOL_UUIDS       - extra tool uuids, as name=uuid,name=uuid
        """
        return cls(
            api_base_url=(_env_str("CODACY_API_BASE_URL") or DEFAULT_API_BASE_URL).rstrip("/"),
            project_token=_env_str("CODACY_PROJECT_TOKEN"),
            api_token=_env_str("CODACY_API_TOKEN"),
            username=_env_str("CODACY_USERNAME"),
            project_name=_env_str("CODACY_PROJECT_NAME"),
            commit_uuid=_env_str("CODACY_COMMIT_UUID"),
            batch_size=_env_int("RESULTS_UPLOADER_BATCH_SIZE"),
            request_timeout=_env_float("RESULTS_UPLOADER_REQUEST_TIMEOUT", 30.0),
            upload_timeout=_env_float("RESULTS_UPLOADER_TIMEOUT", 600.0),
            tool_uuids=_env_mapping("RESULTS_UPLOADER_TOOL_UUIDS"),
        )

    @property
    def has_api_credentials(self) -> bool:
        return bool(self.api_token and self.username and self.project_name)
