"""Async client for the Codacy results API."""

from __future__ import annotations

from typing import Any

import httpx
import structlog
from pydantic import BaseModel

from results_uploader.client.schemas import (
    ProjectConfiguration,
    language_metrics_payload,
    tool_issues_payload,
)
from results_uploader.core.settings import UploadSettings
from results_uploader.exceptions import RemoteRequestError
from results_uploader.models.metrics import MetricsResult
from results_uploader.models.results import FileResults

log = structlog.get_logger("results_uploader.client")


class CodacyClient:
    """Thin async wrapper around the remote results endpoints.

    Authenticates either with a project token (paths under ``/2.0/``) or with
    an API token scoped to ``/2.0/{username}/{project}/``. Requests are not
    retried; any non-2xx reply raises :class:`RemoteRequestError`.
    """

    def __init__(
        self,
        base_url: str,
        *,
        project_token: str | None = None,
        api_token: str | None = None,
        username: str | None = None,
        project_name: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers: dict[str, str] = {"Accept": "application/json"}
        if project_token:
            headers["project-token"] = project_token
            self._prefix = "/2.0"
        elif api_token and username and project_name:
            headers["api-token"] = api_token
            self._prefix = f"/2.0/{username}/{project_name}"
        else:
            raise ValueError("a project token, or an api token with username and project, is required")
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: UploadSettings) -> CodacyClient | None:
        """Build a client from *settings*, or ``None`` if no credentials are configured."""
        if settings.project_token:
            return cls(
                settings.api_base_url,
                project_token=settings.project_token,
                timeout=settings.request_timeout,
            )
        if settings.has_api_credentials:
            return cls(
                settings.api_base_url,
                api_token=settings.api_token,
                username=settings.username,
                project_name=settings.project_name,
                timeout=settings.request_timeout,
            )
        return None

    # ── lifecycle ──────────────────────────────────────────────────────────

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> CodacyClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    # ── remote operations ──────────────────────────────────────────────────

    async def get_remote_configuration(self) -> ProjectConfiguration:
        response = await self._request("GET", f"{self._prefix}/analysis/configuration")
        return ProjectConfiguration.model_validate(response.json())

    async def send_remote_results(
        self, tool: str, commit_uuid: str, batch: set[FileResults]
    ) -> None:
        payload = tool_issues_payload(tool, batch)
        await self._post(f"{self._commit_path(commit_uuid)}/issuesRemoteResults", [payload])

    async def send_remote_metrics(
        self, language: str, commit_uuid: str, metrics: set[MetricsResult]
    ) -> None:
        payload = language_metrics_payload(language, metrics)
        await self._post(f"{self._commit_path(commit_uuid)}/metricsRemoteResults", [payload])

    async def send_end_of_results(self, commit_uuid: str) -> None:
        await self._request("POST", f"{self._commit_path(commit_uuid)}/resultsFinal")

    # ── internal ───────────────────────────────────────────────────────────

    def _commit_path(self, commit_uuid: str) -> str:
        return f"{self._prefix}/commit/{commit_uuid}"

    async def _post(self, path: str, models: list[BaseModel]) -> httpx.Response:
        body = [m.model_dump(mode="json", by_alias=True) for m in models]
        return await self._request("POST", path, json=body)

    async def _request(self, method: str, path: str, json: Any = None) -> httpx.Response:
        response = await self._client.request(method, path, json=json)
        log.debug("client.request", method=method, path=path, status=response.status_code)
        if response.is_success:
            return response
        raise RemoteRequestError(method, path, response.status_code, response.text)
