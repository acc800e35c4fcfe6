"""Remote client contract used by the uploader.

Any object with these four coroutines can stand in for the service: the
httpx-backed :class:`~results_uploader.client.codacy_client.CodacyClient`
in production, ``AsyncMock`` doubles in tests. Failures are signalled by
raising.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from results_uploader.client.schemas import ProjectConfiguration
from results_uploader.models.metrics import MetricsResult
from results_uploader.models.results import FileResults


@runtime_checkable
class RemoteClient(Protocol):
    async def send_remote_results(
        self, tool: str, commit_uuid: str, batch: set[FileResults]
    ) -> None: ...

    async def send_remote_metrics(
        self, language: str, commit_uuid: str, metrics: set[MetricsResult]
    ) -> None: ...

    async def get_remote_configuration(self) -> ProjectConfiguration: ...

    async def send_end_of_results(self, commit_uuid: str) -> None: ...
