"""Remote service client and wire schemas."""

from results_uploader.client.base import RemoteClient
from results_uploader.client.codacy_client import CodacyClient
from results_uploader.client.schemas import (
    Parameter,
    ProjectConfiguration,
    ToolConfiguration,
    ToolPattern,
)
from results_uploader.client.tools import KNOWN_TOOL_UUIDS, tool_uuid

__all__ = [
    "KNOWN_TOOL_UUIDS",
    "CodacyClient",
    "Parameter",
    "ProjectConfiguration",
    "RemoteClient",
    "ToolConfiguration",
    "ToolPattern",
    "tool_uuid",
]
