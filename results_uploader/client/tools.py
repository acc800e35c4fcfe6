"""Remote identifiers of the analysis tools the uploader knows by name."""

from __future__ import annotations

from collections.abc import Mapping

# Tool name (lowercase) -> uuid of its entry in the remote project configuration.
KNOWN_TOOL_UUIDS: dict[str, str] = {
    "eslint": "cf05f3aa-fd23-4586-8cce-5368917ec3e5",
}


def tool_uuid(name: str, overrides: Mapping[str, str] | None = None) -> str | None:
    """Remote uuid for the tool called *name*, or ``None`` if it is not known.

    *overrides* take precedence over the built-in table. Names are matched
    case-insensitively.
    """
    key = name.strip().lower()
    if overrides:
        for tool, uuid in overrides.items():
            if tool.strip().lower() == key:
                return uuid
    return KNOWN_TOOL_UUIDS.get(key)
