"""Core type definitions for tssh."""

from __future__ import annotations

from dataclasses import dataclass

ACTIVE_MARKER = "active"


@dataclass(frozen=True)
class NodeRecord:
    name: str
    address: str
    suggested_user: str = ""
    status: str = ""

    @property
    def is_active(self) -> bool:
        """Whether the status text marks the node as reachable."""
        return ACTIVE_MARKER in self.status


@dataclass
class Preferences:
    default_username: str = ""
    last_node: str | None = None


def preferences_from_dict(data: dict) -> Preferences:
    """Deserialize Preferences from a JSON-compatible dict."""
    default_username = data.get("default_username") or ""
    last_node = data.get("last_node") or None
    if not isinstance(default_username, str):
        default_username = ""
    if not isinstance(last_node, str):
        last_node = None
    return Preferences(default_username=default_username, last_node=last_node)


def preferences_to_dict(prefs: Preferences) -> dict:
    """Serialize Preferences to a JSON-compatible dict."""
    return {
        "default_username": prefs.default_username,
        "last_node": prefs.last_node,
    }
