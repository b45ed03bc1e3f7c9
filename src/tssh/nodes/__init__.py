"""tssh.nodes: pick a Tailscale node and ssh into it."""

from tssh.nodes.config import get_config_path, load_preferences, save_preferences
from tssh.nodes.errors import ConfigError, SSHLaunchError, StatusCommandError, TsshError
from tssh.nodes.parser import has_unparsed_output, parse_status, parse_status_line
from tssh.nodes.picker import NodePicker, PickerResult, pick_node
from tssh.nodes.render import DEFAULT_THEME, PLAIN_THEME, PickerTheme, render_picker
from tssh.nodes.selection import NodeSelection
from tssh.nodes.ssh import build_target, ssh_connect
from tssh.nodes.status import fetch_status
from tssh.nodes.types import NodeRecord, Preferences

__all__ = [
    # Types
    "NodeRecord",
    "Preferences",
    # Errors
    "TsshError",
    "StatusCommandError",
    "ConfigError",
    "SSHLaunchError",
    # Parsing
    "parse_status",
    "parse_status_line",
    "has_unparsed_output",
    # Selection / rendering / picker
    "NodeSelection",
    "PickerTheme",
    "DEFAULT_THEME",
    "PLAIN_THEME",
    "render_picker",
    "NodePicker",
    "PickerResult",
    "pick_node",
    # Collaborators
    "fetch_status",
    "build_target",
    "ssh_connect",
    "get_config_path",
    "load_preferences",
    "save_preferences",
]
