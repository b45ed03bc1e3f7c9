"""tssh.tui: raw-mode terminal plumbing for the node picker."""

# Keybindings
from tssh.tui.keybindings import (
    DEFAULT_PICKER_KEYBINDINGS,
    PickerAction,
    PickerKeybindingsConfig,
    PickerKeybindingsManager,
    get_picker_keybindings,
    set_picker_keybindings,
)

# Keyboard input handling
from tssh.tui.keys import (
    Key,
    KeyId,
    is_printable_input,
    matches_key,
    normalize_key_id,
    parse_key,
)

# Input buffering
from tssh.tui.stdin_buffer import StdinBuffer

# Terminal interface and implementations
from tssh.tui.terminal import ProcessTerminal, Terminal

# Utilities
from tssh.tui.utils import pad_to_width, strip_ansi, truncate_to_width, visible_width

__all__ = [
    # Keybindings
    "DEFAULT_PICKER_KEYBINDINGS",
    "PickerAction",
    "PickerKeybindingsConfig",
    "PickerKeybindingsManager",
    "get_picker_keybindings",
    "set_picker_keybindings",
    # Keys
    "Key",
    "KeyId",
    "is_printable_input",
    "matches_key",
    "normalize_key_id",
    "parse_key",
    # Input buffering
    "StdinBuffer",
    # Terminal
    "ProcessTerminal",
    "Terminal",
    # Utils
    "pad_to_width",
    "strip_ansi",
    "truncate_to_width",
    "visible_width",
]
