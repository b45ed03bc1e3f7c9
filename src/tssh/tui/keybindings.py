"""Picker keybindings manager."""

from __future__ import annotations

from typing import Literal

from tssh.tui.keys import KeyId, matches_key

PickerAction = Literal[
    # Session
    "cancel",
    "confirm",
    # Navigation
    "selectUp",
    "selectDown",
    "selectPageUp",
    "selectPageDown",
    "selectStart",
    "selectEnd",
    # Filter editing
    "deleteCharBackward",
    "clearFilter",
]

PickerKeybindingsConfig = dict[PickerAction, KeyId | list[KeyId]]

DEFAULT_PICKER_KEYBINDINGS: dict[PickerAction, KeyId | list[KeyId]] = {
    # Session
    "cancel": ["ctrl+c", "ctrl+q"],
    "confirm": "enter",
    # Navigation (vim aliases shadow typing j/k into the filter)
    "selectUp": ["up", "k"],
    "selectDown": ["down", "j"],
    "selectPageUp": "pageUp",
    "selectPageDown": "pageDown",
    "selectStart": "home",
    "selectEnd": "end",
    # Filter editing
    "deleteCharBackward": "backspace",
    "clearFilter": "escape",
}

# Dispatch order: cancel always wins.
ACTION_PRIORITY: tuple[PickerAction, ...] = (
    "cancel",
    "confirm",
    "selectUp",
    "selectDown",
    "selectPageUp",
    "selectPageDown",
    "selectStart",
    "selectEnd",
    "deleteCharBackward",
    "clearFilter",
)


class PickerKeybindingsManager:
    """Manages keybindings for the node picker."""

    def __init__(
        self, config: PickerKeybindingsConfig | None = None
    ) -> None:
        self._action_to_keys: dict[PickerAction, list[KeyId]] = {}
        self._build_maps(config or {})

    def _build_maps(self, config: PickerKeybindingsConfig) -> None:
        self._action_to_keys.clear()

        for action, keys in DEFAULT_PICKER_KEYBINDINGS.items():
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

        # Override with user config
        for action, keys in config.items():
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

    def matches(self, data: str, action: PickerAction) -> bool:
        """Check if input matches a specific action."""
        keys = self._action_to_keys.get(action)
        if not keys:
            return False
        return any(matches_key(data, key) for key in keys)

    def action_for(self, data: str) -> PickerAction | None:
        """Return the first action (in priority order) bound to *data*."""
        for action in ACTION_PRIORITY:
            if self.matches(data, action):
                return action
        return None

    def get_keys(self, action: PickerAction) -> list[KeyId]:
        """Get keys bound to an action."""
        return self._action_to_keys.get(action, [])

    def set_config(self, config: PickerKeybindingsConfig) -> None:
        """Update configuration."""
        self._build_maps(config)


_global_picker_keybindings: PickerKeybindingsManager | None = None


def get_picker_keybindings() -> PickerKeybindingsManager:
    global _global_picker_keybindings
    if _global_picker_keybindings is None:
        _global_picker_keybindings = PickerKeybindingsManager()
    return _global_picker_keybindings


def set_picker_keybindings(manager: PickerKeybindingsManager) -> None:
    global _global_picker_keybindings
    _global_picker_keybindings = manager
