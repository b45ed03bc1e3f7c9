"""Tests for tssh.tui.keybindings."""

from __future__ import annotations

import pytest

from tssh.tui.keybindings import (
    DEFAULT_PICKER_KEYBINDINGS,
    PickerKeybindingsManager,
    get_picker_keybindings,
    set_picker_keybindings,
)


class TestDefaultBindings:
    @pytest.mark.parametrize(
        "data,action",
        [
            ("\x03", "cancel"),
            ("\x11", "cancel"),
            ("\r", "confirm"),
            ("\x1b[A", "selectUp"),
            ("k", "selectUp"),
            ("\x1b[B", "selectDown"),
            ("j", "selectDown"),
            ("\x1b[5~", "selectPageUp"),
            ("\x1b[6~", "selectPageDown"),
            ("\x1b[H", "selectStart"),
            ("\x1b[F", "selectEnd"),
            ("\x7f", "deleteCharBackward"),
            ("\x1b", "clearFilter"),
        ],
    )
    def test_action_for(self, data, action):
        assert PickerKeybindingsManager().action_for(data) == action

    def test_unbound_input(self):
        kb = PickerKeybindingsManager()
        assert kb.action_for("a") is None
        assert kb.action_for("K") is None
        assert kb.action_for(" ") is None

    def test_get_keys(self):
        kb = PickerKeybindingsManager()
        assert kb.get_keys("cancel") == ["ctrl+c", "ctrl+q"]
        assert kb.get_keys("confirm") == ["enter"]

    def test_defaults_not_mutated(self):
        kb = PickerKeybindingsManager()
        kb.get_keys("cancel").append("x")
        assert DEFAULT_PICKER_KEYBINDINGS["cancel"] == ["ctrl+c", "ctrl+q"]


class TestOverrides:
    def test_override_replaces_action_keys(self):
        kb = PickerKeybindingsManager({"selectUp": "up"})
        assert kb.action_for("k") is None
        assert kb.action_for("\x1b[A") == "selectUp"

    def test_set_config_rebuilds_from_defaults(self):
        kb = PickerKeybindingsManager({"selectUp": "up"})
        kb.set_config({"confirm": ["enter", "tab"]})
        assert kb.action_for("k") == "selectUp"
        assert kb.action_for("\t") == "confirm"

    def test_cancel_wins_over_other_bindings(self):
        kb = PickerKeybindingsManager({"confirm": ["enter", "ctrl+c"]})
        assert kb.action_for("\x03") == "cancel"

    def test_unbinding_an_action(self):
        kb = PickerKeybindingsManager({"clearFilter": []})
        assert not kb.matches("\x1b", "clearFilter")
        assert kb.action_for("\x1b") is None


class TestGlobalManager:
    def test_get_returns_singleton(self):
        assert get_picker_keybindings() is get_picker_keybindings()

    def test_set_replaces_global(self):
        original = get_picker_keybindings()
        custom = PickerKeybindingsManager({"cancel": "ctrl+x"})
        try:
            set_picker_keybindings(custom)
            assert get_picker_keybindings() is custom
        finally:
            set_picker_keybindings(original)
