"""Keyboard input decoding for the raw-mode picker.

Turns a single complete terminal input sequence (as emitted by
:class:`~tssh.tui.stdin_buffer.StdinBuffer`) into a key identifier such as
``"up"``, ``"ctrl+c"``, ``"shift+pageUp"`` or ``"a"``.  Only the legacy
xterm/VT encodings are handled; the terminal never opts into the kitty
keyboard protocol.
"""

from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# Type alias
# ---------------------------------------------------------------------------

KeyId = str


# ---------------------------------------------------------------------------
# Key helper object
# ---------------------------------------------------------------------------


class Key:
    """Named key constants and modifier combinators."""

    escape = "escape"
    enter = "enter"
    tab = "tab"
    space = "space"
    backspace = "backspace"
    delete = "delete"
    insert = "insert"
    home = "home"
    end = "end"
    page_up = "pageUp"
    page_down = "pageDown"
    up = "up"
    down = "down"
    left = "left"
    right = "right"

    @staticmethod
    def ctrl(key: str) -> str:
        return f"ctrl+{key}"

    @staticmethod
    def shift(key: str) -> str:
        return f"shift+{key}"

    @staticmethod
    def alt(key: str) -> str:
        return f"alt+{key}"


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

MODIFIERS: dict[str, int] = {
    "shift": 1,
    "alt": 2,
    "ctrl": 4,
}

# Unmodified legacy escape sequences -> key names
LEGACY_KEY_SEQUENCES: dict[str, str] = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1b[H": "home",
    "\x1b[F": "end",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\x1bOH": "home",
    "\x1bOF": "end",
    "\x1b[1~": "home",
    "\x1b[2~": "insert",
    "\x1b[3~": "delete",
    "\x1b[4~": "end",
    "\x1b[5~": "pageUp",
    "\x1b[6~": "pageDown",
    "\x1b[7~": "home",
    "\x1b[8~": "end",
    "\x1b[Z": "shift+tab",
}

# Final byte of ``CSI 1;<mod> X`` sequences
_CSI_LETTER_KEYS: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
    "H": "home",
    "F": "end",
}

# Number of ``CSI <n>;<mod> ~`` sequences
_CSI_TILDE_KEYS: dict[int, str] = {
    1: "home",
    2: "insert",
    3: "delete",
    4: "end",
    5: "pageUp",
    6: "pageDown",
    7: "home",
    8: "end",
}

_MODIFIED_LETTER_RE = re.compile(r"^\x1b\[1;(\d+)([ABCDHF])$")
_MODIFIED_TILDE_RE = re.compile(r"^\x1b\[(\d+);(\d+)~$")


def _modifier_prefix(modifier: int) -> str:
    """Return the ``ctrl+shift+alt+`` style prefix for an xterm modifier param."""
    mod = modifier - 1
    prefix = ""
    if mod & MODIFIERS["ctrl"]:
        prefix += "ctrl+"
    if mod & MODIFIERS["shift"]:
        prefix += "shift+"
    if mod & MODIFIERS["alt"]:
        prefix += "alt+"
    return prefix


def _parse_modified_sequence(data: str) -> str | None:
    match = _MODIFIED_LETTER_RE.match(data)
    if match:
        return _modifier_prefix(int(match.group(1))) + _CSI_LETTER_KEYS[match.group(2)]

    match = _MODIFIED_TILDE_RE.match(data)
    if match:
        key_name = _CSI_TILDE_KEYS.get(int(match.group(1)))
        if key_name is None:
            return None
        return _modifier_prefix(int(match.group(2))) + key_name

    return None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_key(data: str) -> str | None:  # noqa: C901
    """Parse raw terminal input and return the key identifier, or ``None``.

    The returned string uses the same format ``matches_key`` expects:
    e.g. ``"a"``, ``"ctrl+a"``, ``"alt+b"``, ``"pageUp"``.
    """
    if not data:
        return None

    # --- Escape sequences ---
    if data in LEGACY_KEY_SEQUENCES:
        return LEGACY_KEY_SEQUENCES[data]

    modified = _parse_modified_sequence(data)
    if modified is not None:
        return modified

    # --- Simple single-byte keys ---
    if data == "\x1b":
        return "escape"
    if data == "\r" or data == "\n":
        return "enter"
    if data == "\t":
        return "tab"
    if data == " ":
        return "space"
    if data == "\x7f" or data == "\x08":
        return "backspace"
    if data == "\x00":
        return "ctrl+space"

    # --- Ctrl + letter (0x01 - 0x1a) ---
    if len(data) == 1 and 1 <= ord(data) <= 26:
        return "ctrl+" + chr(ord(data) + ord("a") - 1)

    # --- Alt + key (ESC prefix) ---
    if len(data) == 2 and data[0] == "\x1b":
        ch = data[1]
        if ch == "\r" or ch == "\n":
            return "alt+enter"
        if ch == "\x7f" or ch == "\x08":
            return "alt+backspace"
        if 1 <= ord(ch) <= 26:
            return "ctrl+alt+" + chr(ord(ch) + ord("a") - 1)
        if ch.isprintable():
            return "alt+" + ch.lower()

    # --- Plain printable character ---
    if len(data) == 1 and data.isprintable():
        return data

    return None


def normalize_key_id(key_id: str) -> str:
    """Normalize modifier order and case so ids can be compared directly.

    ``"Shift+Ctrl+Up"`` becomes ``"ctrl+shift+up"``.  Named keys keep their
    camel-case spelling (``pageUp``), single characters keep their case.
    """
    parts = key_id.split("+")
    if len(parts) > 1 and parts[-1] == "" and parts[-2] == "":
        # "ctrl++" style: the key itself is "+"
        parts = parts[:-2] + ["+"]
    base = parts[-1]
    mods = {p.lower() for p in parts[:-1]}

    lowered = base.lower()
    if lowered == "pageup":
        base = "pageUp"
    elif lowered == "pagedown":
        base = "pageDown"
    elif lowered == "esc":
        base = "escape"
    elif lowered == "return":
        base = "enter"
    elif len(base) > 1:
        base = lowered

    prefix = "".join(f"{m}+" for m in ("ctrl", "shift", "alt") if m in mods)
    return prefix + base


def matches_key(data: str, key_id: KeyId) -> bool:
    """Return ``True`` if raw input *data* is the key described by *key_id*."""
    parsed = parse_key(data)
    if parsed is None:
        return False
    return parsed == normalize_key_id(key_id)


def is_printable_input(data: str) -> bool:
    """Return ``True`` for input that should be typed into a text field."""
    return len(data) == 1 and data.isprintable()
