"""Terminal text utilities: ANSI stripping and display-width measurement.

Column layout in the picker is done in terminal cells, not code points, so
that wide (CJK, emoji) host names keep the address and status columns
aligned.
"""

from __future__ import annotations

import re

import grapheme
import wcwidth as _wcwidth

# CSI sequences: ESC[ <params> <final byte>
_ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")

# ---------------------------------------------------------------------------
# Width cache (capped at 512 entries)
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cache_width(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


def strip_ansi(text: str) -> str:
    """Remove CSI escape sequences from *text*."""
    return _ANSI_RE.sub("", text)


def _grapheme_width(g: str) -> int:
    """Return the terminal display width of a single grapheme cluster."""
    if not g:
        return 0

    cp = ord(g[0])
    if cp < 0x20 or (0x7F <= cp <= 0x9F):
        return 0

    # Emoji presentation selector or ZWJ sequence
    if len(g) > 1 and ("\ufe0f" in g or "\u200d" in g):
        return 2

    w = _wcwidth.wcswidth(g)
    if w < 0:
        w = _wcwidth.wcwidth(g[0])
    return max(w, 0)


def visible_width(text: str) -> int:
    """Calculate the visible terminal width of *text*.

    ANSI codes are ignored and ASCII takes a fast path; other strings are
    measured per grapheme cluster and cached.
    """
    if not text:
        return 0

    stripped = strip_ansi(text)
    if not stripped:
        return 0

    if stripped.isascii() and stripped.isprintable():
        return len(stripped)

    cached = _width_cache.get(stripped)
    if cached is not None:
        return cached

    total = sum(_grapheme_width(g) for g in grapheme.graphemes(stripped))
    return _cache_width(stripped, total)


def _take_columns(text: str, max_cols: int) -> str:
    """Return a prefix of *text* that fits within *max_cols* visible columns.

    ANSI codes are preserved; the text is cut at grapheme boundaries.
    """
    result: list[str] = []
    cols = 0
    pos = 0

    while pos < len(text):
        match = _ANSI_RE.match(text, pos)
        if match:
            result.append(match.group(0))
            pos = match.end()
            continue

        # Next grapheme cluster, up to the next escape sequence
        next_esc = text.find("\x1b", pos + 1)
        chunk = text[pos:] if next_esc == -1 else text[pos:next_esc]
        g = next(grapheme.graphemes(chunk))
        w = _grapheme_width(g)
        if cols + w > max_cols:
            break
        result.append(g)
        cols += w
        pos += len(g)

    return "".join(result)


def truncate_to_width(
    text: str,
    max_width: int,
    ellipsis: str = "...",
    pad: bool = False,
) -> str:
    """Truncate *text* to fit within *max_width* visible columns.

    If the text is wider than *max_width*, it is truncated and *ellipsis* is
    appended (the ellipsis counts towards the width).  If *pad* is ``True``,
    the result is right-padded with spaces to exactly *max_width*.
    """
    if max_width <= 0:
        return ""

    text_width = visible_width(text)
    if text_width <= max_width:
        if pad:
            return text + " " * (max_width - text_width)
        return text

    ellipsis_width = visible_width(ellipsis)
    target_width = max_width - ellipsis_width
    if target_width <= 0:
        return _take_columns(ellipsis, max_width)

    result = _take_columns(text, target_width) + ellipsis

    if pad:
        result_width = visible_width(result)
        if result_width < max_width:
            result += " " * (max_width - result_width)

    return result


def pad_to_width(text: str, width: int) -> str:
    """Left-align *text* in a field of *width* columns, never truncating.

    Behaves like ``f"{text:30}"`` but counts terminal cells: text that is already
    wider than the field is returned unchanged.
    """
    text_width = visible_width(text)
    if text_width >= width:
        return text
    return text + " " * (width - text_width)
