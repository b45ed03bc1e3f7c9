"""Render picker state into screen lines.

``render_picker`` is a pure function of a :class:`NodeSelection` and the
screen size.  The screen has three regions::

    Tailscale SSH - Select a Node          header
    Found 12 nodes
    ────────────────────────────────
      web-2        100.64.0.7   offline    list (bottom-up)
    > web-1        100.64.0.3   active
    Enter: Connect  Esc: ...─────────────  footer
    Search: web

The list is drawn in reverse storage order so the first record sits at the
bottom; the highlighted row is ``len(filtered) - 1 - selection``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable

from tssh.nodes.selection import NodeSelection
from tssh.nodes.types import NodeRecord
from tssh.tui.utils import pad_to_width, truncate_to_width, visible_width

TITLE = "Tailscale SSH - Select a Node"
LEGEND = "Enter: Connect  Esc: Clear filter  ↑/↓: Navigate  Ctrl+C: Exit"
NO_MATCH = "No nodes match your filter"

NAME_WIDTH = 30
ADDRESS_WIDTH = 15
SELECTED_MARKER = "> "
UNSELECTED_MARKER = "  "
RULE = "─"

HEADER_HEIGHT = 3
FOOTER_HEIGHT = 2


def _identity(text: str) -> str:
    return text


def _sgr(start: str, end: str = "0") -> Callable[[str], str]:
    def style(text: str) -> str:
        return f"\x1b[{start}m{text}\x1b[{end}m"

    return style


@dataclass(frozen=True)
class PickerTheme:
    title: Callable[[str], str] = _identity
    muted: Callable[[str], str] = _identity
    active: Callable[[str], str] = _identity
    inactive: Callable[[str], str] = _identity
    highlight: Callable[[str], str] = _identity
    no_match: Callable[[str], str] = _identity
    border: Callable[[str], str] = _identity


PLAIN_THEME = PickerTheme()

# Status colours reset only the foreground so the highlight background survives.
DEFAULT_THEME = PickerTheme(
    title=_sgr("1;32"),
    muted=_sgr("37"),
    active=_sgr("32", "39"),
    inactive=_sgr("31", "39"),
    highlight=_sgr("1;100"),
    no_match=_sgr("33"),
    border=_sgr("2"),
)


def default_theme() -> PickerTheme:
    """Colour theme, or the plain one when $NO_COLOR is set."""
    if os.environ.get("NO_COLOR"):
        return PLAIN_THEME
    return DEFAULT_THEME


Segment = tuple[str, Callable[[str], str]]


def _fit_segments(segments: list[Segment], width: int) -> str:
    """Join styled segments, truncating plain text so the total fits *width*.

    Truncation happens before styling so escape sequences are never cut.
    """
    out: list[str] = []
    remaining = width
    for text, style in segments:
        if remaining <= 0:
            break
        fitted = truncate_to_width(text, remaining, "")
        remaining -= visible_width(fitted)
        out.append(style(fitted))
    return "".join(out)


def list_height(height: int) -> int:
    """Rows available to the node list on a screen *height* rows tall."""
    return max(height - HEADER_HEIGHT - FOOTER_HEIGHT, 1)


def display_index(selection: NodeSelection) -> int:
    """Screen row (within the full list) of the highlighted record."""
    return selection.filtered_count - 1 - selection.selection


def scroll_offset(selection: NodeSelection, rows: int) -> int:
    """First visible list row such that the highlighted row is on screen."""
    if selection.filtered_count == 0:
        return 0
    return max(0, display_index(selection) - rows + 1)


def render_header(selection: NodeSelection, width: int, theme: PickerTheme) -> list[str]:
    return [
        _fit_segments([(TITLE, theme.title)], width),
        _fit_segments([(f"Found {len(selection.records)} nodes", theme.muted)], width),
        theme.border(RULE * width),
    ]


def render_row(node: NodeRecord, selected: bool, width: int, theme: PickerTheme) -> str:
    marker = SELECTED_MARKER if selected else UNSELECTED_MARKER
    status_style = theme.active if node.is_active else theme.inactive
    row = _fit_segments(
        [
            (marker, _identity),
            (pad_to_width(node.name, NAME_WIDTH), _identity),
            (pad_to_width(node.address, ADDRESS_WIDTH), _identity),
            (node.status, status_style),
        ],
        width,
    )
    return theme.highlight(row) if selected else row


def render_list(
    selection: NodeSelection, width: int, rows: int, theme: PickerTheme
) -> list[str]:
    if selection.filtered_count == 0:
        if selection.filter_text:
            return [_fit_segments([(NO_MATCH, theme.no_match)], width)]
        return []

    displayed = list(reversed(selection.filtered_records()))
    highlighted = display_index(selection)
    offset = scroll_offset(selection, rows)

    return [
        render_row(node, offset + i == highlighted, width, theme)
        for i, node in enumerate(displayed[offset:offset + rows])
    ]


def render_footer(
    selection: NodeSelection, width: int, rows: int, theme: PickerTheme
) -> list[str]:
    legend = truncate_to_width(LEGEND, width, "")
    rule = theme.border(RULE * (width - visible_width(legend))) if width > visible_width(legend) else ""

    search = f"Search: {selection.filter_text}"
    if selection.filtered_count > rows:
        position = f"({selection.selection + 1}/{selection.filtered_count})"
        gap = width - visible_width(search) - len(position)
        if gap >= 1:
            search = search + " " * gap + position

    return [
        legend + rule,
        truncate_to_width(search, width, ""),
    ]


def render_picker(
    selection: NodeSelection,
    width: int,
    height: int,
    theme: PickerTheme = DEFAULT_THEME,
) -> list[str]:
    """Render the whole screen as exactly *height* lines."""
    if width <= 0 or height <= 0:
        return []

    rows = list_height(height)
    body = render_list(selection, width, rows, theme)
    body += [""] * (rows - len(body))

    lines = (
        render_header(selection, width, theme)
        + body
        + render_footer(selection, width, rows, theme)
    )
    return lines[:height] + [""] * (height - len(lines))
