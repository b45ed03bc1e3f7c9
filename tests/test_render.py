"""Tests for tssh.nodes.render."""

from __future__ import annotations

import pytest

from tssh.nodes.render import (
    DEFAULT_THEME,
    LEGEND,
    NO_MATCH,
    PLAIN_THEME,
    RULE,
    TITLE,
    default_theme,
    display_index,
    list_height,
    render_picker,
    render_row,
    scroll_offset,
)
from tssh.nodes.selection import NodeSelection
from tssh.nodes.types import NodeRecord
from tssh.tui.utils import strip_ansi, visible_width


def make_nodes(count: int, status: str = "active") -> list[NodeRecord]:
    return [
        NodeRecord(name=f"node-{i}", address=f"100.64.0.{i}", status=status)
        for i in range(count)
    ]


def expected_row(marker: str, node: NodeRecord) -> str:
    return f"{marker}{node.name:<30}{node.address:<15}{node.status}"


# ---------------------------------------------------------------------------
# Layout helpers
# ---------------------------------------------------------------------------


class TestLayoutHelpers:
    def test_list_height(self):
        assert list_height(24) == 19
        assert list_height(6) == 1
        assert list_height(2) == 1

    def test_display_index_is_reversed(self):
        sel = NodeSelection(make_nodes(5))
        assert display_index(sel) == 4
        sel.move_to_end()
        assert display_index(sel) == 0

    def test_scroll_offset_keeps_highlight_visible(self):
        sel = NodeSelection(make_nodes(30))
        assert scroll_offset(sel, 5) == 25
        sel.move_to_end()
        assert scroll_offset(sel, 5) == 0

    def test_scroll_offset_empty(self):
        assert scroll_offset(NodeSelection([]), 5) == 0


# ---------------------------------------------------------------------------
# render_picker
# ---------------------------------------------------------------------------


class TestRenderPicker:
    def test_exact_height(self):
        sel = NodeSelection(make_nodes(3))
        for height in (1, 5, 6, 24):
            assert len(render_picker(sel, 80, height, PLAIN_THEME)) == height

    def test_zero_size(self):
        sel = NodeSelection(make_nodes(3))
        assert render_picker(sel, 0, 24, PLAIN_THEME) == []
        assert render_picker(sel, 80, 0, PLAIN_THEME) == []

    def test_header(self):
        sel = NodeSelection(make_nodes(3))
        lines = render_picker(sel, 80, 20, PLAIN_THEME)
        assert lines[0] == TITLE
        assert lines[1] == "Found 3 nodes"
        assert lines[2] == RULE * 80

    def test_list_is_bottom_up(self):
        nodes = make_nodes(3)
        lines = render_picker(NodeSelection(nodes), 80, 20, PLAIN_THEME)
        assert lines[3] == expected_row("  ", nodes[2])
        assert lines[4] == expected_row("  ", nodes[1])
        assert lines[5] == expected_row("> ", nodes[0])
        assert lines[6] == ""

    def test_highlight_follows_move_up(self):
        nodes = make_nodes(3)
        sel = NodeSelection(nodes)
        sel.move_up()
        lines = render_picker(sel, 80, 20, PLAIN_THEME)
        assert lines[4] == expected_row("> ", nodes[1])

    def test_footer(self):
        sel = NodeSelection(make_nodes(3))
        sel.set_filter("node")
        lines = render_picker(sel, 80, 20, PLAIN_THEME)
        assert lines[-2].startswith(LEGEND)
        assert visible_width(lines[-2]) == 80
        assert lines[-1] == "Search: node"

    def test_no_position_counter_when_everything_fits(self):
        lines = render_picker(NodeSelection(make_nodes(3)), 80, 20, PLAIN_THEME)
        assert "(" not in lines[-1]

    def test_overflow_scrolls_and_shows_position(self):
        nodes = make_nodes(30)
        sel = NodeSelection(nodes)
        lines = render_picker(sel, 80, 10, PLAIN_THEME)
        body = lines[3:8]
        assert body[-1] == expected_row("> ", nodes[0])
        assert body[0] == expected_row("  ", nodes[4])
        assert lines[-1].startswith("Search: ")
        assert lines[-1].endswith("(1/30)")
        assert visible_width(lines[-1]) == 80

    def test_overflow_top_of_list(self):
        nodes = make_nodes(30)
        sel = NodeSelection(nodes)
        sel.move_to_end()
        lines = render_picker(sel, 80, 10, PLAIN_THEME)
        assert lines[3] == expected_row("> ", nodes[29])
        assert lines[-1].endswith("(30/30)")

    def test_no_match_notice(self):
        sel = NodeSelection(make_nodes(3))
        sel.set_filter("zzz")
        lines = render_picker(sel, 80, 20, PLAIN_THEME)
        assert lines[3] == NO_MATCH
        assert lines[1] == "Found 3 nodes"

    def test_empty_list_without_filter(self):
        lines = render_picker(NodeSelection([]), 80, 10, PLAIN_THEME)
        assert lines[1] == "Found 0 nodes"
        assert lines[3:8] == [""] * 5

    @pytest.mark.parametrize("width", [1, 10, 40, 79, 120])
    def test_lines_never_exceed_width(self, width):
        sel = NodeSelection(make_nodes(30, status="active; direct 203.0.113.4:41641"))
        for line in render_picker(sel, width, 12, DEFAULT_THEME):
            assert visible_width(line) <= width

    def test_narrow_title_truncated(self):
        lines = render_picker(NodeSelection(make_nodes(1)), 10, 10, PLAIN_THEME)
        assert lines[0] == TITLE[:10]


# ---------------------------------------------------------------------------
# Themes
# ---------------------------------------------------------------------------


class TestThemes:
    def test_styled_row_strips_to_plain_row(self):
        node = make_nodes(1)[0]
        styled = render_row(node, True, 80, DEFAULT_THEME)
        assert styled != render_row(node, True, 80, PLAIN_THEME)
        assert strip_ansi(styled) == render_row(node, True, 80, PLAIN_THEME)

    def test_status_colour_depends_on_reachability(self):
        up = NodeRecord(name="up", address="100.64.0.1", status="active")
        down = NodeRecord(name="down", address="100.64.0.2", status="offline")
        assert "\x1b[32m" in render_row(up, False, 80, DEFAULT_THEME)
        assert "\x1b[31m" in render_row(down, False, 80, DEFAULT_THEME)

    def test_no_color_env(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "1")
        assert default_theme() is PLAIN_THEME
        monkeypatch.delenv("NO_COLOR")
        assert default_theme() is DEFAULT_THEME
