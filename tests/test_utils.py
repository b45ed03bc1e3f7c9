"""Tests for tssh.tui.utils -- width measurement and truncation."""

from __future__ import annotations

from tssh.tui.utils import pad_to_width, strip_ansi, truncate_to_width, visible_width


class TestStripAnsi:
    def test_removes_sgr(self):
        assert strip_ansi("\x1b[1;32mok\x1b[0m") == "ok"

    def test_plain_text_unchanged(self):
        assert strip_ansi("web-1") == "web-1"


class TestVisibleWidth:
    def test_ascii(self):
        assert visible_width("abc") == 3

    def test_empty(self):
        assert visible_width("") == 0
        assert visible_width("\x1b[0m") == 0

    def test_ignores_ansi(self):
        assert visible_width("\x1b[31mabc\x1b[0m") == 3

    def test_wide_characters(self):
        assert visible_width("日本") == 4

    def test_combining_mark(self):
        assert visible_width("é") == 1

    def test_box_drawing(self):
        assert visible_width("─" * 5) == 5


class TestTruncateToWidth:
    def test_fits(self):
        assert truncate_to_width("hello", 10) == "hello"

    def test_with_ellipsis(self):
        assert truncate_to_width("hello world", 8) == "hello..."

    def test_without_ellipsis(self):
        assert truncate_to_width("hello", 3, "") == "hel"

    def test_zero_width(self):
        assert truncate_to_width("hello", 0) == ""

    def test_pad(self):
        assert truncate_to_width("hi", 5, pad=True) == "hi   "

    def test_wide_characters_not_split(self):
        assert truncate_to_width("日本語", 5, "") == "日本"

    def test_keeps_ansi_codes(self):
        result = truncate_to_width("\x1b[31mhello\x1b[0m", 3, "")
        assert strip_ansi(result) == "hel"
        assert result.startswith("\x1b[31m")


class TestPadToWidth:
    def test_pads_short_text(self):
        assert pad_to_width("web", 6) == "web   "

    def test_never_truncates(self):
        assert pad_to_width("toolong", 3) == "toolong"

    def test_counts_cells(self):
        assert pad_to_width("日本", 6) == "日本  "
