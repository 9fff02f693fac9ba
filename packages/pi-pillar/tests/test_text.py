"""Tests for pi.pillar.text -- width measurement and truncation."""

from __future__ import annotations

from pi.pillar.text import (
    ELLIPSIS,
    align,
    fit_lines,
    max_width,
    strip_ansi,
    truncate_to_width,
    visible_width,
)


# ---------------------------------------------------------------------------
# visible_width
# ---------------------------------------------------------------------------


class TestVisibleWidth:
    """Measure the visible terminal width of text."""

    def test_plain_ascii(self) -> None:
        assert visible_width("hello") == 5

    def test_empty_string(self) -> None:
        assert visible_width("") == 0

    def test_ansi_codes_do_not_count(self) -> None:
        assert visible_width("\x1b[2mhi\x1b[0m") == 2

    def test_wide_cjk_characters_count_as_two(self) -> None:
        assert visible_width("世") == 2

    def test_mixed_ascii_and_wide(self) -> None:
        assert visible_width("A世B") == 4

    def test_ellipsis_is_one_column(self) -> None:
        assert visible_width(ELLIPSIS) == 1

    def test_strip_ansi(self) -> None:
        assert strip_ansi("\x1b[1m\x1b[31mabc\x1b[0m") == "abc"


# ---------------------------------------------------------------------------
# truncate_to_width
# ---------------------------------------------------------------------------


class TestTruncateToWidth:
    """Truncate text to a maximum visible width."""

    def test_short_text_unchanged(self) -> None:
        assert truncate_to_width("hi", 10) == "hi"

    def test_exact_width_unchanged(self) -> None:
        assert truncate_to_width("hello", 5) == "hello"

    def test_truncates_with_ellipsis(self) -> None:
        assert truncate_to_width("hello world", 5) == "hell…"

    def test_zero_width_gives_empty_string(self) -> None:
        assert truncate_to_width("hello", 0) == ""

    def test_truncating_twice_is_stable(self) -> None:
        once = truncate_to_width("hello world", 6)
        assert truncate_to_width(once, 6) == once

    def test_wide_characters_are_not_split(self) -> None:
        result = truncate_to_width("世界你好", 5)
        assert result == "世界…"
        assert visible_width(result) == 5

    def test_styled_text_is_closed_after_cut(self) -> None:
        result = truncate_to_width("\x1b[2mhello world\x1b[0m", 5)
        assert strip_ansi(result) == "hell…"
        assert "\x1b[0m" in result
        assert visible_width(result) == 5


# ---------------------------------------------------------------------------
# align / fit_lines
# ---------------------------------------------------------------------------


class TestAlign:
    def test_left_pads_on_the_right(self) -> None:
        assert align("ab", 5) == "ab   "

    def test_right_pads_on_the_left(self) -> None:
        assert align("ab", 5, "right") == "   ab"

    def test_too_wide_is_truncated(self) -> None:
        assert align("abcdefgh", 4) == "abc…"

    def test_fit_lines_gives_exact_width(self) -> None:
        lines = fit_lines(["a", "abcdefgh", "世"], 4)
        assert [visible_width(line) for line in lines] == [4, 4, 4]

    def test_max_width(self) -> None:
        assert max_width(["a", "abc", ""]) == 3
        assert max_width([]) == 0
