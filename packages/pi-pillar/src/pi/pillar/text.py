"""Terminal text utilities: width measurement, truncation and alignment.

Widths are measured in terminal columns: ANSI escape sequences are
invisible, wide (CJK) characters count as two, and grapheme clusters such
as emoji sequences are measured as a unit.
"""

from __future__ import annotations

import re
import unicodedata
from typing import Literal

import grapheme
import wcwidth as _wcwidth

Align = Literal["left", "right"]

# Ellipsis marker used when a value is cut short.
ELLIPSIS = "…"

# CSI sequences (SGR and cursor movement) and OSC 8 hyperlinks
_ANSI_RE = re.compile(r"\x1b\[[0-9;]*[mGKHJ]|\x1b\]8;;[^\x07]*\x07")

_RESET = "\x1b[0m"

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
    """Remove ANSI escape sequences from *text*."""
    return _ANSI_RE.sub("", text)


def _grapheme_width(g: str) -> int:
    """Return the terminal display width of a single grapheme cluster."""
    if not g:
        return 0

    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    for ch in g:
        cp = ord(ch)
        # VS16, ZWJ, skin tone modifiers, regional indicators
        if cp in (0xFE0F, 0x200D) or 0x1F3FB <= cp <= 0x1F3FF or 0x1F1E6 <= cp <= 0x1F1FF:
            return 2

    first = g[0]
    if ord(first) >= 0x1F000:
        return 2
    if unicodedata.category(first) in ("Mn", "Me", "Mc", "Cf"):
        return 0
    return max(_wcwidth.wcwidth(first), 0)


def visible_width(text: str) -> int:
    """Calculate the visible terminal width of *text*.

    Uses a fast path for printable ASCII and caches the result for
    everything else.
    """
    if not text:
        return 0

    stripped = _ANSI_RE.sub("", text)
    if not stripped:
        return 0

    if stripped.isascii() and stripped.isprintable():
        return len(stripped)

    cached = _width_cache.get(stripped)
    if cached is not None:
        return cached

    total = sum(_grapheme_width(g) for g in grapheme.graphemes(stripped))
    return _cache_width(stripped, total)


def _take_columns(text: str, max_cols: int) -> tuple[str, int]:
    """Return the longest prefix of *text* fitting in *max_cols* columns.

    ANSI codes are kept; cuts happen on grapheme boundaries. The second
    element is the visible width of the prefix.
    """
    result: list[str] = []
    cols = 0
    pos = 0
    styled = False

    for match in _ANSI_RE.finditer(text):
        chunk = text[pos : match.start()]
        cols, full = _take_plain(chunk, max_cols, cols, result)
        if not full:
            return _close("".join(result), styled), cols
        result.append(match.group())
        styled = match.group() != _RESET
        pos = match.end()

    cols, _full = _take_plain(text[pos:], max_cols, cols, result)
    return _close("".join(result), styled), cols


def _take_plain(
    chunk: str, max_cols: int, cols: int, out: list[str]
) -> tuple[int, bool]:
    for g in grapheme.graphemes(chunk):
        w = _grapheme_width(g)
        if cols + w > max_cols:
            return cols, False
        out.append(g)
        cols += w
    return cols, True


def _close(text: str, styled: bool) -> str:
    if styled and not text.endswith(_RESET):
        return text + _RESET
    return text


def truncate_to_width(text: str, max_width: int, ellipsis: str = ELLIPSIS) -> str:
    """Truncate *text* to fit within *max_width* visible columns.

    When the text is too wide it is cut and *ellipsis* is appended (the
    ellipsis counts towards the width). Text that already fits is returned
    unchanged, so truncating twice is the same as truncating once.
    """
    if max_width <= 0:
        return ""

    if visible_width(text) <= max_width:
        return text

    target = max_width - visible_width(ellipsis)
    if target <= 0:
        return _take_columns(ellipsis, max_width)[0]

    prefix, _cols = _take_columns(text, target)
    return prefix + ellipsis


def align(text: str, width: int, side: Align = "left") -> str:
    """Pad *text* with spaces to exactly *width* columns, truncating if wider."""
    text = truncate_to_width(text, width)
    pad = " " * max(0, width - visible_width(text))
    if side == "right":
        return pad + text
    return text + pad


def fit_lines(lines: list[str], width: int, side: Align = "left") -> list[str]:
    """Apply :func:`align` to every line."""
    return [align(line, width, side) for line in lines]


def max_width(lines: list[str]) -> int:
    """Return the widest visible width among *lines* (0 when empty)."""
    return max((visible_width(line) for line in lines), default=0)
