"""Shafts: the data part of a pillar.

A shaft renders one column's cells, one line per row, and declares two
widths: ``width``, the width at which every cell is shown in full, and
``min_width``, the narrowest width at which the column is still faithful
(numbers in scientific notation, strings cut short with an ellipsis).

Formatting at a given width only truncates or picks an already computed
representation; it never renegotiates widths.
"""

from __future__ import annotations

import datetime as _dt
import decimal
import math
import numbers
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Sequence

from pi.pillar.options import PillarOptions, get_options
from pi.pillar.styles import PillarTheme, default_theme
from pi.pillar.text import Align, fit_lines, max_width
from pi.pillar.type_sum import ColumnKind, column_kind

# Sentinels for cells that cannot be rendered meaningfully
NA = "NA"
NA_STRING = "<NA>"

_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")
_ESCAPES = {"\n": "\\n", "\t": "\\t", "\r": "\\r"}


class Shaft:
    """Base class for the rendered body of a column."""

    width: int = 0
    min_width: int = 0

    def format(self, width: int) -> list[str]:
        raise NotImplementedError


@dataclass
class LinesShaft(Shaft):
    """Pre-rendered cells, truncated with an ellipsis when narrower than needed."""

    lines: list[str]
    align: Align = "left"
    min_width: int = -1
    width: int = field(init=False)

    def __post_init__(self) -> None:
        self.width = max_width(self.lines)
        if self.min_width < 0 or self.min_width > self.width:
            self.min_width = self.width

    def format(self, width: int) -> list[str]:
        return fit_lines(self.lines, width, self.align)


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------


@dataclass
class _Cell:
    """A number split for alignment; ``special`` holds NA/NaN/Inf labels."""

    negative: bool = False
    lhs: str = ""
    rhs: str | None = None
    exponent: str = ""
    special: str | None = None


def _special(value: Any) -> str | None:
    if value is None:
        return NA
    if isinstance(value, numbers.Integral):
        return None
    x = float(value)
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "Inf" if x > 0 else "-Inf"
    return None


def _decimal_cell(value: Any, sigfig: int) -> _Cell:
    special = _special(value)
    if special is not None:
        return _Cell(special=special)
    if isinstance(value, numbers.Integral):
        return _Cell(negative=value < 0, lhs=str(abs(int(value))))

    x = float(value)
    if x == 0:
        return _Cell(lhs="0", rhs="")
    magnitude = math.floor(math.log10(abs(x)))
    digits = max(0, sigfig - 1 - magnitude)
    text = f"{abs(x):.{digits}f}"
    lhs, _, rhs = text.partition(".")
    rhs = rhs.rstrip("0")
    negative = x < 0 and (lhs.strip("0") != "" or rhs != "")
    return _Cell(negative=negative, lhs=lhs, rhs=rhs)


def _scientific_cell(value: Any, sigfig: int) -> _Cell:
    special = _special(value)
    if special is not None:
        return _Cell(special=special)
    if value == 0:
        return _Cell(lhs="0")
    if isinstance(value, numbers.Integral):
        # exact, and safe for integers beyond float range
        negative = value < 0
        text = f"{decimal.Decimal(abs(int(value))):.{sigfig - 1}e}"
    else:
        x = float(value)
        negative = x < 0
        text = f"{abs(x):.{sigfig - 1}e}"
    mantissa, _, exponent = text.partition("e")
    if "." in mantissa:
        mantissa = mantissa.rstrip("0").rstrip(".")
    return _Cell(negative=negative, lhs=mantissa, exponent=f"e{int(exponent)}")


def _style_core(line: str, style: Callable[[str], str]) -> str:
    core = line.strip(" ")
    if not core:
        return line
    start = line.index(core)
    return line[:start] + style(core) + line[start + len(core) :]


def _layout_decimal(cells: list[_Cell], theme: PillarTheme) -> tuple[list[str], int]:
    """Align decimal points; returns the lines and their common width."""
    lhs_width = max(
        (len(c.special) if c.special else len(c.lhs) + c.negative for c in cells),
        default=0,
    )
    rhs_width = max((len(c.rhs) for c in cells if c.rhs), default=0)

    lines: list[str] = []
    for cell in cells:
        if cell.special is not None:
            text = cell.special.rjust(lhs_width) + " " * (rhs_width + 1 if rhs_width else 0)
            lines.append(_style_core(text, theme.na))
            continue
        text = (("-" if cell.negative else "") + cell.lhs).rjust(lhs_width)
        if rhs_width:
            text += ("." + cell.rhs).ljust(rhs_width + 1) if cell.rhs else " " * (rhs_width + 1)
        lines.append(_style_core(text, theme.neg) if cell.negative else text)

    width = lhs_width + (rhs_width + 1 if rhs_width else 0)
    return lines, width


def _layout_scientific(cells: list[_Cell], theme: PillarTheme) -> tuple[list[str], int]:
    """Align mantissas on the exponent marker."""
    mantissa_width = max(
        (len(c.special) if c.special else len(c.lhs) + c.negative for c in cells),
        default=0,
    )
    exponent_width = max((len(c.exponent) for c in cells), default=0)

    lines: list[str] = []
    for cell in cells:
        if cell.special is not None:
            text = cell.special.rjust(mantissa_width) + " " * exponent_width
            lines.append(_style_core(text, theme.na))
            continue
        text = (("-" if cell.negative else "") + cell.lhs).rjust(mantissa_width)
        text += cell.exponent.ljust(exponent_width)
        lines.append(_style_core(text, theme.neg) if cell.negative else text)

    return lines, mantissa_width + exponent_width


class NumericShaft(Shaft):
    """Numbers in decimal notation, or scientific notation when too wide.

    The whole column switches to scientific notation when showing both the
    largest and the smallest magnitude in decimal notation needs more than
    ``max_dec_width`` columns.
    """

    def __init__(
        self,
        data: Sequence[Any],
        options: PillarOptions,
        theme: PillarTheme,
    ) -> None:
        dec_cells = [_decimal_cell(value, options.sigfig) for value in data]
        sci_cells = [_scientific_cell(value, options.sigfig) for value in data]
        self._dec, self.dec_width = _layout_decimal(dec_cells, theme)
        self._sci, self.sci_width = _layout_scientific(sci_cells, theme)

        self.scientific = (
            self.dec_width > options.max_dec_width and self.sci_width < self.dec_width
        )
        self.width = self.sci_width if self.scientific else self.dec_width
        self.min_width = min(self.dec_width, self.sci_width)

    def format(self, width: int) -> list[str]:
        if not self.scientific and width >= self.dec_width:
            lines = self._dec
        elif width >= self.sci_width:
            lines = self._sci
        elif width >= self.dec_width:
            lines = self._dec
        else:
            lines = self._sci if self.sci_width < self.dec_width else self._dec
        return fit_lines(lines, width, "right")


# ---------------------------------------------------------------------------
# Other kinds
# ---------------------------------------------------------------------------


def escape_string(text: str) -> str:
    """Make control characters visible so every cell stays on one line."""
    return _CONTROL_RE.sub(
        lambda m: _ESCAPES.get(m.group(), f"\\x{ord(m.group()):02x}"),
        text,
    )


def _logical_shaft(data: Sequence[Any], options: PillarOptions, theme: PillarTheme) -> Shaft:
    lines = [theme.na(NA) if v is None else ("TRUE" if v else "FALSE") for v in data]
    return LinesShaft(lines, align="right")


def _numeric_shaft(data: Sequence[Any], options: PillarOptions, theme: PillarTheme) -> Shaft:
    return NumericShaft(data, options, theme)


def _character_lines(values: list[str | None], theme: PillarTheme) -> list[str]:
    return [theme.na(NA_STRING) if v is None else v for v in values]


def _truncatable(lines: list[str], options: PillarOptions) -> Shaft:
    return LinesShaft(lines, align="left", min_width=options.min_chars)


def _character_shaft(data: Sequence[Any], options: PillarOptions, theme: PillarTheme) -> Shaft:
    values = [None if v is None else escape_string(v) for v in data]
    return _truncatable(_character_lines(values, theme), options)


def _date_shaft(data: Sequence[Any], options: PillarOptions, theme: PillarTheme) -> Shaft:
    lines = [theme.na(NA) if v is None else v.isoformat() for v in data]
    return LinesShaft(lines, align="right")


def _datetime_shaft(data: Sequence[Any], options: PillarOptions, theme: PillarTheme) -> Shaft:
    lines = [
        theme.na(NA) if v is None else v.isoformat(sep=" ", timespec="seconds")
        for v in data
    ]
    return LinesShaft(lines, align="right")


def _list_label(value: Any) -> str:
    return f"<{type(value).__name__} [{len(value)}]>"


def _list_shaft(data: Sequence[Any], options: PillarOptions, theme: PillarTheme) -> Shaft:
    values = [None if v is None else _list_label(v) for v in data]
    return _truncatable(_character_lines(values, theme), options)


def _generic_shaft(data: Sequence[Any], options: PillarOptions, theme: PillarTheme) -> Shaft:
    values = [None if v is None else escape_string(_generic_text(v)) for v in data]
    return _truncatable(_character_lines(values, theme), options)


def _generic_text(value: Any) -> str:
    if isinstance(value, _dt.datetime):
        return value.isoformat(sep=" ", timespec="seconds")
    if isinstance(value, (list, tuple, dict, set, frozenset)):
        return _list_label(value)
    return str(value)


ShaftBuilder = Callable[[Sequence[Any], PillarOptions, PillarTheme], Shaft]

_SHAFT_BUILDERS: dict[str, ShaftBuilder] = {
    "logical": _logical_shaft,
    "integer": _numeric_shaft,
    "double": _numeric_shaft,
    "character": _character_shaft,
    "date": _date_shaft,
    "datetime": _datetime_shaft,
    "list": _list_shaft,
    "generic": _generic_shaft,
}


def register_shaft(kind: ColumnKind, builder: ShaftBuilder) -> None:
    """Replace the formatting rule used for columns of *kind*."""
    _SHAFT_BUILDERS[kind] = builder


def pillar_shaft(
    data: Sequence[Any],
    options: PillarOptions | None = None,
    theme: PillarTheme | None = None,
) -> Shaft:
    """Build the shaft for *data* using the rule registered for its kind."""
    if options is None:
        options = get_options()
    if theme is None:
        theme = default_theme(options)
    return _SHAFT_BUILDERS[column_kind(data)](data, options, theme)

