"""Colonnades: many pillars laid out side by side under one width budget.

Layout walks the columns left to right and materializes each one only
when there is room for it, so the work done is proportional to what is
printed. The first column that does not fit ends the walk: shown columns
always form a prefix of the input, and the rest are reported as extra
columns in a summary line.

Width is handed out greedily: each column gets up to its ideal width
before the next one is considered, which favours earlier columns.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Sequence, Union

from pi.pillar.controller import Controller
from pi.pillar.negotiation import negotiate_pillar
from pi.pillar.options import PillarOptions
from pi.pillar.assembler import Pillar, assemble_pillar, row_id_pillar
from pi.pillar.shaft import escape_string
from pi.pillar.text import ELLIPSIS, truncate_to_width

logger = logging.getLogger(__name__)

SEPARATOR = " "
_SEPARATOR_WIDTH = len(SEPARATOR)

# Smallest footprint a column can possibly have
_MIN_COLUMN_WIDTH = 1


@dataclass(frozen=True)
class ColumnDescriptor:
    """A column that has not been turned into a pillar yet."""

    data: Sequence[Any]
    name: str | None = None
    controller: Controller = field(default_factory=Controller)

    def materialize(self, budget: int | None = None) -> Pillar | None:
        """Build the pillar, or return ``None`` if it cannot fit in *budget*."""
        result = assemble_pillar(self.data, self.name, self.controller)
        if result is None or negotiate_pillar(result, budget) is None:
            return None
        return result

    def label(self, position: int) -> str:
        name = escape_string(self.name) if self.name is not None else f"[{position + 1}]"
        return f"{name} <{self.controller.type_summary(self.data)}>"


Columns = Union[
    Mapping[str, Sequence[Any]],
    Iterable[Union[ColumnDescriptor, Sequence[Any]]],
]


@dataclass
class Colonnade:
    """The outcome of layout: which columns are shown and how wide."""

    columns: list[ColumnDescriptor]
    width: int
    controller: Controller
    pillars: list[Pillar] = field(default_factory=list)
    widths: list[int] = field(default_factory=list)
    row_ids: Pillar | None = None
    leading_width: int = 0

    @property
    def n_shown(self) -> int:
        return len(self.pillars)

    @property
    def extra_cols(self) -> int:
        """How many columns were never materialized."""
        return len(self.columns) - len(self.pillars)

    @property
    def extra_columns(self) -> list[ColumnDescriptor]:
        return self.columns[len(self.pillars) :]


def make_descriptors(columns: Columns, controller: Controller) -> list[ColumnDescriptor]:
    """Wrap raw columns into descriptors sharing *controller*.

    A mapping gives named columns; plain sequences are unnamed. Existing
    descriptors are kept as they are.
    """
    if isinstance(columns, Mapping):
        return [
            ColumnDescriptor(data, str(name), controller) for name, data in columns.items()
        ]
    result: list[ColumnDescriptor] = []
    for column in columns:
        if isinstance(column, ColumnDescriptor):
            result.append(column)
        else:
            result.append(ColumnDescriptor(column, None, controller))
    return result


def resolve_width(options: PillarOptions) -> int:
    """The configured width, or the terminal's."""
    if options.width is not None:
        return options.width
    return shutil.get_terminal_size().columns


def build_colonnade(
    columns: Columns,
    controller: Controller | None = None,
    width: int | None = None,
    leading_reserved_width: int = 0,
    row_ids: bool = False,
    has_star: bool = False,
) -> Colonnade:
    """Decide which columns fit in *width* and how wide each one is.

    *leading_reserved_width* is taken off the budget up front for a column
    the caller always shows on the left; with *row_ids* that column is a
    row number pillar built here. A separator follows the leading column.
    """
    if controller is None:
        controller = Controller()
    if width is None:
        width = resolve_width(controller.options)
    if leading_reserved_width < 0:
        raise ValueError(f"leading_reserved_width must not be negative, got {leading_reserved_width}")

    descriptors = make_descriptors(columns, controller)
    result = Colonnade(descriptors, width, controller)

    leading = leading_reserved_width
    if row_ids:
        n_rows = max((len(d.data) for d in descriptors), default=0)
        result.row_ids = row_id_pillar(n_rows, has_star, controller.theme)
        leading = max(leading, result.row_ids.ideal_width)
    result.leading_width = leading

    remaining = width - leading - (_SEPARATOR_WIDTH if leading else 0)

    # Every column needs at least one character plus a separator
    probe_limit = max(0, (remaining + _SEPARATOR_WIDTH) // (_MIN_COLUMN_WIDTH + _SEPARATOR_WIDTH))

    for descriptor in descriptors[:probe_limit]:
        separator = _SEPARATOR_WIDTH if result.pillars else 0
        available = remaining - separator
        if available < _MIN_COLUMN_WIDTH:
            break

        pillar = descriptor.materialize(available)
        if pillar is None:
            break

        assigned = min(pillar.ideal_width, available)
        result.pillars.append(pillar)
        result.widths.append(assigned)
        remaining -= assigned + separator

    if row_ids:
        height = _header_height(result.pillars, result.widths)
        result.row_ids = row_id_pillar(n_rows, has_star, controller.theme, height)

    logger.debug(
        "Colonnade: %d of %d columns shown in width %d (%d left)",
        result.n_shown,
        len(descriptors),
        width,
        max(remaining, 0),
    )
    return result


def _header_height(pillars: list[Pillar], widths: list[int]) -> int:
    """Height of the tallest header among the shown pillars."""
    heights = [
        len(pillar.parts["header"].format(width))
        for pillar, width in zip(pillars, widths)
        if "header" in pillar.parts
    ]
    return max(heights, default=1)


def _stack(blocks: list[tuple[int, list[tuple[str, list[str]]]]]) -> list[list[str]]:
    """Top-align the parts of all columns.

    Each part is padded with blank lines to the height of the tallest block
    of the same part in any column, so bodies start on the same row.
    """
    order: list[str] = []
    heights: dict[str, int] = {}
    for _width, parts in blocks:
        for name, lines in parts:
            if name not in heights:
                order.append(name)
                heights[name] = 0
            heights[name] = max(heights[name], len(lines))

    stacked: list[list[str]] = []
    for width, parts in blocks:
        by_name = dict(parts)
        lines: list[str] = []
        for name in order:
            part = by_name.get(name, [])
            lines.extend(part)
            lines.extend([" " * width] * (heights[name] - len(part)))
        stacked.append(lines)
    return stacked


def format_extra_columns(colonnade: Colonnade) -> str | None:
    """The summary line for columns that did not fit, or ``None``.

    The line is truncated to the colonnade width; a zero width gets no line.
    """
    extra = colonnade.extra_columns
    if not extra or colonnade.width <= 0:
        return None

    offset = colonnade.n_shown
    noun = "column" if len(extra) == 1 else "columns"
    text = f"# {ELLIPSIS} with {len(extra)} more {noun}"

    limit = colonnade.controller.options.max_extra_cols
    labels = [d.label(offset + i) for i, d in enumerate(extra[:limit])]
    if labels:
        text += ": " + ", ".join(labels)
        if len(extra) > limit:
            text += f", and {len(extra) - limit} more"

    text = truncate_to_width(text, colonnade.width)
    return colonnade.controller.theme.subtle(text)


def render_colonnade(colonnade: Colonnade) -> list[str]:
    """Produce the output lines of a laid-out colonnade.

    Every column is formatted before anything is joined, so a failing
    producer leaves no partial table behind.
    """
    blocks: list[tuple[int, list[tuple[str, list[str]]]]] = []
    if colonnade.row_ids is not None and colonnade.leading_width > 0:
        width = colonnade.leading_width
        blocks.append((width, colonnade.row_ids.format_parts(width)))
    for pillar, width in zip(colonnade.pillars, colonnade.widths):
        blocks.append((width, pillar.format_parts(width)))

    lines: list[str] = []
    if blocks:
        columns = _stack(blocks)
        for row in zip(*columns):
            lines.append(SEPARATOR.join(row))

    summary = format_extra_columns(colonnade)
    if summary is not None:
        lines.append(summary)
    return lines


def format_table(
    columns: Columns,
    width: int | None = None,
    controller: Controller | None = None,
    row_ids: bool = False,
) -> str:
    """Lay out and render *columns* as a single string."""
    colonnade = build_colonnade(columns, controller, width, row_ids=row_ids)
    return "\n".join(render_colonnade(colonnade))
