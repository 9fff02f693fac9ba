"""Pillars: one column's header, body and footer, stacked vertically.

``pillar()`` builds a pillar with the default parts, ``new_pillar()``
accepts arbitrary named parts. Both return ``None`` rather than raising
when the requested width is too small to show the column.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from pi.pillar.box import Box, PillarContractError, new_ornament
from pi.pillar.controller import Controller, check_box
from pi.pillar.negotiation import negotiate_pillar
from pi.pillar.styles import PillarTheme, PlainTheme, subtle_lines

PARTS = ("header", "data", "footer")


class Pillar:
    """An ordered mapping of part names to boxes.

    Part order is fixed at construction and is the vertical stacking order.
    When ``width`` is set every part renders at that width; otherwise the
    widest part decides.
    """

    def __init__(self, parts: Mapping[str, Box], width: int | None = None) -> None:
        for name, box in parts.items():
            if not isinstance(name, str) or not name:
                raise PillarContractError("All pillar parts must have names.")
            if not isinstance(box, Box):
                raise PillarContractError(f"Pillar part {name!r} is not a Box")
        self.parts: dict[str, Box] = dict(parts)
        self.width = width

    def __repr__(self) -> str:
        return f"Pillar(parts={list(self.parts)!r}, width={self.width!r})"

    def _widths(self) -> tuple[int, int]:
        negotiated = negotiate_pillar(self)
        if negotiated is None:
            raise PillarContractError(f"Cannot negotiate widths of {self!r}")
        return negotiated

    @property
    def min_width(self) -> int:
        return self._widths()[0]

    @property
    def ideal_width(self) -> int:
        return self._widths()[1]

    def resolve_width(self, width: int | None = None) -> int:
        if width is not None:
            return width
        if self.width is not None:
            return self.width
        return self.ideal_width

    def format_parts(self, width: int | None = None) -> list[tuple[str, list[str]]]:
        """Format every part at the same width, in stacking order.

        Parts that produce no lines are left out.
        """
        width = self.resolve_width(width)
        result: list[tuple[str, list[str]]] = []
        for name, box in self.parts.items():
            lines = box.format(width)
            if lines:
                result.append((name, lines))
        return result

    def format(self, width: int | None = None) -> list[str]:
        return [line for _name, lines in self.format_parts(width) for line in lines]


def new_pillar(parts: Mapping[str, Box], width: int | None = None) -> Pillar | None:
    """Low-level constructor for pillars with arbitrary parts.

    Returns ``None`` when a required part does not fit in *width*.
    """
    result = Pillar(parts, width=width)
    if negotiate_pillar(result, width) is None:
        return None
    return result


def assemble_pillar(
    data: Sequence[Any],
    name: str | None,
    controller: Controller,
    width: int | None = None,
) -> Pillar | None:
    """Produce header, body and footer through *controller* and stack them."""
    header = check_box(controller.produce_header(data, name), "header")
    body = check_box(controller.produce_body(data), "data")
    footer = check_box(controller.produce_footer(data), "footer")
    return new_pillar(dict(zip(PARTS, (header, body, footer))), width=width)


def pillar(
    data: Sequence[Any],
    title: str | None = None,
    width: int | None = None,
    controller: Controller | None = None,
) -> Pillar | None:
    """Build a pillar for *data* with the default parts."""
    if controller is None:
        controller = Controller()
    return assemble_pillar(data, title, controller, width)


def render_pillar(
    data: Sequence[Any],
    title: str | None = None,
    width: int | None = None,
    controller: Controller | None = None,
) -> list[str]:
    """Render a single column, or return ``[]`` when *width* is too small."""
    result = pillar(data, title, width, controller)
    if result is None:
        return []
    return result.format()


def row_id_pillar(
    n_rows: int,
    has_star: bool = False,
    theme: PillarTheme | None = None,
    header_height: int = 1,
) -> Pillar:
    """The leading column of row numbers.

    ``has_star`` marks the rows as a partial view of a larger table. The
    marker sits on the last of *header_height* header lines, level with the
    type line of the columns beside it.
    """
    if theme is None:
        theme = PlainTheme()
    marker = "*" if has_star else ""
    header = new_ornament([""] * (max(header_height, 1) - 1) + [marker])
    body = new_ornament(subtle_lines(theme, [str(i + 1) for i in range(n_rows)]), align="right")
    return Pillar({"header": Box(header), "data": Box(body)})
