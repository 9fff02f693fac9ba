"""Boxes: renderable parts of a pillar annotated with width metadata."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

from pi.pillar.text import Align, fit_lines, max_width


class PillarContractError(RuntimeError):
    """A producer broke the box contract (missing or inconsistent widths).

    This aborts the display call; it is never used to signal that a column
    does not fit.
    """


class Renderable(Protocol):
    """Anything that can be formatted into lines at a given width.

    ``width`` and ``min_width`` attributes are optional and are looked up with
    ``getattr`` when a ``Box`` is built around the renderable.
    """

    def format(self, width: int) -> list[str]:
        """Return the lines of this renderable, at most *width* columns each."""
        ...


def _check_width(name: str, value: Any) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise PillarContractError(f"Box {name} must be an integer, got {value!r}")
    if value < 0:
        raise PillarContractError(f"Box {name} must not be negative, got {value}")
    return value


@dataclass(frozen=True)
class Box:
    """A renderable with a declared width and minimum width.

    When ``width`` is omitted it is taken from ``content.width``; a missing
    ``min_width`` falls back to ``content.min_width`` and then to ``width``.
    """

    content: Renderable
    width: int | None = None
    min_width: int | None = None

    def __post_init__(self) -> None:
        width = self.width
        if width is None:
            width = getattr(self.content, "width", None)
        width = _check_width("width", width)

        min_width = self.min_width
        if min_width is None:
            min_width = getattr(self.content, "min_width", None)
        if min_width is None:
            min_width = width
        min_width = _check_width("min_width", min_width)

        if width is not None and min_width is not None and min_width > width:
            raise PillarContractError(
                f"Box min_width ({min_width}) exceeds width ({width})"
            )

        object.__setattr__(self, "width", width)
        object.__setattr__(self, "min_width", min_width)

    def format(self, width: int) -> list[str]:
        """Format the content and fit every line to exactly *width* columns."""
        return fit_lines(self.content.format(width), width)


@dataclass(frozen=True)
class Ornament:
    """Fixed, pre-rendered lines such as headers and footers."""

    lines: tuple[str, ...] = ()
    align: Align = "left"
    width: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "lines", tuple(self.lines))
        object.__setattr__(self, "width", max_width(list(self.lines)))

    def format(self, width: int) -> list[str]:
        return fit_lines(list(self.lines), width, self.align)


def new_ornament(lines: list[str] | tuple[str, ...], align: Align = "left") -> Ornament:
    return Ornament(tuple(lines), align)


def empty_box() -> Box:
    """A part with no lines and no width requirement."""
    return Box(Ornament(()), width=0, min_width=0)
