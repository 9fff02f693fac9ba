"""Controllers: how a column's header, body and footer are produced.

A controller is a capability set with three producers. One instance is
created per display call, shared read-only by every column of that call and
passed explicitly through the layout engine. ``Controller`` is the default
behaviour; ``OverrideController`` replaces individual producers, optionally
only for certain kinds of data, and falls back to its base for the rest.
"""

from __future__ import annotations

from typing import Any, Callable, Collection, Sequence

from pi.pillar.box import Box, PillarContractError, empty_box, new_ornament
from pi.pillar.options import PillarOptions, get_options
from pi.pillar.shaft import escape_string, pillar_shaft
from pi.pillar.styles import PillarTheme, default_theme, subtle_lines
from pi.pillar.type_sum import column_kind, type_summary

TypeSummary = Callable[[Sequence[Any]], str]


class Controller:
    """Default producers for the parts of a pillar."""

    def __init__(
        self,
        options: PillarOptions | None = None,
        theme: PillarTheme | None = None,
        type_summary: TypeSummary = type_summary,
    ) -> None:
        self.options = options if options is not None else get_options()
        self.theme = theme if theme is not None else default_theme(self.options)
        self.type_summary = type_summary

    def produce_header(self, data: Sequence[Any], name: str | None = None) -> Box:
        """Title (if any) above the type abbreviation, shown whole or not at all."""
        lines = [f"<{self.type_summary(data)}>"]
        if name is not None:
            title = escape_string(name)
            if self.options.bold:
                title = self.theme.bold(title)
            lines.insert(0, title)
        ornament = new_ornament(subtle_lines(self.theme, lines))
        return Box(ornament, width=ornament.width, min_width=ornament.width)

    def produce_body(self, data: Sequence[Any]) -> Box:
        return Box(pillar_shaft(data, self.options, self.theme))

    def produce_footer(self, data: Sequence[Any]) -> Box:
        return empty_box()


HeaderProducer = Callable[[Controller, Sequence[Any], "str | None"], Box]
PartProducer = Callable[[Controller, Sequence[Any]], Box]


class OverrideController(Controller):
    """Replace some producers of *base*.

    Each override is called with the base controller first, so it can reuse
    the default output. With *kinds* set, overrides only apply to columns of
    those kinds (see ``pi.pillar.type_sum.column_kind``).
    """

    def __init__(
        self,
        base: Controller | None = None,
        *,
        header: HeaderProducer | None = None,
        body: PartProducer | None = None,
        footer: PartProducer | None = None,
        kinds: Collection[str] | None = None,
    ) -> None:
        self.base = base if base is not None else Controller()
        super().__init__(self.base.options, self.base.theme, self.base.type_summary)
        self._header = header
        self._body = body
        self._footer = footer
        self._kinds = frozenset(kinds) if kinds is not None else None

    def _applies(self, data: Sequence[Any]) -> bool:
        return self._kinds is None or column_kind(data) in self._kinds

    def produce_header(self, data: Sequence[Any], name: str | None = None) -> Box:
        if self._header is not None and self._applies(data):
            return self._header(self.base, data, name)
        return self.base.produce_header(data, name)

    def produce_body(self, data: Sequence[Any]) -> Box:
        if self._body is not None and self._applies(data):
            return self._body(self.base, data)
        return self.base.produce_body(data)

    def produce_footer(self, data: Sequence[Any]) -> Box:
        if self._footer is not None and self._applies(data):
            return self._footer(self.base, data)
        return self.base.produce_footer(data)


def check_box(result: Any, part: str) -> Box:
    """Return *result* if it is a usable box, else raise ``PillarContractError``."""
    if not isinstance(result, Box):
        raise PillarContractError(
            f"Controller produced {type(result).__name__} for {part!r}, expected Box"
        )
    if result.width is None:
        raise PillarContractError(f"Controller produced a box without width for {part!r}")
    return result
