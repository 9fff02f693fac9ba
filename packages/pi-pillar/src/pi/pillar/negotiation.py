"""Width negotiation for boxes and pillars."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pi.pillar.box import Box, PillarContractError

if TYPE_CHECKING:
    from pi.pillar.assembler import Pillar

# Parts that may be truncated freely; every other part must fit whole.
OPTIONAL_PARTS = frozenset({"footer"})


def negotiate(box: Box) -> tuple[int, int]:
    """Return ``(min_width, ideal_width)`` for *box*.

    Raises ``PillarContractError`` when the box declares no usable width.
    """
    if box.width is None:
        raise PillarContractError(f"Cannot negotiate width of {box.content!r}: no width")
    min_width = box.width if box.min_width is None else box.min_width
    if min_width > box.width:
        raise PillarContractError(
            f"Inconsistent widths for {box.content!r}: min {min_width} > ideal {box.width}"
        )
    return min_width, box.width


def negotiate_pillar(pillar: Pillar, budget: int | None = None) -> tuple[int, int] | None:
    """Return the ``(min_width, ideal_width)`` of *pillar*, or ``None`` to skip.

    A pillar is as wide as its widest part. It is skipped when any required
    part needs more than *budget* columns; optional parts are truncated
    instead. No budget means unlimited room.
    """
    min_width = 0
    ideal_width = 0
    for name, box in pillar.parts.items():
        part_min, part_ideal = negotiate(box)
        ideal_width = max(ideal_width, part_ideal)
        if name in OPTIONAL_PARTS:
            continue
        if budget is not None and part_min > budget:
            return None
        min_width = max(min_width, part_min)
    return min_width, ideal_width


def fits(pillar: Pillar, budget: int) -> bool:
    return negotiate_pillar(pillar, budget) is not None
