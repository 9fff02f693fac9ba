"""Text decoration for pillar output.

Styling is an injected collaborator: producers receive a ``PillarTheme``
and call its functions, they never emit escape codes themselves.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Protocol

if TYPE_CHECKING:
    from pi.pillar.options import PillarOptions

# ── ANSI helpers ─────────────────────────────────────────────────────

_BOLD = "\x1b[1m"
_DIM = "\x1b[2m"
_RED = "\x1b[31m"
_RESET = "\x1b[0m"


def _wrap(code: str) -> Callable[[str], str]:
    def style(text: str) -> str:
        if not text:
            return text
        return f"{code}{text}{_RESET}"

    return style


def _identity(text: str) -> str:
    return text


style_bold = _wrap(_BOLD)
style_subtle = _wrap(_DIM)
style_na = _wrap(_RED)
style_neg = _wrap(_RED)


class PillarTheme(Protocol):
    subtle: Callable[[str], str]
    bold: Callable[[str], str]
    na: Callable[[str], str]
    neg: Callable[[str], str]


@dataclass(frozen=True)
class AnsiTheme:
    """Dim headers, red missing values and negative numbers."""

    subtle: Callable[[str], str] = style_subtle
    bold: Callable[[str], str] = style_bold
    na: Callable[[str], str] = style_na
    neg: Callable[[str], str] = style_neg


@dataclass(frozen=True)
class PlainTheme:
    """A ``PillarTheme`` that applies no formatting."""

    subtle: Callable[[str], str] = _identity
    bold: Callable[[str], str] = _identity
    na: Callable[[str], str] = _identity
    neg: Callable[[str], str] = _identity


def default_theme(options: PillarOptions) -> PillarTheme:
    if options.color:
        return AnsiTheme()
    return PlainTheme()


def subtle_lines(theme: PillarTheme, lines: list[str]) -> list[str]:
    return [theme.subtle(line) for line in lines]
