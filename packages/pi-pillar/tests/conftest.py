"""Shared fixtures: options and a controller that render without colour."""

from __future__ import annotations

import pytest

from pi.pillar.controller import Controller
from pi.pillar.options import PillarOptions
from pi.pillar.styles import PlainTheme


@pytest.fixture
def options() -> PillarOptions:
    """Default options with colour off, independent of the environment."""
    return PillarOptions(color=False)


@pytest.fixture
def controller(options: PillarOptions) -> Controller:
    """A controller that renders without ANSI styling."""
    return Controller(options=options, theme=PlainTheme())
