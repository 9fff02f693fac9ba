"""pi-pillar: fixed-width rendering of tabular data under a width budget."""

# Boxes and errors
from pi.pillar.box import Box, Ornament, PillarContractError, empty_box, new_ornament

# Layout and rendering
from pi.pillar.colonnade import (
    Colonnade,
    ColumnDescriptor,
    build_colonnade,
    format_table,
    render_colonnade,
)

# Extension protocol
from pi.pillar.controller import Controller, OverrideController

# Width negotiation
from pi.pillar.negotiation import negotiate, negotiate_pillar

# Configuration
from pi.pillar.options import PillarOptions, get_options, load_options, set_options

# Pillars
from pi.pillar.assembler import Pillar, new_pillar, pillar, render_pillar, row_id_pillar

# Shafts
from pi.pillar.shaft import LinesShaft, NumericShaft, Shaft, pillar_shaft, register_shaft

# Styling
from pi.pillar.styles import AnsiTheme, PillarTheme, PlainTheme

# Text measurement
from pi.pillar.text import truncate_to_width, visible_width

# Type abbreviations
from pi.pillar.type_sum import column_kind, type_summary

__all__ = [
    "AnsiTheme",
    "Box",
    "Colonnade",
    "ColumnDescriptor",
    "Controller",
    "LinesShaft",
    "NumericShaft",
    "Ornament",
    "OverrideController",
    "Pillar",
    "PillarContractError",
    "PillarOptions",
    "PillarTheme",
    "PlainTheme",
    "Shaft",
    "build_colonnade",
    "column_kind",
    "empty_box",
    "format_table",
    "get_options",
    "load_options",
    "negotiate",
    "negotiate_pillar",
    "new_ornament",
    "new_pillar",
    "pillar",
    "pillar_shaft",
    "register_shaft",
    "render_colonnade",
    "render_pillar",
    "row_id_pillar",
    "set_options",
    "truncate_to_width",
    "type_summary",
    "visible_width",
]
