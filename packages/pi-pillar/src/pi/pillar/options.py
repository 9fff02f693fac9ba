"""Display options with layered precedence.

Values are resolved as defaults < environment variables < explicit
overrides. Options are read once per display call and never mutated
during layout.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

# --- Options schema ---


@dataclass(frozen=True)
class PillarOptions:
    """Controls number formatting and table layout."""

    # Significant digits shown for non-integer numbers.
    sigfig: int = 3
    # Widest decimal representation before a numeric column switches to
    # scientific notation.
    max_dec_width: int = 13
    # Narrowest width a character column may be truncated to.
    min_chars: int = 3
    # How many omitted column names the summary line lists.
    max_extra_cols: int = 100
    bold: bool = False
    color: bool = True
    # Total character budget; None means ask the terminal.
    width: int | None = None


_ENV_VARS: dict[str, str] = {
    "sigfig": "PILLAR_SIGFIG",
    "max_dec_width": "PILLAR_MAX_DEC_WIDTH",
    "min_chars": "PILLAR_MIN_CHARS",
    "max_extra_cols": "PILLAR_MAX_EXTRA_COLS",
    "bold": "PILLAR_BOLD",
    "color": "PILLAR_COLOR",
    "width": "PILLAR_WIDTH",
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"Invalid boolean for {name}: {raw!r}")


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"Invalid integer for {name}: {raw!r}") from None


def options_from_env(env: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Collect option values set through ``PILLAR_*`` environment variables.

    ``NO_COLOR`` (any value) disables colour unless ``PILLAR_COLOR`` says
    otherwise.
    """
    if env is None:
        env = os.environ

    result: dict[str, Any] = {}
    if "NO_COLOR" in env:
        result["color"] = False

    for key, var in _ENV_VARS.items():
        raw = env.get(var)
        if raw is None or raw == "":
            continue
        if key in ("bold", "color"):
            result[key] = _parse_bool(var, raw)
        else:
            result[key] = _parse_int(var, raw)
    return result


def _validate(options: PillarOptions) -> PillarOptions:
    if options.sigfig < 1:
        raise ValueError(f"sigfig must be at least 1, got {options.sigfig}")
    if options.min_chars < 1:
        raise ValueError(f"min_chars must be at least 1, got {options.min_chars}")
    if options.max_dec_width < 1:
        raise ValueError(f"max_dec_width must be at least 1, got {options.max_dec_width}")
    if options.max_extra_cols < 0:
        raise ValueError(f"max_extra_cols must not be negative, got {options.max_extra_cols}")
    if options.width is not None and options.width < 0:
        raise ValueError(f"width must not be negative, got {options.width}")
    return options


def load_options(
    overrides: Mapping[str, Any] | None = None,
    env: Mapping[str, str] | None = None,
) -> PillarOptions:
    """Build options from defaults, the environment and *overrides*.

    ``None`` values in *overrides* are ignored. Unknown keys raise
    ``ValueError``.
    """
    known = {f.name for f in fields(PillarOptions)}
    merged = options_from_env(env)
    for key, value in (overrides or {}).items():
        if key not in known:
            raise ValueError(f"Unknown option: {key}")
        if value is None:
            continue
        merged[key] = value
    return _validate(PillarOptions(**merged))


# --- Process-wide default ---

_global_options: PillarOptions | None = None


def get_options() -> PillarOptions:
    global _global_options
    if _global_options is None:
        _global_options = load_options()
    return _global_options


def set_options(options: PillarOptions | None = None, **overrides: Any) -> PillarOptions:
    """Replace the process-wide default options.

    Passing ``None`` with no overrides resets to a fresh environment read.
    """
    global _global_options
    if options is None and not overrides:
        _global_options = None
        return get_options()
    base = options if options is not None else get_options()
    _global_options = _validate(replace(base, **overrides))
    return _global_options
