"""Column kind inference and short type abbreviations."""

from __future__ import annotations

import datetime as _dt
import numbers
from typing import Any, Literal, Sequence

ColumnKind = Literal[
    "logical",
    "integer",
    "double",
    "character",
    "date",
    "datetime",
    "list",
    "generic",
]

_ABBREVIATIONS: dict[str, str] = {
    "logical": "lgl",
    "integer": "int",
    "double": "dbl",
    "character": "chr",
    "date": "date",
    "datetime": "dttm",
    "list": "list",
    "generic": "obj",
}

_CONTAINERS = (list, tuple, dict, set, frozenset)


def value_kind(value: Any) -> ColumnKind:
    """Classify a single non-missing cell."""
    if isinstance(value, bool):
        return "logical"
    if isinstance(value, numbers.Integral):
        return "integer"
    if isinstance(value, numbers.Real):
        return "double"
    if isinstance(value, str):
        return "character"
    # datetime is a subclass of date
    if isinstance(value, _dt.datetime):
        return "datetime"
    if isinstance(value, _dt.date):
        return "date"
    if isinstance(value, _CONTAINERS):
        return "list"
    return "generic"


def column_kind(data: Sequence[Any]) -> ColumnKind:
    """Infer the kind of a whole column.

    ``None`` cells are missing and do not vote. An empty or all-missing
    column is logical. Integers mixed with floats are double; any other mix
    is generic.
    """
    kinds = {value_kind(value) for value in data if value is not None}
    if not kinds:
        return "logical"
    if len(kinds) == 1:
        return kinds.pop()
    if kinds == {"integer", "double"}:
        return "double"
    return "generic"


def type_summary(data: Sequence[Any]) -> str:
    """Return the abbreviated type of a column, e.g. ``"dbl"``."""
    return _ABBREVIATIONS[column_kind(data)]
