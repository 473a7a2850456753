"""Value writer: Python value → compact JSON text.

Dispatch mirrors the parser's categories, so anything written with
``include_nulls=True`` parses back into an equal value of the same type.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping, Sequence, Set
from datetime import date, datetime, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

from .adapters import format_enum, format_float, format_timedelta
from .indent import apply_indented_formatting
from .literals import encode_string
from .typedef import describe, member_table

_KEY_TYPES = (str, bool, int, float, Decimal, Enum, datetime, date, timedelta, UUID)
_QUOTED_KEY_TYPES = (Enum, datetime, date, timedelta, UUID)
_BINARY_TYPES = (bytes, bytearray)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def dumps(item: Any, *, include_nulls: bool = False, indent: bool = False) -> str:
    """Serialize *item*; ``indent=True`` rewrites the result with tabs."""
    text = write_value(item, include_nulls)
    return apply_indented_formatting(text) if indent else text


def write_value(item: Any, include_nulls: bool = False) -> str:
    parts: list[str] = []
    _append_value(parts, item, include_nulls)
    return "".join(parts)


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

def _append_value(parts: list[str], item: Any, include_nulls: bool) -> None:
    if item is None:
        parts.append("null")
    elif isinstance(item, bool):
        parts.append("true" if item else "false")
    elif isinstance(item, Enum):
        parts.append(encode_string(format_enum(item)))
    elif isinstance(item, int):
        parts.append(str(item))
    elif isinstance(item, float):
        parts.append(format_float(item))
    elif isinstance(item, Decimal):
        parts.append(str(item))
    elif isinstance(item, str):
        parts.append(encode_string(item))
    elif isinstance(item, (datetime, date)):
        parts.append(f'"{item.isoformat()}"')
    elif isinstance(item, timedelta):
        parts.append(f'"{format_timedelta(item)}"')
    elif isinstance(item, UUID):
        parts.append(f'"{item}"')
    elif dataclasses.is_dataclass(type(item)):
        # Aggregates before containers, as in describe().
        _append_object(parts, item, include_nulls)
    elif isinstance(item, Mapping):
        _append_mapping(parts, item, include_nulls)
    elif isinstance(item, (Sequence, Set)) and not isinstance(item, _BINARY_TYPES):
        _append_sequence(parts, item, include_nulls)
    else:
        _append_object(parts, item, include_nulls)


def _append_mapping(parts: list[str], mapping: Mapping, include_nulls: bool) -> None:
    if not all(isinstance(key, _KEY_TYPES) for key in mapping):
        parts.append("{}")
        return

    parts.append("{")
    first = True
    for key, value in mapping.items():
        if first:
            first = False
        else:
            parts.append(",")
        if isinstance(key, str):
            parts.append(encode_string(key))
        elif isinstance(key, _QUOTED_KEY_TYPES):
            _append_value(parts, key, False)
        else:
            parts.append('"')
            _append_value(parts, key, False)
            parts.append('"')
        parts.append(":")
        _append_value(parts, value, include_nulls)
    parts.append("}")


def _append_sequence(parts: list[str], items: Any, include_nulls: bool) -> None:
    parts.append("[")
    first = True
    for value in items:
        if first:
            first = False
        else:
            parts.append(",")
        _append_value(parts, value, include_nulls)
    parts.append("]")


def _append_object(parts: list[str], item: Any, include_nulls: bool) -> None:
    """Fields first, then readable accessors, in declaration order."""
    table = member_table(describe(type(item)))
    parts.append("{")
    first = True
    for member in table.ordered:
        if member.ignore or not member.readable:
            continue
        value = getattr(item, member.name, None)
        if value is None and not include_nulls:
            continue
        if first:
            first = False
        else:
            parts.append(",")
        parts.append(encode_string(member.key))
        parts.append(":")
        _append_value(parts, value, include_nulls)
    parts.append("}")
