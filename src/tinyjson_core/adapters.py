"""Primitive adapters: validated parsing, zero values and round-trip formatting.

Every ``parse_*`` function returns ``None`` when the text is not valid for its
value family; :func:`parse_scalar` turns that into ``None`` or the zero value
depending on the target's nullability.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation
from enum import Enum, Flag
from functools import reduce
from operator import or_
from typing import Any, Callable
from uuid import UUID

from .model import Kind, TypeDef

_INTEGER_RE = re.compile(r"^[+-]?\d+$")
_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
FLOAT_WORDS = {"NaN": math.nan, "Infinity": math.inf, "-Infinity": -math.inf}
_DURATION_RE = re.compile(
    r"^(-)?(?:(\d{1,9})\.)?(\d{1,2}):(\d{1,2})(?::(\d{1,2})(?:\.(\d{1,7}))?)?$"
)
_DAYS_RE = re.compile(r"^(-)?(\d{1,9})$")

_ZERO_UUID = UUID(int=0)


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------

def parse_bool(text: str) -> bool | None:
    lowered = text.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return None


def parse_int(text: str) -> int | None:
    if not _INTEGER_RE.match(text):
        return None
    try:
        return int(text)
    except ValueError:
        # Beyond the interpreter's integer string conversion limit.
        return None


def parse_float(text: str) -> float | None:
    if _NUMBER_RE.match(text):
        return float(text)
    return FLOAT_WORDS.get(text)


def parse_decimal(text: str) -> Decimal | None:
    if not _NUMBER_RE.match(text):
        return None
    try:
        return Decimal(text)
    except InvalidOperation:
        return None


# ---------------------------------------------------------------------------
# Special value types
# ---------------------------------------------------------------------------

def parse_datetime(text: str) -> datetime | None:
    text = text.replace('"', "")
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    # Year-month is a valid ISO-8601 reduced precision that fromisoformat rejects.
    try:
        return datetime.strptime(text, "%Y-%m")
    except ValueError:
        return None


def parse_date(text: str) -> date | None:
    text = text.replace('"', "")
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    stamp = parse_datetime(text)
    return stamp.date() if stamp is not None else None


def parse_timedelta(text: str) -> timedelta | None:
    """Parse ``[-][d.]hh:mm[:ss[.fffffff]]`` or a bare day count."""
    text = text.replace('"', "")
    m = _DAYS_RE.match(text)
    if m:
        days = timedelta(days=int(m.group(2)))
        return -days if m.group(1) else days

    m = _DURATION_RE.match(text)
    if not m:
        return None
    sign, days, hours, minutes, seconds, fraction = m.groups()
    hours, minutes = int(hours), int(minutes)
    seconds = int(seconds) if seconds else 0
    if hours > 23 or minutes > 59 or seconds > 59:
        return None
    ticks = int(fraction.ljust(7, "0")) if fraction else 0
    value = timedelta(
        days=int(days) if days else 0,
        hours=hours,
        minutes=minutes,
        seconds=seconds,
        microseconds=ticks // 10,
    )
    return -value if sign else value


def parse_uuid(text: str) -> UUID | None:
    text = text.replace('"', "")
    try:
        return UUID(text)
    except ValueError:
        return None


_PARSERS: dict[Kind, Callable[[str], Any]] = {
    Kind.Bool: parse_bool,
    Kind.Int: parse_int,
    Kind.Float: parse_float,
    Kind.Decimal: parse_decimal,
    Kind.DateTime: parse_datetime,
    Kind.Date: parse_date,
    Kind.TimeDelta: parse_timedelta,
    Kind.Uuid: parse_uuid,
}


def parse_scalar(td: TypeDef, text: str) -> Any:
    """Parse a scalar or special value; ``None`` if nullable, else zero, on failure."""
    value = _PARSERS[td.kind](text)
    if value is None and not td.nullable:
        return zero_value(td)
    return value


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

def parse_enum(td: TypeDef, text: str, ignore_case: bool = True) -> Enum | None:
    """Parse an enum by name(s), then by value.

    ``"Bold, Italic"`` combines flag members; ``"3"`` / ``3`` look up by value.
    Unknown text gives the zero member, or ``None`` for nullable targets.
    """
    if text.startswith('"'):
        text = text[1:-1]
    cls = td.target
    member = _enum_by_names(cls, text, ignore_case)
    if member is None:
        member = _enum_by_value(cls, text.strip())
    if member is None and not td.nullable:
        member = enum_zero(cls)
    return member


def _enum_by_names(cls: type[Enum], text: str, ignore_case: bool) -> Enum | None:
    names = cls.__members__
    if ignore_case:
        names = {name.casefold(): member for name, member in names.items()}

    members = []
    for token in text.split(","):
        token = token.strip()
        if ignore_case:
            token = token.casefold()
        member = names.get(token)
        if member is None:
            if issubclass(cls, Flag) and _INTEGER_RE.match(token):
                member = _enum_by_value(cls, token)
            if member is None:
                return None
        members.append(member)

    if len(members) == 1:
        return members[0]
    if issubclass(cls, Flag):
        return reduce(or_, members)
    return None


def _enum_by_value(cls: type[Enum], text: str) -> Enum | None:
    candidates: list[Any] = [text]
    number = parse_int(text)
    if number is not None:
        candidates.insert(0, number)
    for candidate in candidates:
        try:
            return cls(candidate)
        except ValueError:
            continue
    return None


def enum_zero(cls: type[Enum]) -> Enum | None:
    """The member valued 0, else the first declared member."""
    members = list(cls.__members__.values())
    for member in members:
        if member.value == 0:
            return member
    if issubclass(cls, Flag):
        try:
            return cls(0)
        except ValueError:
            pass
    return members[0] if members else None


def format_enum(value: Enum) -> str:
    """Name of *value*; flag combinations as ``"A, B"``, unnamed bits as decimal."""
    cls = type(value)
    if not isinstance(value, Flag):
        return value.name

    raw = value.value
    for name, member in cls.__members__.items():
        if member.value == raw:
            return name
    if not isinstance(raw, int) or raw == 0:
        return str(raw)

    remaining = raw
    names: list[str] = []
    singles = sorted(
        (m for m in cls.__members__.values() if m.value),
        key=lambda m: m.value,
        reverse=True,
    )
    for member in singles:
        if remaining & member.value == member.value:
            names.append(member.name)
            remaining -= member.value
    if remaining:
        return str(raw)
    return ", ".join(reversed(names))


# ---------------------------------------------------------------------------
# Zero values
# ---------------------------------------------------------------------------

def zero_value(td: TypeDef) -> Any:
    """Default value of a non-nullable value kind; ``None`` for everything else."""
    kind = td.kind
    if kind is Kind.Bool:
        return False
    if kind is Kind.Int:
        return 0
    if kind is Kind.Float:
        return 0.0
    if kind is Kind.Decimal:
        return Decimal(0)
    if kind is Kind.Enum:
        return enum_zero(td.target)
    if kind is Kind.DateTime:
        return datetime.min
    if kind is Kind.Date:
        return date.min
    if kind is Kind.TimeDelta:
        return timedelta(0)
    if kind is Kind.Uuid:
        return _ZERO_UUID
    return None


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

def format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def format_timedelta(value: timedelta) -> str:
    """Constant format ``[-][d.]hh:mm:ss[.fffffff]``."""
    total = (value.days * 86400 + value.seconds) * 1_000_000 + value.microseconds
    sign = "-" if total < 0 else ""
    seconds, micros = divmod(abs(total), 1_000_000)
    minutes, seconds = divmod(seconds, 60)
    hours, minutes = divmod(minutes, 60)
    days, hours = divmod(hours, 24)

    text = f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    if days:
        text = f"{days}.{text}"
    if micros:
        text = f"{text}.{micros * 10:07d}"
    return sign + text
