"""Named-member aggregate parser: JSON object → new instance of a class."""

from __future__ import annotations

import dataclasses
import inspect
import logging
from typing import Any

from .adapters import zero_value
from .errors import ConstructionError
from .literals import decode_string
from .model import NO_DEFAULT, Kind, MemberDef, TypeDef
from .parser import parse_value
from .splitter import segments_of
from .typedef import describe, member_table

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

def construct(td: TypeDef) -> Any:
    """Instantiate ``td.target`` through its no-argument path.

    Required dataclass fields receive zero values. Abstract classes,
    Protocols and classes whose ``__init__`` demands arguments raise
    :class:`ConstructionError`.
    """
    cls = td.target
    if inspect.isabstract(cls):
        raise ConstructionError(cls, "abstract class")
    if getattr(cls, "_is_protocol", False):
        raise ConstructionError(cls, "protocol")

    kwargs = _required_field_defaults(cls) if dataclasses.is_dataclass(cls) else {}
    try:
        return cls(**kwargs)
    except TypeError as exc:
        raise ConstructionError(cls, str(exc)) from exc


def _required_field_defaults(cls: type) -> dict[str, Any]:
    table = member_table(describe(cls))
    hints = {m.name: m.hint for m in table.ordered}
    kwargs: dict[str, Any] = {}
    for f in dataclasses.fields(cls):
        if not f.init:
            continue
        if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:
            kwargs[f.name] = zero_value(describe(hints.get(f.name, f.type)))
    return kwargs


# ---------------------------------------------------------------------------
# Population
# ---------------------------------------------------------------------------

def parse_object(td: TypeDef, segment: str, ignore_enum_case: bool = True) -> Any:
    """Construct ``td.target`` and populate it from an object-shaped *segment*.

    - odd segment count → the instance as constructed
    - accessor members with a default directive are pre-set first
    - keys match members case-insensitively; fields win over accessors
    - unknown keys are ignored, read-only accessors are skipped
    """
    instance = construct(td)
    table = member_table(td)

    with segments_of(segment) as elems:
        if len(elems) % 2:
            logger.debug("Odd segment count in object for %r", td.hint)
            return instance

        for member in table.accessors.values():
            if member.default is not NO_DEFAULT and member.writable:
                value = _convert_default(member, ignore_enum_case)
                setattr(instance, member.name, value)

        for i in range(0, len(elems), 2):
            raw_key = elems[i]
            if len(raw_key) <= 2:
                continue
            member = table.lookup(decode_string(raw_key))
            if member is None or not member.writable:
                continue
            value = parse_value(describe(member.hint), elems[i + 1], ignore_enum_case)
            if table.frozen and not member.accessor:
                object.__setattr__(instance, member.name, value)
            else:
                setattr(instance, member.name, value)

    return instance


def _convert_default(member: MemberDef, ignore_enum_case: bool) -> Any:
    """Convert a default directive's value to the member's declared type."""
    value = member.default
    if value is None:
        return None
    td = describe(member.hint)
    if td.kind is Kind.Dynamic:
        return value
    if isinstance(td.target, type) and isinstance(value, td.target):
        return value
    if td.kind is Kind.Str:
        return str(value)
    return parse_value(td, str(value), ignore_enum_case)
