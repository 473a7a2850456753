"""Type-directed value parser: (target type, JSON segment) → Python value.

Malformed input never raises; a segment that does not fit its target yields
``None`` (reference or nullable targets) or the zero value (non-nullable
value targets) and parsing continues with its siblings.
"""

from __future__ import annotations

import logging
from typing import Any

from .adapters import (
    FLOAT_WORDS,
    parse_enum,
    parse_float,
    parse_int,
    parse_scalar,
    zero_value,
)
from .literals import decode_string
from .model import KEY_KINDS, SCALAR_KINDS, SPECIAL_KINDS, VALUE_KINDS, Kind, TypeDef
from .splitter import (
    is_array_shaped,
    is_object_shaped,
    is_quoted,
    segments_of,
    strip_whitespace,
)
from .typedef import describe

logger = logging.getLogger(__name__)

NULL_LITERAL = "null"


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def loads(text: str, target: Any = None, *, ignore_enum_case: bool = True) -> Any:
    """Parse JSON *text* into an instance of *target*.

    With no target (or ``Any``/``object``) the result is an untyped graph of
    ``dict[str, Any]``, ``list[Any]`` and scalars.
    """
    return parse_value(describe(target), strip_whitespace(text), ignore_enum_case)


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

def parse_value(td: TypeDef, segment: str, ignore_enum_case: bool = True) -> Any:
    """Parse a whitespace-free *segment* against the descriptor *td*."""
    if not segment or segment == NULL_LITERAL:
        if td.nullable or td.kind not in VALUE_KINDS:
            return None
        return zero_value(td)

    kind = td.kind
    if kind is Kind.Object:
        return _parse_aggregate(td, segment, ignore_enum_case)
    if kind in SCALAR_KINDS or kind in SPECIAL_KINDS:
        return parse_scalar(td, segment)
    if kind is Kind.Enum:
        return parse_enum(td, segment, ignore_enum_case)
    if kind is Kind.Str:
        return decode_string(segment)
    if kind is Kind.Array or kind is Kind.List:
        return _parse_sequence(td, segment, ignore_enum_case)
    if kind is Kind.Dict:
        return _parse_mapping(td, segment, ignore_enum_case)
    return parse_dynamic(segment)


def _parse_aggregate(td: TypeDef, segment: str, ignore_enum_case: bool) -> Any:
    if not is_object_shaped(segment):
        logger.debug("Expected an object for %r, got %.40r", td.hint, segment)
        return None
    from .aggregate import parse_object
    return parse_object(td, segment, ignore_enum_case)


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------

def _element_types(td: TypeDef, count: int) -> list[TypeDef]:
    args = td.args
    if td.kind is Kind.Array and args and args[-1] is not Ellipsis:
        # Positional tuple: extra elements have no static type.
        return [describe(args[i] if i < len(args) else None) for i in range(count)]
    element = describe(args[0] if args else None)
    return [element] * count


def _parse_sequence(td: TypeDef, segment: str, ignore_enum_case: bool) -> Any:
    if not is_array_shaped(segment):
        logger.debug("Expected an array for %r, got %.40r", td.hint, segment)
        return None

    with segments_of(segment) as elems:
        types = _element_types(td, len(elems))
        items = [
            parse_value(element_td, elem, ignore_enum_case)
            for element_td, elem in zip(types, elems)
        ]
    container = td.container or list
    if container is list:
        return items
    try:
        return container(items)
    except TypeError:
        logger.debug("Cannot build %r from parsed elements", container)
        return None


def _parse_mapping(td: TypeDef, segment: str, ignore_enum_case: bool) -> Any:
    if not is_object_shaped(segment):
        logger.debug("Expected an object for %r, got %.40r", td.hint, segment)
        return None

    key_td = describe(td.args[0])
    value_td = describe(td.args[1] if len(td.args) > 1 else None)
    if key_td.kind not in KEY_KINDS:
        logger.debug("Unsupported mapping key type %r", td.args[0])
        return None

    with segments_of(segment) as elems:
        if len(elems) % 2:
            logger.debug("Odd segment count in object for %r", td.hint)
            return None

        is_string_key = key_td.kind is Kind.Str
        result = td.container() if td.container is not None else {}
        for i in range(0, len(elems), 2):
            raw_key = elems[i]
            if not raw_key or (is_string_key and len(raw_key) < 2):
                continue
            if is_string_key:
                key = decode_string(raw_key) if raw_key[0] == '"' else raw_key
            else:
                if raw_key[0] == '"':
                    raw_key = raw_key[1:-1]
                key = parse_value(key_td, raw_key, ignore_enum_case)
            result[key] = parse_value(value_td, elems[i + 1], ignore_enum_case)
    return result


# ---------------------------------------------------------------------------
# Dynamic fallback
# ---------------------------------------------------------------------------

def parse_dynamic(segment: str) -> Any:
    """Parse without a static type into dicts, lists and scalars."""
    if not segment:
        return None

    if is_object_shaped(segment):
        with segments_of(segment) as elems:
            if len(elems) % 2:
                return None
            return {
                decode_string(elems[i]): parse_dynamic(elems[i + 1])
                for i in range(0, len(elems), 2)
            }

    if is_array_shaped(segment):
        with segments_of(segment) as elems:
            return [parse_dynamic(elem) for elem in elems]

    if is_quoted(segment):
        return decode_string(segment)

    if segment in FLOAT_WORDS:
        return FLOAT_WORDS[segment]

    head = segment[0]
    if head.isdigit() or head == "-":
        if "." in segment or "e" in segment or "E" in segment:
            return parse_float(segment)
        return parse_int(segment)

    lowered = segment.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return None
