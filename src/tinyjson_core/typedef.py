"""Type descriptor cache and member table resolution.

Descriptors are built on first use and cached by type identity for the life
of the process. Concurrent first use may build the same descriptor twice;
the later write wins and both results are equivalent.
"""

from __future__ import annotations

import collections.abc as abc
import dataclasses
import types
import typing
from datetime import date, datetime, timedelta
from decimal import Decimal
from enum import Enum, Flag
from typing import Any, ClassVar, TypeVar, Union
from uuid import UUID

from .model import (
    METADATA_KEY,
    DataMember,
    Kind,
    MemberDef,
    MemberTable,
    TypeDef,
)

_DESCRIPTORS: dict[Any, TypeDef] = {}

# Checked in order: bool before int, datetime before date.
_SIMPLE_KINDS: tuple[tuple[type, Kind], ...] = (
    (bool, Kind.Bool),
    (int, Kind.Int),
    (float, Kind.Float),
    (Decimal, Kind.Decimal),
    (str, Kind.Str),
    (datetime, Kind.DateTime),
    (date, Kind.Date),
    (timedelta, Kind.TimeDelta),
    (UUID, Kind.Uuid),
)

_ABSTRACT_SEQUENCES = (
    abc.Sequence,
    abc.MutableSequence,
    abc.Collection,
    abc.Iterable,
)
_ABSTRACT_SETS = (abc.Set, abc.MutableSet)
_ABSTRACT_MAPPINGS = (abc.Mapping, abc.MutableMapping)

_DYNAMIC = TypeDef(kind=Kind.Dynamic)


# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------

def describe(hint: Any) -> TypeDef:
    """Return the cached descriptor for *hint*, building it on first use."""
    try:
        return _DESCRIPTORS[hint]
    except KeyError:
        pass
    except TypeError:
        # Unhashable hint (e.g. Literal with a list value): never cached.
        return _build(hint)

    td = _build(hint)
    _DESCRIPTORS[hint] = td
    return td


def clear_cache() -> None:
    _DESCRIPTORS.clear()


def _build(hint: Any) -> TypeDef:
    if hint is None or hint is Any or hint is object or hint is type(None):
        return _DYNAMIC
    if isinstance(hint, TypeVar):
        return _DYNAMIC
    if isinstance(hint, typing.NewType):
        return describe(hint.__supertype__)

    origin = typing.get_origin(hint)
    args = typing.get_args(hint)

    if origin is typing.Annotated:
        return describe(args[0])

    if origin is Union or origin is types.UnionType:
        return _build_union(hint, args)

    target = origin if origin is not None else hint
    if not isinstance(target, type):
        return _DYNAMIC

    if issubclass(target, Enum):
        return TypeDef(Kind.Enum, target, flag=issubclass(target, Flag), hint=hint)

    for base, kind in _SIMPLE_KINDS:
        if issubclass(target, base):
            return TypeDef(kind, target, hint=hint)

    # Aggregates are classified before containers.
    if dataclasses.is_dataclass(target):
        return TypeDef(Kind.Object, target, args=args, hint=hint)

    if issubclass(target, tuple):
        return TypeDef(Kind.Array, target, args=args, container=tuple, hint=hint)
    if issubclass(target, (list, set, frozenset)):
        return TypeDef(Kind.List, target, args=args[:1], container=target, hint=hint)
    if target in _ABSTRACT_SEQUENCES:
        return TypeDef(Kind.List, target, args=args[:1], container=list, hint=hint)
    if target in _ABSTRACT_SETS:
        container = set if target is abc.MutableSet else frozenset
        return TypeDef(Kind.List, target, args=args[:1], container=container, hint=hint)
    if issubclass(target, dict) or target in _ABSTRACT_MAPPINGS:
        container = target if issubclass(target, dict) else dict
        if not args:
            args = (str, Any)
        return TypeDef(Kind.Dict, target, args=args, container=container, hint=hint)

    return TypeDef(Kind.Object, target, args=args, hint=hint)


def _build_union(hint: Any, args: tuple[Any, ...]) -> TypeDef:
    """``Optional[X]`` is X made nullable; any other union has no static type."""
    members = [a for a in args if a is not type(None)]
    nullable = len(members) < len(args)
    if len(members) != 1:
        return TypeDef(Kind.Dynamic, nullable=nullable, hint=hint)
    inner = describe(members[0])
    if not nullable:
        return inner
    return dataclasses.replace(inner, nullable=True, hint=hint, members=None)


# ---------------------------------------------------------------------------
# Member tables
# ---------------------------------------------------------------------------

def member_table(td: TypeDef) -> MemberTable:
    """Members of an aggregate descriptor, resolved once and stored on it."""
    table = td.members
    if table is None:
        table = _build_members(td.target, _type_arguments(td))
        td.members = table
    return table


def _type_arguments(td: TypeDef) -> dict[Any, Any]:
    params = getattr(td.target, "__parameters__", ())
    if not params or not td.args:
        return {}
    return dict(zip(params, td.args))


def _build_members(cls: type, bindings: dict[Any, Any]) -> MemberTable:
    table = MemberTable(
        frozen=dataclasses.is_dataclass(cls) and cls.__dataclass_params__.frozen
    )
    directives = _declared_directives(cls)
    hints = _class_hints(cls)

    for name, hint, directive in _bare_members(cls, hints, directives):
        member = MemberDef(
            name=name,
            key=directive.name or name,
            hint=_substitute(hint, bindings),
            ignore=directive.ignore,
            default=directive.default,
        )
        table.ordered.append(member)
        if not member.ignore:
            table.fields.setdefault(member.key.casefold(), member)

    for name, prop in _properties(cls):
        directive = directives.get(name, DataMember())
        member = MemberDef(
            name=name,
            key=directive.name or name,
            hint=_substitute(_return_hint(prop), bindings),
            accessor=True,
            readable=prop.fget is not None,
            writable=prop.fset is not None,
            ignore=directive.ignore,
            default=directive.default,
        )
        table.ordered.append(member)
        if not member.ignore:
            table.accessors.setdefault(member.key.casefold(), member)

    return table


def _declared_directives(cls: type) -> dict[str, DataMember]:
    """``__data_members__`` tables merged along the MRO, subclasses last."""
    directives: dict[str, DataMember] = {}
    for klass in reversed(cls.__mro__):
        declared = vars(klass).get("__data_members__")
        if isinstance(declared, dict):
            directives.update(declared)
    return directives


def _class_hints(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except Exception:
        # Unresolvable forward references: fall back to the raw annotations.
        hints: dict[str, Any] = {}
        for klass in reversed(cls.__mro__):
            hints.update(vars(klass).get("__annotations__", {}))
        return hints


def _bare_members(cls, hints, directives):
    if dataclasses.is_dataclass(cls):
        for f in dataclasses.fields(cls):
            directive = f.metadata.get(METADATA_KEY) or directives.get(f.name, DataMember())
            yield f.name, hints.get(f.name, f.type), directive
        return

    for name, hint in hints.items():
        if name.startswith("_") or typing.get_origin(hint) is ClassVar or hint is ClassVar:
            continue
        if isinstance(getattr(cls, name, None), (property, types.FunctionType)):
            continue
        yield name, hint, directives.get(name, DataMember())


def _properties(cls: type) -> list[tuple[str, property]]:
    found: dict[str, property] = {}
    for klass in reversed(cls.__mro__):
        for name, attr in vars(klass).items():
            if isinstance(attr, property) and not name.startswith("_"):
                found[name] = attr
    return list(found.items())


def _return_hint(prop: property) -> Any:
    fget = prop.fget
    if fget is None:
        fget = prop.fset
        key = None
    else:
        key = "return"
    try:
        hints = typing.get_type_hints(fget)
    except Exception:
        return Any
    if key is None:
        values = [v for k, v in hints.items() if k != "return"]
        return values[0] if values else Any
    return hints.get(key, Any)


def _substitute(hint: Any, bindings: dict[Any, Any]) -> Any:
    """Replace type variables bound by a parametrised generic aggregate."""
    if not bindings:
        return hint
    if isinstance(hint, TypeVar):
        return bindings.get(hint, Any)
    params = getattr(hint, "__parameters__", ())
    if params:
        try:
            return hint[tuple(bindings.get(p, Any) for p in params)]
        except TypeError:
            return hint
    return hint
