"""Data model for type descriptors, member tables and member metadata."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


# ---------------------------------------------------------------------------
# NO_DEFAULT: singleton for "no default-value directive"
# ---------------------------------------------------------------------------

class _NoDefaultType:
    """Sentinel for a member without a default-value directive.

    ``None`` is a legitimate directive value, so absence needs its own marker.
    """

    _instance: _NoDefaultType | None = None

    def __new__(cls) -> _NoDefaultType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_DEFAULT"

    def __bool__(self) -> bool:
        return False


NO_DEFAULT = _NoDefaultType()


# ---------------------------------------------------------------------------
# Kind: capability classification of a target type
# ---------------------------------------------------------------------------

class Kind(Enum):
    Dynamic = auto()    # no static type: untyped value graph
    Bool = auto()
    Int = auto()
    Float = auto()
    Decimal = auto()
    Str = auto()
    Enum = auto()
    DateTime = auto()
    Date = auto()
    TimeDelta = auto()
    Uuid = auto()
    Array = auto()      # fixed-length sequence (tuple)
    List = auto()       # dynamically sized sequence (list, set, frozenset)
    Dict = auto()
    Object = auto()     # named-member aggregate


SCALAR_KINDS = frozenset({Kind.Bool, Kind.Int, Kind.Float, Kind.Decimal})
SPECIAL_KINDS = frozenset({Kind.DateTime, Kind.Date, Kind.TimeDelta, Kind.Uuid})

# Kinds whose non-nullable form has a zero value instead of None.
VALUE_KINDS = SCALAR_KINDS | SPECIAL_KINDS | {Kind.Enum}

# Kinds accepted as mapping keys.
KEY_KINDS = VALUE_KINDS | {Kind.Str}


# ---------------------------------------------------------------------------
# Member metadata
# ---------------------------------------------------------------------------

METADATA_KEY = "tinyjson"


@dataclass(frozen=True, slots=True)
class DataMember:
    """Declarative per-member directives.

    - ``name``: JSON key to use instead of the attribute name
    - ``ignore``: exclude the member from parsing and writing
    - ``default``: value pre-set on accessor members before JSON data is applied
    """

    name: str | None = None
    ignore: bool = False
    default: Any = NO_DEFAULT


def data_member(
    name: str | None = None, *, ignore: bool = False, default: Any = NO_DEFAULT
) -> dict[str, DataMember]:
    """Metadata mapping for ``dataclasses.field(metadata=...)``."""
    return {METADATA_KEY: DataMember(name=name, ignore=ignore, default=default)}


# ---------------------------------------------------------------------------
# MemberDef / MemberTable
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class MemberDef:
    name: str           # attribute name on the instance
    key: str            # JSON key (rename override or attribute name)
    hint: Any
    accessor: bool = False  # property rather than a bare field
    readable: bool = True
    writable: bool = True
    ignore: bool = False
    default: Any = NO_DEFAULT


@dataclass(slots=True)
class MemberTable:
    """Settable/readable members of one aggregate type.

    ``fields`` and ``accessors`` are keyed by the case-folded JSON key and
    exclude ignored members; ``ordered`` keeps declaration order (fields
    first) for the writer.
    """

    fields: dict[str, MemberDef] = field(default_factory=dict)
    accessors: dict[str, MemberDef] = field(default_factory=dict)
    ordered: list[MemberDef] = field(default_factory=list)
    frozen: bool = False

    def lookup(self, key: str) -> MemberDef | None:
        folded = key.casefold()
        member = self.fields.get(folded)
        if member is None:
            member = self.accessors.get(folded)
        return member


# ---------------------------------------------------------------------------
# TypeDef
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class TypeDef:
    kind: Kind
    target: Any = None              # concrete class (origin for generics)
    nullable: bool = False
    args: tuple[Any, ...] = ()      # type arguments
    container: type | None = None   # factory for Array/List/Dict results
    flag: bool = False              # Enum is a Flag
    hint: Any = None                # the hint this descriptor was built from
    members: MemberTable | None = None  # resolved lazily for Kind.Object
