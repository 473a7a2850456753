"""TinyJSON Core: type-directed JSON codec driven by runtime type hints."""

from .config import CodecSettings, load_settings
from .convert import TinyJson
from .errors import ConstructionError, TinyJsonError
from .model import NO_DEFAULT, DataMember, Kind, MemberDef, TypeDef, data_member
from .parser import loads, parse_value
from .typedef import describe, member_table
from .writer import dumps, write_value

__all__ = [
    "loads",
    "dumps",
    "parse_value",
    "write_value",
    "describe",
    "member_table",
    "TinyJson",
    "CodecSettings",
    "load_settings",
    "DataMember",
    "data_member",
    "NO_DEFAULT",
    "Kind",
    "MemberDef",
    "TypeDef",
    "TinyJsonError",
    "ConstructionError",
]
