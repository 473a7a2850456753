"""Codec settings, optionally loaded from a ``tinyjson.toml`` file."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, fields, replace
from datetime import date, datetime, time
from pathlib import Path
from typing import TypeAlias

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "tinyjson.toml"
SECTION = "codec"

TomlScalar: TypeAlias = str | int | float | bool | None | date | datetime | time
TomlValue: TypeAlias = TomlScalar | list["TomlValue"] | dict[str, "TomlValue"]
TomlTable: TypeAlias = dict[str, TomlValue]


@dataclass(frozen=True, slots=True)
class CodecSettings:
    ignore_enum_case: bool = True
    include_nulls: bool = False      # compact output and file output
    tab_include_nulls: bool = True   # indented string output
    encoding: str = "utf-8"


def _load_toml(path: Path) -> TomlTable:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError:
        return {}
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        logger.warning("Ignoring invalid config %s: %s", path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def load_config(root: Path | None = None, config_path: Path | None = None) -> TomlTable:
    if config_path is None:
        base = root if root is not None else Path.cwd()
        config_path = base / DEFAULT_CONFIG_NAME
    return _load_toml(config_path)


def load_settings(
    root: Path | None = None, config_path: Path | None = None
) -> CodecSettings:
    """Read the ``[codec]`` section; unknown or mistyped keys are ignored."""
    data = load_config(root=root, config_path=config_path)
    section = data.get(SECTION, {})
    if not isinstance(section, dict):
        return CodecSettings()

    defaults = CodecSettings()
    overrides: dict[str, TomlValue] = {}
    for f in fields(CodecSettings):
        if f.name not in section:
            continue
        value = section[f.name]
        if type(value) is not type(getattr(defaults, f.name)):
            logger.warning("Ignoring %s.%s: expected %s", SECTION, f.name, f.type)
            continue
        overrides[f.name] = value
    return replace(defaults, **overrides)
