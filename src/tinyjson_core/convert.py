"""TinyJson: convenience facade over the codec with file input and output."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

from .config import CodecSettings
from .parser import loads
from .writer import dumps

logger = logging.getLogger(__name__)


class TinyJson:
    """Parse JSON text or files and write values as compact or indented JSON.

    Usage::

        codec = TinyJson()
        codec.parse('{"A": 1}', Point)       # literal JSON
        codec.parse("data/point.json", Point)  # or a path to a JSON file
        codec.convert(point)                  # '{"A":1}'
        codec.tab_convert(point)              # '{\\n\\t"A":1\\n}'
        codec.convert_to_file(point, "out.json")  # True on success
    """

    def __init__(self, settings: CodecSettings | None = None) -> None:
        self.settings = settings if settings is not None else CodecSettings()

    # -- Input ----------------------------------------------------------

    def parse(self, raw_json_or_path: str, target: Any = None) -> Any:
        """Parse *raw_json_or_path*, reading it first if it names an existing file."""
        text = raw_json_or_path
        if os.path.isfile(raw_json_or_path):
            try:
                text = Path(raw_json_or_path).read_text(encoding=self.settings.encoding)
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning("Could not read %s: %s", raw_json_or_path, exc)
                return None
        return loads(text, target, ignore_enum_case=self.settings.ignore_enum_case)

    # -- Output ---------------------------------------------------------

    def convert(self, item: Any, include_nulls: bool | None = None) -> str:
        if include_nulls is None:
            include_nulls = self.settings.include_nulls
        return dumps(item, include_nulls=include_nulls)

    def tab_convert(self, item: Any, include_nulls: bool | None = None) -> str:
        if include_nulls is None:
            include_nulls = self.settings.tab_include_nulls
        return dumps(item, include_nulls=include_nulls, indent=True)

    def convert_to_file(
        self, item: Any, file_path: str | os.PathLike[str], include_nulls: bool | None = None
    ) -> bool:
        if include_nulls is None:
            include_nulls = self.settings.include_nulls
        return self._write(file_path, dumps(item, include_nulls=include_nulls))

    def tab_convert_to_file(
        self, item: Any, file_path: str | os.PathLike[str], include_nulls: bool | None = None
    ) -> bool:
        if include_nulls is None:
            include_nulls = self.settings.include_nulls
        return self._write(file_path, dumps(item, include_nulls=include_nulls, indent=True))

    def _write(self, file_path: str | os.PathLike[str], text: str) -> bool:
        """Overwrite *file_path* with *text*; failures are logged, not raised."""
        try:
            Path(file_path).write_text(text, encoding=self.settings.encoding)
        except (OSError, ValueError) as exc:
            logger.warning("Could not write %s: %s", file_path, exc)
            return False
        return True
