"""String literal codec: quoted JSON text <-> Python ``str``."""

from __future__ import annotations

import re

from .splitter import is_quoted

_UNESCAPE_RE = re.compile(r'\\(?:u([0-9a-fA-F]{4})|(["\\/bfnrt]))')
_ESCAPE_RE = re.compile(r'["\\\x00-\x1f]')
_SURROGATE_RE = re.compile("[\ud800-\udfff]")

_UNESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
}


def decode_string(segment: str) -> str:
    """Unescape a quoted segment.

    - ``\\"``, ``\\\\``, ``\\/``, ``\\b``, ``\\f``, ``\\n``, ``\\r``, ``\\t`` → one character
    - ``\\uXXXX`` → one code unit; escaped surrogate pairs are joined
    - any other backslash sequence is kept literally
    - segments of length <= 2 decode to ``""``; unquoted segments are returned as-is
    """
    if len(segment) <= 2:
        return ""
    if not is_quoted(segment):
        return segment

    text = _UNESCAPE_RE.sub(_unescape, segment[1:-1])
    if _SURROGATE_RE.search(text):
        text = text.encode("utf-16", "surrogatepass").decode("utf-16", "surrogatepass")
    return text


def _unescape(match: re.Match[str]) -> str:
    hex_digits, simple = match.groups()
    if hex_digits is not None:
        return chr(int(hex_digits, 16))
    return _UNESCAPES[simple]


def encode_string(text: str) -> str:
    """Quote and escape *text*; other control characters become ``\\u00XX``."""
    return '"' + _ESCAPE_RE.sub(_escape, text) + '"'


def _escape(match: re.Match[str]) -> str:
    char = match.group()
    escaped = _ESCAPES.get(char)
    if escaped is None:
        escaped = f"\\u{ord(char):04X}"
    return escaped
