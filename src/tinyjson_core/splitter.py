"""Splitter: whitespace elision and top-level segmentation of container text."""

from __future__ import annotations

import re
from collections.abc import Iterator
from contextlib import contextmanager

from .scratch import acquire_segments, release_segments, text_buffer

# A quoted run, escape-aware; an unterminated run extends to the end of text.
_STRING_RE = re.compile(r'"(?:[^"\\]|\\.)*"?', re.DOTALL)
_WHITESPACE_OR_STRING_RE = re.compile(r'"(?:[^"\\]|\\.)*"?|\s+', re.DOTALL)


# ---------------------------------------------------------------------------
# Whitespace
# ---------------------------------------------------------------------------

def strip_whitespace(text: str) -> str:
    """Remove all whitespace that is not inside quoted text."""
    return _WHITESPACE_OR_STRING_RE.sub(_keep_strings, text)


def _keep_strings(match: re.Match[str]) -> str:
    token = match.group()
    return token if token.startswith('"') else ""


# ---------------------------------------------------------------------------
# Shape checks
# ---------------------------------------------------------------------------

def is_object_shaped(segment: str) -> bool:
    return len(segment) >= 2 and segment[0] == "{" and segment[-1] == "}"


def is_array_shaped(segment: str) -> bool:
    return len(segment) >= 2 and segment[0] == "[" and segment[-1] == "]"


def is_quoted(segment: str) -> bool:
    return len(segment) >= 2 and segment[0] == '"' and segment[-1] == '"'


# ---------------------------------------------------------------------------
# Splitting
# ---------------------------------------------------------------------------

def split(text: str) -> list[str]:
    """Split ``{a:b,c:d}`` / ``[a,b]`` into its top-level segments.

    ``,`` and ``:`` separate segments only at nesting depth zero; quoted text
    is copied through unchanged. The outer brackets are not checked, so
    malformed input still yields a best-effort split. The returned list comes
    from the per-thread pool; hand it back with :func:`release_segments` or
    use :func:`segments_of`.
    """
    segments = acquire_segments()
    if len(text) <= 2:
        return segments

    buf = text_buffer()
    depth = 0
    end = len(text) - 1
    i = 1
    while i < end:
        c = text[i]
        if c == '"':
            token = _STRING_RE.match(text, i).group()
            buf.append(token)
            i += len(token)
            continue
        if c in "[{":
            depth += 1
        elif c in "]}":
            depth -= 1
        elif c in ",:" and depth == 0:
            segments.append("".join(buf))
            buf.clear()
            i += 1
            continue
        buf.append(c)
        i += 1

    segments.append("".join(buf))
    buf.clear()
    return segments


@contextmanager
def segments_of(text: str) -> Iterator[list[str]]:
    """Borrow the split of *text* for the duration of the block."""
    segments = split(text)
    try:
        yield segments
    finally:
        release_segments(segments)
