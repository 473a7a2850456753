"""Per-thread scratch state: a reusable text accumulator and a pool of segment lists.

Every use of the accumulator copies its result out before any nested step
that needs it again, so a single accumulator per thread is enough.
"""

from __future__ import annotations

import threading


class _Scratch(threading.local):
    def __init__(self) -> None:
        self.chars: list[str] = []
        self.pool: list[list[str]] = []


_scratch = _Scratch()


def text_buffer() -> list[str]:
    """Return this thread's accumulator, emptied."""
    buf = _scratch.chars
    buf.clear()
    return buf


def acquire_segments() -> list[str]:
    pool = _scratch.pool
    segments = pool.pop() if pool else []
    segments.clear()
    return segments


def release_segments(segments: list[str]) -> None:
    segments.clear()
    _scratch.pool.append(segments)


def pool_size() -> int:
    """Number of idle segment lists held by the calling thread."""
    return len(_scratch.pool)
