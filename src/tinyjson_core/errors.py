"""Exceptions raised by TinyJSON Core.

Parsing never raises for malformed input; the only failures that escape are
the ones for which no sensible default value exists.
"""

from __future__ import annotations


class TinyJsonError(Exception):
    """Base class for all TinyJSON Core errors."""


class ConstructionError(TinyJsonError, TypeError):
    """A target type cannot be instantiated (abstract class, Protocol, required args)."""

    def __init__(self, target: object, reason: str) -> None:
        super().__init__(f"cannot construct {target!r}: {reason}")
        self.target = target
        self.reason = reason
