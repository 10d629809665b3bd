"""
WriterResult - Outcome with accumulated log
===========================================
"""

from __future__ import annotations

import typing

from .._types import Outcome


class WriterResult[T, E, W]:
    """
    Outcome with accumulated writer log.

    Combines:
    - Outcome[T, E]: computation result (success or error)
    - W: accumulated log

    This is the forced form of an EffectStack. It unpacks as
    ``(outcome, entries)`` and compares equal to that plain pair.
    """

    __slots__ = ("_result", "_log")
    __match_args__ = ("result", "log")

    def __init__(self, result: Outcome[T, E], log: W) -> None:
        self._result = result
        self._log = log

    @property
    def result(self) -> Outcome[T, E]:
        """The underlying Outcome."""
        return self._result

    @property
    def log(self) -> W:
        """The accumulated log."""
        return self._log

    def __iter__(self) -> typing.Iterator[typing.Any]:
        yield self._result
        yield self._log

    def __eq__(self, other: object) -> bool:
        if isinstance(other, tuple):
            return (self._result, self._log) == other
        if not isinstance(other, WriterResult):
            return NotImplemented
        return (self._result, self._log) == (other._result, other._log)

    def __hash__(self) -> int:
        return hash((self._result, self._log))

    def __repr__(self) -> str:
        return f"WriterResult({self._result!r}, log={self._log!r})"


__all__ = ("WriterResult",)
