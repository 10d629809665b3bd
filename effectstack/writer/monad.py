"""Writer Monad

A value paired with an ordered Log of entries.

Total and order preserving: bind concatenates the logs of both steps,
first step first, and never short-circuits."""

from __future__ import annotations

import typing
from collections.abc import Callable
from dataclasses import dataclass, field

from .log import Log

def _empty_log() -> Log[object]:
    return Log()

@dataclass(frozen=True, slots=True)
class Writer[T, W]:
    """Writer monad: (value, log).

    Monadic laws:
    - Left identity: Writer.retn(a).bind(f) == f(a)
    - Right identity: m.bind(Writer.retn) == m
    - Associativity: m.bind(f).bind(g) == m.bind(lambda x: f(x).bind(g))
    """

    value: T
    log: Log[W] = field(default_factory=_empty_log)

    @staticmethod
    def retn[V](value: V) -> Writer[V, typing.Never]:
        """Lift a value with an empty log."""
        return Writer(value, Log())

    @staticmethod
    def write[LogEntry](entry: LogEntry) -> Writer[None, LogEntry]:
        """Record a single entry without producing a value."""
        return Writer(None, Log.of(entry))

    def bind[U](self, f: Callable[[T], Writer[U, W]], /) -> Writer[U, W]:
        """Monadic bind (>>=): run f on the value, self's log first."""
        following = f(self.value)
        return Writer(following.value, self.log.combine(following.log))

    def map[U](self, f: Callable[[T], U], /) -> Writer[U, W]:
        """Functor fmap - apply function to the value, keep the log."""
        return Writer(f(self.value), self.log)

    def run(self) -> tuple[T, Log[W]]:
        """Unwrap into (value, log)."""
        return (self.value, self.log)

# Module-level forms, argument order (f, m)
def retn[T](value: T) -> Writer[T, object]:
    return Writer.retn(value)

def bind[T, U, W](f: Callable[[T], Writer[U, W]], writer: Writer[T, W], /) -> Writer[U, W]:
    return writer.bind(f)

def write[W](entry: W) -> Writer[None, W]:
    return Writer.write(entry)

def run[T, W](writer: Writer[T, W]) -> tuple[T, Log[W]]:
    return writer.run()

__all__ = (
    "Writer",
    "retn",
    "bind",
    "write",
    "run",
)
