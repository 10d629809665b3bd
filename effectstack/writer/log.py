"""
Log - monoidal accumulator for Writer
=====================================
"""

from __future__ import annotations

from collections.abc import Iterable


class Log[A](tuple[A, ...]):
    """
    Ordered, append-only sequence of log entries.

    Immutable wrapper over tuple with monoid operations:
    - empty: the empty log (just Log())
    - combine: concatenation

    Monoid laws hold:
    - Left identity: Log().combine(x) == x
    - Right identity: x.combine(Log()) == x
    - Associativity: (x.combine(y)).combine(z) == x.combine(y.combine(z))
    """

    __slots__ = ()

    def __new__(cls, items: Iterable[A] = (), /) -> Log[A]:
        return super().__new__(cls, items)

    @staticmethod
    def of[T](*items: T) -> Log[T]:
        """Create log with items."""
        return Log[T](items)

    def combine(self, other: Iterable[A], /) -> Log[A]:
        """
        Combine two logs (monoidal append). Entries of self come first.

        Example:
            Log.of("a", "b").combine(Log.of("c"))  # Log(("a", "b", "c"))
        """
        return Log((*self, *other))

    def tell(self, item: A, /) -> Log[A]:
        """Append single item, equivalent to self.combine(Log.of(item))."""
        return Log((*self, item))

    def __repr__(self) -> str:
        return f"Log({list(self)!r})"


__all__ = ("Log",)
