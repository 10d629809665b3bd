"""Deferred computation

A suspended unit of asynchronous work that yields a value when forced.

Forcing is a one-shot transition from "unforced" to "forced": the second
force() raises AlreadyForcedError. cache() gives a shared variant backed
by kungfu's acache: it may be forced any number of times and replays
the first value. The wrapped work still runs at most once, so forcing a
cache again after a fault raises AlreadyForcedError.

Faults raised by the wrapped work are not caught here; they reach
whoever awaits the forced coroutine."""

from __future__ import annotations

import asyncio
import enum
import logging
import typing
from collections.abc import Awaitable, Callable, Coroutine

from kungfu.library.caching import acache

from ._errors import AlreadyForcedError

logger = logging.getLogger(__name__)

type Thunk[T] = Callable[[], Coroutine[typing.Any, typing.Any, T]]


class State(enum.Enum):
    UNFORCED = "unforced"
    FORCED = "forced"


class Deferred[T]:
    """One-shot lazy coroutine.

    Monadic laws (observed through force):
    - Left identity: Deferred.retn(a).bind(f) ≡ f(a)
    - Right identity: m.bind(Deferred.retn) ≡ m
    - Associativity: m.bind(f).bind(g) ≡ m.bind(x => f(x).bind(g))
    """

    __slots__ = ("_thunk", "_state", "_name", "_shared")

    def __init__(
        self,
        thunk: Thunk[T],
        /,
        *,
        name: str | None = None,
        shared: bool = False,
    ) -> None:
        """Create Deferred from a fn returning coroutine. shared lifts the one-shot check."""
        self._thunk = thunk
        self._shared = shared
        self._state = State.UNFORCED
        self._name = name or getattr(thunk, "__qualname__", type(self).__name__)

    @staticmethod
    def retn[V](value: V) -> Deferred[V]:
        """Deferred computation immediately yielding value."""

        async def wrapper() -> V:
            return value

        return Deferred(wrapper)

    @staticmethod
    def from_awaitable[V](factory: Callable[[], Awaitable[V]]) -> Deferred[V]:
        """Wrap any awaitable factory (coroutine fn, task factory, future factory)."""

        async def wrapper() -> V:
            return await factory()

        return Deferred(wrapper, name=getattr(factory, "__qualname__", None))

    @property
    def state(self) -> State:
        return self._state

    @property
    def forced(self) -> bool:
        return self._state is not State.UNFORCED

    def map[U](self, f: Callable[[T], U], /) -> Deferred[U]:
        """Functor fmap - apply function to the produced value."""

        async def wrapper() -> U:
            return f(await self.force())

        return Deferred(wrapper)

    def bind[U](self, f: Callable[[T], Deferred[U]], /) -> Deferred[U]:
        """Monadic bind (>>=): force self, then force f(value)."""

        async def wrapper() -> U:
            value = await self.force()
            return await f(value).force()

        return Deferred(wrapper)

    def force(self) -> Coroutine[typing.Any, typing.Any, T]:
        """
        Start the computation, returning the coroutine to await.

        The state flips synchronously, so a second call fails before any
        work is scheduled.
        """
        if self._shared:
            self._state = State.FORCED
            return self._thunk()
        if self._state is not State.UNFORCED:
            logger.debug("refusing to force %s twice", self._name)
            raise AlreadyForcedError(self._name)
        self._state = State.FORCED
        return self._thunk()

    def cache(self) -> Deferred[T]:
        """Cache the result - only compute once."""
        if self._shared:
            return self
        return Deferred(acache(self.force), name=f"cached {self._name}", shared=True)

    def __await__(self) -> typing.Generator[typing.Any, None, T]:
        """Allow direct await on the deferred (forces it)."""
        return self.force().__await__()

    def __repr__(self) -> str:
        return f"Deferred({self._name}, {self._state.value})"


def gather[T](*deferreds: Deferred[T]) -> Deferred[list[T]]:
    """
    Force homogeneous deferred computations concurrently.

    Values come back in argument order. The first fault propagates,
    as with asyncio.gather.
    """

    async def wrapper() -> list[T]:
        return list(await asyncio.gather(*(d.force() for d in deferreds)))

    return Deferred(wrapper)


__all__ = (
    "Deferred",
    "State",
    "gather",
)
