"""
Lift values into EffectStack.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from typing import Never

from kungfu import Error, Ok

from .._types import Outcome
from ..stack import EffectStack
from ..writer import Log, WriterResult

def pure[T, W](
    value: T,
    *,
    log: Iterable[W] = (),
) -> EffectStack[T, Never, W]:
    """
    Lift value into the stack with optional log.

    Example:
        from effectstack import lift as L

        user = L.up.pure(User(id=42), log=["created user"])
        # WriterResult(Ok(User(id=42)), log=Log(['created user']))
    """
    return from_result(Ok(value), log=log)

def tell[W](log: Iterable[W]) -> EffectStack[None, Never, W]:
    """Create stack with only log, no value."""
    return pure(None, log=log)

def from_result[T, E, W](
    result: Outcome[T, E],
    *,
    log: Iterable[W] = (),
) -> EffectStack[T, E, W]:
    """Lift Outcome into the stack with log."""
    entries = Log(log)

    async def run() -> WriterResult[T, E, Log[W]]:
        return WriterResult(result, entries)

    return EffectStack(run)

def fail[E, W](
    error: E,
    *,
    log: Iterable[W] = (),
) -> EffectStack[Never, E, W]:
    """
    Create always-failing stack with optional log.

    Example:
        failed = L.up.fail("could not get thing", log=["getting thing"])
    """
    return from_result(Error(error), log=log)

def from_coro[T](func: Callable[[], Awaitable[T]]) -> EffectStack[T, Never, Never]:
    """
    Lift an async function returning a plain value.

    The value is wrapped in Ok with an empty log. Exceptions raised by
    func are faults and propagate; they are not turned into Error.
    """
    async def run() -> WriterResult[T, Never, Log[Never]]:
        return WriterResult(Ok(await func()), Log())

    return EffectStack(run)

__all__ = (
    "pure",
    "tell",
    "from_result",
    "fail",
    "from_coro",
)
