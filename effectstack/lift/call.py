"""
Producers of plain Outcomes as stack steps.

Most domain code is an async function returning Ok/Error and knows
nothing about logs. call() runs it as a stack step; lifted() can write
an entry first, so the log records what was attempted even when the
outcome is an Error.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from functools import wraps

from .._types import Outcome
from ..stack import EffectStack
from ..writer import Log, WriterResult

def call[T, E, **P](
    func: Callable[P, Awaitable[Outcome[T, E]]],
    *args: P.args,
    **kwargs: P.kwargs,
) -> EffectStack[T, E, str]:
    """Step whose outcome is await func(*args, **kwargs), with an empty log."""

    async def wrapper() -> WriterResult[T, E, Log[str]]:
        return WriterResult(await func(*args, **kwargs), Log())

    return EffectStack(wrapper)

def lifted(entry: Callable[..., str] | None = None):
    """
    Decorator turning an Outcome-returning async function into a step.

    entry, when given, builds the log line from the call arguments and
    is written before func runs:

        @lifted(lambda user_id: f"fetch user {user_id}")
        async def fetch_user(user_id: int) -> Result[User, str]: ...
    """

    def decorate[T, E, **P](
        func: Callable[P, Awaitable[Outcome[T, E]]],
    ) -> Callable[P, EffectStack[T, E, str]]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> EffectStack[T, E, str]:
            if entry is None:
                return call(func, *args, **kwargs)
            line = entry(*args, **kwargs)
            return EffectStack.tell(line).then(lambda _: call(func, *args, **kwargs))

        return wrapper

    return decorate

__all__ = (
    "call",
    "lifted",
)
