"""EffectStack

Composed stack Deferred[WriterResult[T, E, Log[W]]]:
- Deferred (outermost): one-shot asynchronous computation
- Log (middle): ordered accumulation of entries
- Outcome (innermost): Ok(value) or Error(error)

bind sequences two stacks: the first is forced, its Outcome inspected,
and only on Ok is the continuation built and forced. Logs are merged in
call order. On Error the continuation is never invoked and the log
accumulated so far is kept."""

from __future__ import annotations

import asyncio
import logging
import typing
from collections.abc import Callable, Coroutine, Iterable
from typing import assert_never

from kungfu import Error, Ok

from ._helpers import merge_writer_logs
from ._types import Continuation, Outcome
from .deferred import Deferred
from .outcome import map as map_outcome
from .outcome import map_err as map_err_outcome
from .writer import Log, WriterResult

logger = logging.getLogger(__name__)

class EffectStack[T, E, W]:
    """Deferred + Log + Outcome.

    Monadic laws:
    - Left identity: pure(a).then(f) ≡ f(a)
    - Right identity: m.then(pure) ≡ m
    - Associativity: m.then(f).then(g) ≡ m.then(x => f(x).then(g))

    Every instance is forced at most once, either by run/run_async or by
    an enclosing combinator.
    """

    __slots__ = ("_deferred",)

    def __init__(
        self,
        value: Callable[[], Coroutine[typing.Any, typing.Any, WriterResult[T, E, Log[W]]]],
        /,
    ) -> None:
        """Create EffectStack from a fn returning coroutine."""
        self._deferred = Deferred(value)

    @classmethod
    def _of(cls, deferred: Deferred[WriterResult[T, E, Log[W]]]) -> EffectStack[T, E, W]:
        stack = cls.__new__(cls)
        stack._deferred = deferred
        return stack

    @staticmethod
    def pure[V](value: V) -> EffectStack[V, typing.Never, typing.Never]:
        """Lift a value into the stack with empty log."""

        async def wrapper() -> WriterResult[V, typing.Never, Log[typing.Never]]:
            return WriterResult(Ok(value), Log())

        return EffectStack(wrapper)

    @staticmethod
    def fail[Err](error: Err) -> EffectStack[typing.Never, Err, typing.Never]:
        """Stack immediately yielding Error(error) with empty log."""

        async def wrapper() -> WriterResult[typing.Never, Err, Log[typing.Never]]:
            return WriterResult(Error(error), Log())

        return EffectStack(wrapper)

    @staticmethod
    def from_outcome[V, Err](outcome: Outcome[V, Err]) -> EffectStack[V, Err, typing.Never]:
        """Lift an Outcome into the stack with empty log."""

        async def wrapper() -> WriterResult[V, Err, Log[typing.Never]]:
            return WriterResult(outcome, Log())

        return EffectStack(wrapper)

    @staticmethod
    def from_writer[V, Err, LogT](
        wr: WriterResult[V, Err, Log[LogT]],
    ) -> EffectStack[V, Err, LogT]:
        """Lift an already computed WriterResult."""

        async def wrapper() -> WriterResult[V, Err, Log[LogT]]:
            return wr

        return EffectStack(wrapper)

    @staticmethod
    def tell[LogEntry](*entries: LogEntry) -> EffectStack[None, typing.Never, LogEntry]:
        """Write entries to the log without producing a value."""

        async def wrapper() -> WriterResult[None, typing.Never, Log[LogEntry]]:
            return WriterResult(Ok(None), Log.of(*entries))

        return EffectStack(wrapper)

    # Functor operations

    def map[U](self, f: Callable[[T], U], /) -> EffectStack[U, E, W]:
        """Functor fmap - apply function to success value, preserve log."""

        async def wrapper() -> WriterResult[U, E, Log[W]]:
            wr = await self.force()
            return WriterResult(map_outcome(f, wr.result), wr.log)

        return EffectStack(wrapper)

    def map_err[F](self, f: Callable[[E], F], /) -> EffectStack[T, F, W]:
        """Map over error type."""

        async def wrapper() -> WriterResult[T, F, Log[W]]:
            wr = await self.force()
            return WriterResult(map_err_outcome(f, wr.result), wr.log)

        return EffectStack(wrapper)

    # Monad operations

    def then[U](self, f: Callable[[T], EffectStack[U, E, W]], /) -> EffectStack[U, E, W]:
        """
        Monadic bind (>>=).

        - On Ok: builds f(value), forces it, combines logs
        - On Error: short-circuit, f is never called, current log preserved
        """

        async def wrapper() -> WriterResult[U, E, Log[W]]:
            wr = await self.force()
            match wr.result:
                case Ok(value):
                    next_wr = await f(value).force()
                    return WriterResult(next_wr.result, wr.log.combine(next_wr.log))
                case Error(err):
                    logger.debug("short-circuit on %r after %d log entries", err, len(wr.log))
                    return WriterResult(Error(err), wr.log)
                case _ as unreachable:
                    assert_never(unreachable)

        return EffectStack(wrapper)

    def then_outcome[U](self, f: Callable[[T], Outcome[U, E]], /) -> EffectStack[U, E, W]:
        """Bind with function returning plain Outcome (no log contribution)."""

        async def wrapper() -> WriterResult[U, E, Log[W]]:
            wr = await self.force()
            match wr.result:
                case Ok(value):
                    return WriterResult(f(value), wr.log)
                case Error(err):
                    return WriterResult(Error(err), wr.log)
                case _ as unreachable:
                    assert_never(unreachable)

        return EffectStack(wrapper)

    # Writer operations

    def with_log(self, *entries: W) -> EffectStack[T, E, W]:
        """Append entries after a successful computation (short-circuits on Error)."""
        return self.then(lambda value: EffectStack.tell(*entries).map(lambda _: value))

    def listen(self) -> EffectStack[tuple[T, Log[W]], E, W]:
        """Get access to the log along with the value."""

        async def wrapper() -> WriterResult[tuple[T, Log[W]], E, Log[W]]:
            wr = await self.force()
            return WriterResult(map_outcome(lambda value: (value, wr.log), wr.result), wr.log)

        return EffectStack(wrapper)

    # Deferred operations

    @property
    def forced(self) -> bool:
        return self._deferred.forced

    def force(self) -> Coroutine[typing.Any, typing.Any, WriterResult[T, E, Log[W]]]:
        """Start the computation. Raises AlreadyForcedError on the second call."""
        return self._deferred.force()

    def cache(self) -> EffectStack[T, E, W]:
        """Cache the result - compute once, share the value with every later force."""
        return EffectStack._of(self._deferred.cache())

    def __await__(self) -> typing.Generator[typing.Any, None, WriterResult[T, E, Log[W]]]:
        """Allow direct await on the stack (forces it)."""
        return self.force().__await__()

    def __repr__(self) -> str:
        return f"EffectStack({self._deferred!r})"

# Module-level combinators, argument order (f, m)

def retn[T](value: T) -> EffectStack[T, typing.Never, typing.Never]:
    """Stack immediately yielding (Ok(value), [])."""
    return EffectStack.pure(value)

def write[W](entry: W) -> EffectStack[None, typing.Never, W]:
    """Stack immediately yielding (Ok(None), [entry])."""
    return EffectStack.tell(entry)

def bind[T, U, E, W](
    f: Continuation[T, U, E, W],
    stack: EffectStack[T, E, W],
    /,
) -> EffectStack[U, E, W]:
    """Sequence stack into f; see EffectStack.then."""
    return stack.then(f)

def sequence[T, E, W](stacks: Iterable[EffectStack[T, E, W]]) -> EffectStack[list[T], E, W]:
    """
    Bind stacks left to right collecting their values.

    Stops at the first Error; later stacks are left unforced.
    """

    async def wrapper() -> WriterResult[list[T], E, Log[W]]:
        forced: list[WriterResult[T, E, Log[W]]] = []
        values: list[T] = []
        for stack in stacks:
            wr = await stack.force()
            forced.append(wr)
            match wr.result:
                case Ok(value):
                    values.append(value)
                case Error(err):
                    return WriterResult(Error(err), merge_writer_logs(forced))
                case _ as unreachable:
                    assert_never(unreachable)
        return WriterResult(Ok(values), merge_writer_logs(forced))

    return EffectStack(wrapper)

async def run_async[T, E, W](stack: EffectStack[T, E, W]) -> WriterResult[T, E, Log[W]]:
    """Force stack inside a running event loop."""
    return await stack.force()

def run[T, E, W](stack: EffectStack[T, E, W]) -> WriterResult[T, E, Log[W]]:
    """
    Force stack to completion on a fresh event loop.

    Returns WriterResult, unpackable as (outcome, entries). Fatal faults
    raised while forcing propagate to the caller. Use run_async from code
    that already runs inside an event loop.
    """
    return asyncio.run(run_async(stack))

__all__ = (
    "EffectStack",
    "retn",
    "write",
    "bind",
    "sequence",
    "run",
    "run_async",
)
