"""
Sequencing block for EffectStack.

The @effect decorator turns a generator function into a function
returning an EffectStack, so dependent steps read top to bottom without
unwrapping each layer by hand:

    @effect
    def pipeline(x: int):
        yield write("getting")
        thing = yield get(x)
        yield write("checking")
        result = yield check(thing)
        yield write("done")
        return result

Each yielded stack is forced, its log merged, and its Ok value sent back
into the generator. On Error the generator is closed and no further step
runs. `return x` becomes Ok(x); falling off the end becomes Ok(None).
To hand over a stack's result unchanged, write `return (yield stack)`.

Do not wrap a yield in try/except to catch a domain failure: Errors are
data and never thrown into the generator. Faults raised while forcing
a step propagate to the caller of run, not into the generator.
"""

from __future__ import annotations

import inspect
import typing
from collections.abc import Callable, Generator
from functools import wraps
from typing import ParamSpec, assert_never

from kungfu import Error, Ok

from .stack import EffectStack
from .writer import Log, WriterResult

P = ParamSpec("P")

type EffectGenerator[T, E, W] = Generator[EffectStack[typing.Any, E, W], typing.Any, T]


def effect[T, E, W, **P](
    func: Callable[P, EffectGenerator[T, E, W]],
) -> Callable[P, EffectStack[T, E, W]]:
    """Decorator: generator function -> function returning EffectStack."""
    if not inspect.isgeneratorfunction(func):
        raise TypeError(f"@effect expects a generator function, got {func!r}")

    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> EffectStack[T, E, W]:
        async def run() -> WriterResult[T, E, Log[W]]:
            # The generator is created on force, not on call.
            gen = func(*args, **kwargs)
            log = Log[W]()
            try:
                current = next(gen)
            except StopIteration as stop_exc:
                return WriterResult(Ok(stop_exc.value), log)

            while True:
                wr = await current.force()
                log = log.combine(wr.log)
                match wr.result:
                    case Ok(value):
                        try:
                            current = gen.send(value)
                        except StopIteration as stop_exc:
                            return WriterResult(Ok(stop_exc.value), log)
                    case Error(err):
                        gen.close()
                        return WriterResult(Error(err), log)
                    case _ as unreachable:
                        assert_never(unreachable)

        return EffectStack(run)

    return wrapper


__all__ = ("effect", "EffectGenerator")
