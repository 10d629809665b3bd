"""
Consumers of a finished stack.

Each helper forces the stack once and splits the forced WriterResult
into the shape the calling code wants. The plain names block on a fresh
event loop like run(); the *_async names are for code already inside
one.
"""

from __future__ import annotations

from typing import assert_never

from kungfu import Error, Ok

from .._types import Outcome
from ..stack import EffectStack, run, run_async
from ..writer import Log, WriterResult

def _value_or[T, E, W](wr: WriterResult[T, E, Log[W]], default: T) -> tuple[T, Log[W]]:
    outcome, log = wr
    match outcome:
        case Ok(value):
            return (value, log)
        case Error(_):
            return (default, log)
        case _ as unreachable:
            assert_never(unreachable)

def or_else[T, E, W](stack: EffectStack[T, E, W], default: T) -> tuple[T, Log[W]]:
    """(value or default, log). The log is kept either way."""
    return _value_or(run(stack), default)

async def or_else_async[T, E, W](stack: EffectStack[T, E, W], default: T) -> tuple[T, Log[W]]:
    return _value_or(await run_async(stack), default)

def outcome_only[T, E, W](stack: EffectStack[T, E, W]) -> Outcome[T, E]:
    """Drop the log, keep the Outcome."""
    outcome, _ = run(stack)
    return outcome

async def outcome_only_async[T, E, W](stack: EffectStack[T, E, W]) -> Outcome[T, E]:
    outcome, _ = await run_async(stack)
    return outcome

def entries_only[T, E, W](stack: EffectStack[T, E, W]) -> list[W]:
    """The log as a list, whatever the outcome."""
    _, log = run(stack)
    return list(log)

async def entries_only_async[T, E, W](stack: EffectStack[T, E, W]) -> list[W]:
    _, log = await run_async(stack)
    return list(log)

__all__ = (
    "or_else",
    "or_else_async",
    "outcome_only",
    "outcome_only_async",
    "entries_only",
    "entries_only_async",
)
