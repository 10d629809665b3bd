"""
Outcome layer
=============

Fail-fast variant over kungfu's Result: Ok(value) or Error(error).

Monadic laws:
- Left identity: bind(f, retn(a)) ≡ f(a)
- Right identity: bind(retn, m) ≡ m
- Associativity: bind(g, bind(f, m)) ≡ bind(lambda x: bind(g, f(x)), m)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import assert_never

from kungfu import Error, Ok

from ._types import Outcome

def succeed[T](value: T) -> Outcome[T, object]:
    """Successful outcome."""
    return Ok(value)

def fail[E](error: E) -> Outcome[object, E]:
    """Failed outcome."""
    return Error(error)

retn = succeed

def bind[T, U, E](f: Callable[[T], Outcome[U, E]], outcome: Outcome[T, E], /) -> Outcome[U, E]:
    """
    Monadic bind (>>=).

    - On Ok: returns f(value)
    - On Error: returns the same error, f is not called
    """
    match outcome:
        case Ok(value):
            return f(value)
        case Error(err):
            return Error(err)
        case _ as unreachable:
            assert_never(unreachable)

def map[T, U, E](f: Callable[[T], U], outcome: Outcome[T, E], /) -> Outcome[U, E]:
    """Apply f to the success value."""
    return bind(lambda value: Ok(f(value)), outcome)

def map_err[T, E, F](f: Callable[[E], F], outcome: Outcome[T, E], /) -> Outcome[T, F]:
    """Apply f to the error value."""
    match outcome:
        case Ok(value):
            return Ok(value)
        case Error(err):
            return Error(f(err))
        case _ as unreachable:
            assert_never(unreachable)

def is_success(outcome: Outcome[object, object], /) -> bool:
    match outcome:
        case Ok(_):
            return True
        case _:
            return False

__all__ = (
    "succeed",
    "fail",
    "retn",
    "bind",
    "map",
    "map_err",
    "is_success",
)
