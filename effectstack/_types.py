"""
Core type definitions for effectstack.

Aliases used across the library.
"""

from __future__ import annotations

import typing
from collections.abc import Callable

from kungfu import Result

if typing.TYPE_CHECKING:
    from .stack import EffectStack

# ============================================================================
# Type aliases
# ============================================================================

# Outcome = fail-fast variant, Ok(value) or Error(error)
type Outcome[T, E] = Result[T, E]

# Producer = zero-argument factory of a stack (what measure accepts)
type Producer[T, E, W] = Callable[[], EffectStack[T, E, W]]

# Continuation = the function bind feeds a success value into
type Continuation[T, U, E, W] = Callable[[T], EffectStack[U, E, W]]

# Clock = monotonic time source, seconds as float
type Clock = Callable[[], float]

__all__ = (
    "Outcome",
    "Producer",
    "Continuation",
    "Clock",
)
