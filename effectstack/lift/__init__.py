"""
Lift helpers
============

Move plain values and Outcome-returning async functions into EffectStack
(up, call, lifted) and split finished stacks back out (down).

    from effectstack import lift as L

    stack = L.call(fetch_thing, 1)
    value, log = L.down.or_else(stack, default=0)
"""

from __future__ import annotations

from . import down, up
from .call import call, lifted

__all__ = (
    "up",      # L.up.pure(), L.up.tell(), L.up.fail()
    "down",    # L.down.or_else(), L.down.outcome_only()
    "call",    # L.call(func, *args)
    "lifted",  # @L.lifted(entry)
)
