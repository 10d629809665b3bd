"""Delay combinator"""

from __future__ import annotations

import asyncio

from ..stack import EffectStack
from ..writer import Log, WriterResult


def delay[T, E, W](
    stack: EffectStack[T, E, W],
    *,
    seconds: float,
) -> EffectStack[T, E, W]:
    """Sleep before forcing stack. Preserves log."""
    if seconds < 0.0:
        raise ValueError("delay seconds must be >= 0")

    async def wrapper() -> WriterResult[T, E, Log[W]]:
        if seconds > 0.0:
            await asyncio.sleep(seconds)
        return await stack.force()

    return EffectStack(wrapper)


__all__ = ("delay",)
