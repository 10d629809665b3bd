"""Measure combinator

Wall-clock timing recorded in the log. The one combinator that appends
an entry after a domain Error, so timing is always observable."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Literal

from .._types import Clock, Producer
from ..stack import EffectStack
from ..writer import Log, WriterResult

logger = logging.getLogger(__name__)

type TimeUnit = Literal["s", "ms", "us"]

_SCALE: dict[str, float] = {"s": 1.0, "ms": 1_000.0, "us": 1_000_000.0}


@dataclass(frozen=True, slots=True)
class MeasurePolicy:
    """
    Timing configuration.

    Milliseconds and microseconds render as whole numbers, seconds with
    three decimals.
    """

    unit: TimeUnit = "ms"
    template: str = "{name}: {elapsed}"
    clock: Clock = field(default=time.perf_counter)

    def __post_init__(self) -> None:
        if self.unit not in _SCALE:
            raise ValueError(f"MeasurePolicy.unit must be one of {sorted(_SCALE)}, got {self.unit!r}")
        if "{name}" not in self.template or "{elapsed}" not in self.template:
            raise ValueError("MeasurePolicy.template must contain {name} and {elapsed}")

    def render(self, name: str, seconds: float) -> str:
        """Format one timing entry."""
        scaled = seconds * _SCALE[self.unit]
        elapsed = f"{scaled:.3f}" if self.unit == "s" else str(int(scaled))
        return self.template.format(name=name, elapsed=elapsed)


DEFAULT_POLICY = MeasurePolicy()


def measure[T, E](
    name: str,
    f: Producer[T, E, str],
    *,
    policy: MeasurePolicy = DEFAULT_POLICY,
) -> EffectStack[T, E, str]:
    """
    Time f() including the forcing of the stack it returns.

    Yields (outcome, entries ++ [policy.render(name, elapsed)]) for Ok and
    Error alike. A fault raised by f or its stack propagates without an
    entry.
    """

    async def wrapper() -> WriterResult[T, E, Log[str]]:
        started = policy.clock()
        wr = await f().force()
        elapsed = policy.clock() - started
        entry = policy.render(name, elapsed)
        logger.debug("measured %s", entry)
        return WriterResult(wr.result, wr.log.tell(entry))

    return EffectStack(wrapper)


__all__ = ("MeasurePolicy", "DEFAULT_POLICY", "measure")
