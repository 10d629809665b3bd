"""
Log layer
=========

- Log: ordered, immutable, append-only sequence of entries
- Writer[T, W]: a value paired with a Log (the Log layer monad)
- WriterResult[T, E, W]: Log over an Outcome, the forced form of an EffectStack
"""

from .log import Log
from .result import WriterResult
from .monad import Writer, bind, retn, run, write

__all__ = (
    "Log",
    "WriterResult",
    "Writer",
    "retn",
    "bind",
    "write",
    "run",
)
