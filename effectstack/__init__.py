"""
Effect stack for building logged, fail-fast async pipelines.

One composed type, EffectStack = Deferred[Log[Outcome[T, E]]]:
- Deferred: one-shot asynchronous computation, forced by run
- Log: ordered accumulation of entries, merged in call order
- Outcome: Ok(value) or Error(error); Error short-circuits bind

Architecture:
- Layers are usable on their own (outcome, writer, deferred)
- Combinators retn / bind / write / measure / run compose the stack
- Sugar: @effect sequencing block and the flow() pipeline builder
"""

# Core types
from ._types import Clock, Continuation, Outcome, Producer

# Layers
from . import outcome
from . import writer
from .writer import Log, Writer, WriterResult
from .deferred import Deferred, gather

# Effect stack
from .stack import EffectStack, bind, retn, run, run_async, sequence, write

# Timing
from .time import MeasurePolicy, delay, measure

# Sugar
from .do import effect
from .flow import Flow, flow

# Lift helpers
from . import lift

# Errors
from ._errors import AlreadyForcedError

__all__ = (
    # Types
    "Clock",
    "Continuation",
    "Outcome",
    "Producer",
    # Layers
    "outcome",
    "writer",
    "Log",
    "Writer",
    "WriterResult",
    "Deferred",
    "gather",
    # Effect stack
    "EffectStack",
    "retn",
    "bind",
    "write",
    "sequence",
    "run",
    "run_async",
    # Timing
    "MeasurePolicy",
    "delay",
    "measure",
    # Sugar
    "effect",
    "Flow",
    "flow",
    # Lift
    "lift",
    # Errors
    "AlreadyForcedError",
)
