"""
Fluent pipeline builder for EffectStack.

flow(stack) starts an immutable expression tree; each method adds a node
and compile() lowers the tree into a single EffectStack. Nothing runs
until the compiled stack is forced.

    stack = (
        flow(write("getting"))
        .then(lambda _: get(x))
        .write("checking")
        .then(check)
        .write("done")
        .compile()
    )

.write(entry) keeps the current value and appends entry, so it does not
run after an Error.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .stack import EffectStack
from .time import MeasurePolicy, delay, measure
from .time.measure import DEFAULT_POLICY


# ============================================================================
# Expression nodes
# ============================================================================


class Expr[T, E, W]:
    """
    AST node that can be lowered into executable EffectStack.
    """

    def lower(self) -> EffectStack[T, E, W]:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class Base[T, E, W](Expr[T, E, W]):
    value: EffectStack[T, E, W]

    def lower(self) -> EffectStack[T, E, W]:
        return self.value


@dataclass(frozen=True, slots=True)
class Then[T, U, E, W](Expr[U, E, W]):
    inner: Expr[T, E, W]
    f: Callable[[T], EffectStack[U, E, W]]

    def lower(self) -> EffectStack[U, E, W]:
        return self.inner.lower().then(self.f)


@dataclass(frozen=True, slots=True)
class Map[T, U, E, W](Expr[U, E, W]):
    inner: Expr[T, E, W]
    f: Callable[[T], U]

    def lower(self) -> EffectStack[U, E, W]:
        return self.inner.lower().map(self.f)


@dataclass(frozen=True, slots=True)
class MapErr[T, E, F, W](Expr[T, F, W]):
    inner: Expr[T, E, W]
    f: Callable[[E], F]

    def lower(self) -> EffectStack[T, F, W]:
        return self.inner.lower().map_err(self.f)


@dataclass(frozen=True, slots=True)
class Write[T, E, W](Expr[T, E, W]):
    inner: Expr[T, E, W]
    entries: tuple[W, ...]

    def lower(self) -> EffectStack[T, E, W]:
        return self.inner.lower().with_log(*self.entries)


@dataclass(frozen=True, slots=True)
class Measure[T, E](Expr[T, E, str]):
    inner: Expr[T, E, str]
    name: str
    policy: MeasurePolicy

    def lower(self) -> EffectStack[T, E, str]:
        return measure(self.name, self.inner.lower, policy=self.policy)


@dataclass(frozen=True, slots=True)
class Delay[T, E, W](Expr[T, E, W]):
    inner: Expr[T, E, W]
    seconds: float

    def lower(self) -> EffectStack[T, E, W]:
        return delay(self.inner.lower(), seconds=self.seconds)


# ============================================================================
# Builder
# ============================================================================


@dataclass(frozen=True, slots=True)
class Flow[T, E, W]:
    """
    Fluent builder for chaining EffectStack combinators.
    """

    expr: Expr[T, E, W]

    def then[U](self, f: Callable[[T], EffectStack[U, E, W]]) -> Flow[U, E, W]:
        return Flow(Then(self.expr, f=f))

    def map[U](self, f: Callable[[T], U]) -> Flow[U, E, W]:
        return Flow(Map(self.expr, f=f))

    def map_err[F](self, f: Callable[[E], F]) -> Flow[T, F, W]:
        return Flow(MapErr(self.expr, f=f))

    def write(self, *entries: W) -> Flow[T, E, W]:
        return Flow(Write(self.expr, entries=entries))

    def measure(self, name: str, *, policy: MeasurePolicy = DEFAULT_POLICY) -> Flow[T, E, W]:
        """Time everything built so far."""
        return Flow(Measure(self.expr, name=name, policy=policy))  # type: ignore[arg-type]

    def delay(self, *, seconds: float) -> Flow[T, E, W]:
        return Flow(Delay(self.expr, seconds=seconds))

    def compile(self) -> EffectStack[T, E, W]:
        """Lower the expression tree. The base stack is one-shot, so compile once."""
        return self.expr.lower()


def flow[T, E, W](stack: EffectStack[T, E, W]) -> Flow[T, E, W]:
    return Flow(Base(stack))


__all__ = (
    "Expr",
    "Flow",
    "flow",
)
