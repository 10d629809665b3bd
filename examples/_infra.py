from __future__ import annotations

import asyncio
import sys
from dataclasses import dataclass
from pathlib import Path

from kungfu import Error, Ok

_PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from effectstack import EffectStack, WriterResult  # noqa: E402
from effectstack.writer import Log  # noqa: E402


@dataclass(frozen=True, slots=True)
class FakeThings:
    """Slow store: every lookup sleeps before answering."""

    delay_seconds: float = 0.1

    def get_thing(self, x: int) -> EffectStack[int, str, str]:
        async def run() -> WriterResult[int, str, Log[str]]:
            await asyncio.sleep(self.delay_seconds)
            return WriterResult(Ok(x), Log())

        return EffectStack(run)

    def fail_to_get_thing(self, x: int) -> EffectStack[int, str, str]:
        async def run() -> WriterResult[int, str, Log[str]]:
            await asyncio.sleep(self.delay_seconds)
            return WriterResult(Error("could not get thing"), Log())

        return EffectStack(run)


def check_thing(r: int) -> EffectStack[str, str, str]:
    return EffectStack.from_outcome(Ok("thing is ok") if r > 0 else Error("thing is bad"))


def banner(title: str) -> None:  # pragma: no cover (examples only)
    print(f"\n== {title} ==")


def show(wr: WriterResult[object, object, Log[str]]) -> None:  # pragma: no cover (examples only)
    outcome, log = wr
    match outcome:
        case Ok(value):
            print(f"ok: {value!r}")
        case Error(err):
            print(f"error: {err!r}")
    print(f"log: {list(log)!r}")
