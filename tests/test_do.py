"""Tests for the @effect sequencing block."""

import pytest

from effectstack import EffectStack, effect, measure, retn, run, write

from _support import check, get, observed


@effect
def expr(x: int):
    yield write("getting")
    thing = yield get(x)
    yield write("checking")
    result = yield check(thing)
    yield write("done")
    return result


class TestEffect:
    def test_success_path(self):
        assert observed(run(expr(1))) == (("ok", "ok"), ["getting", "checking", "done"])

    def test_failure_short_circuits(self):
        assert observed(run(expr(0))) == (("error", "bad"), ["getting", "checking"])

    def test_generator_closed_after_failure(self):
        steps = []

        @effect
        def block():
            try:
                steps.append("start")
                yield EffectStack.fail("e")
                steps.append("after")
            finally:
                steps.append("closed")

        assert observed(run(block())) == (("error", "e"), [])
        assert steps == ["start", "closed"]

    def test_generator_not_started_until_forced(self):
        started = []

        @effect
        def block():
            started.append(True)
            yield retn(None)

        stack = block()
        assert started == []
        run(stack)
        assert started == [True]

    def test_zero_returns_unit(self):
        @effect
        def block():
            yield write("only")

        assert observed(run(block())) == (("ok", None), ["only"])

    def test_no_yield(self):
        @effect
        def block():
            return 5
            yield  # pragma: no cover

        assert observed(run(block())) == (("ok", 5), [])

    def test_return_from(self):
        @effect
        def block():
            yield write("start")
            return (yield measure("elapsed", lambda: EffectStack.fail("timeout")))

        outcome, entries = observed(run(block()))
        assert outcome == ("error", "timeout")
        assert entries[0] == "start"
        assert entries[1].startswith("elapsed: ")

    def test_rejects_plain_function(self):
        with pytest.raises(TypeError):
            effect(lambda: retn(1))  # type: ignore[arg-type]

    def test_fault_in_step_reaches_run(self):
        steps = []

        async def broken():
            raise RuntimeError("machinery failed")

        @effect
        def block():
            try:
                yield write("before")
                yield EffectStack(broken)
                steps.append("after")
            except RuntimeError:
                steps.append("caught")
                raise

        with pytest.raises(RuntimeError, match="machinery failed"):
            run(block())
        assert steps == []
