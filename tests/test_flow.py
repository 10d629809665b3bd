"""Tests for the fluent pipeline builder."""

from effectstack import EffectStack, MeasurePolicy, flow, run, write

from _support import FakeClock, check, get, observed


def pipeline(x: int):
    return (
        flow(write("getting"))
        .then(lambda _: get(x))
        .write("checking")
        .then(check)
        .write("done")
    )


class TestFlow:
    def test_success_path(self):
        assert observed(run(pipeline(1).compile())) == (("ok", "ok"), ["getting", "checking", "done"])

    def test_failure_path(self):
        assert observed(run(pipeline(0).compile())) == (("error", "bad"), ["getting", "checking"])

    def test_builder_is_immutable(self):
        base = flow(write("a"))
        extended = base.write("b")
        assert extended is not base
        assert extended.expr.inner is base.expr

    def test_map_and_map_err(self):
        ok = flow(get(2)).map(lambda x: x * 10).compile()
        err = flow(EffectStack.fail("e")).map_err(str.upper).compile()
        assert observed(run(ok)) == (("ok", 20), [])
        assert observed(run(err)) == (("error", "E"), [])

    def test_measure_wraps_everything_before(self):
        policy = MeasurePolicy(clock=FakeClock(0.003))
        stack = pipeline(0).measure("total", policy=policy).compile()
        assert observed(run(stack)) == (("error", "bad"), ["getting", "checking", "total: 3"])

    def test_delay(self):
        assert observed(run(flow(write("a")).delay(seconds=0.0).compile())) == (("ok", None), ["a"])
