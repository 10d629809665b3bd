"""Tests for EffectStack composition."""

import logging

import pytest
from kungfu import Error, Ok

import effectstack
from effectstack import (
    AlreadyForcedError,
    EffectStack,
    Log,
    bind,
    retn,
    run,
    run_async,
    sequence,
    write,
    WriterResult,
)

from _support import check, get, observed


def scenario(x: int) -> EffectStack[str, str, str]:
    return (
        write("getting")
        .then(lambda _: get(x))
        .then(lambda thing: write("checking").then(lambda _: check(thing)))
        .then(lambda result: write("done").map(lambda _: result))
    )


class TestReturnAndWrite:
    def test_run_retn_has_empty_log(self):
        for x in (0, "x", None, [1, 2]):
            assert observed(run(retn(x))) == (("ok", x), [])

    def test_write_yields_unit_and_entry(self):
        assert observed(run(write("hello"))) == (("ok", None), ["hello"])

    def test_tell_many(self):
        assert observed(run(EffectStack.tell("a", "b"))) == (("ok", None), ["a", "b"])

    def test_fail_and_from_outcome(self):
        assert observed(run(EffectStack.fail("e"))) == (("error", "e"), [])
        assert observed(run(EffectStack.from_outcome(Ok(1)))) == (("ok", 1), [])

    def test_from_writer(self):
        wr = WriterResult(Error("e"), Log.of("x"))
        assert observed(run(EffectStack.from_writer(wr))) == (("error", "e"), ["x"])

    def test_run_compares_to_outcome_entries_pair(self):
        ok = Ok(1)
        assert run(EffectStack.from_outcome(ok)) == (ok, Log())


class TestBind:
    def test_scenario_success_path(self):
        assert observed(run(scenario(1))) == (("ok", "ok"), ["getting", "checking", "done"])

    def test_scenario_failure_short_circuits(self):
        assert observed(run(scenario(0))) == (("error", "bad"), ["getting", "checking"])

    def test_continuation_not_invoked_after_failure(self):
        counter = {"calls": 0}

        def count(x):
            counter["calls"] += 1
            return retn(x)

        chain = bind(count, bind(count, bind(lambda _: EffectStack.fail("stop"), bind(count, retn(0)))))
        assert observed(run(chain)) == (("error", "stop"), [])
        assert counter["calls"] == 1

    def test_continuation_built_only_after_forcing(self):
        built = []

        def f(x):
            built.append(x)
            return retn(x)

        stack = retn(1).then(f)
        assert built == []
        run(stack)
        assert built == [1]

    def test_log_order_across_nested_binds(self):
        writes = [f"w{i}" for i in range(6)]
        stack = write(writes[0])
        for entry in writes[1:]:
            stack = stack.then(lambda _, entry=entry: write(entry))
        assert observed(run(stack)) == (("ok", None), writes)

    def test_log_order_nested_right(self):
        stack = write("a").then(lambda _: write("b").then(lambda _: write("c"))).then(lambda _: write("d"))
        assert observed(run(stack))[1] == ["a", "b", "c", "d"]

    def test_then_outcome(self):
        stack = write("a").then_outcome(lambda _: Error("plain"))
        assert observed(run(stack)) == (("error", "plain"), ["a"])

    def test_short_circuit_is_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="effectstack.stack"):
            run(EffectStack.fail("boom").then(retn))
        assert "short-circuit" in caplog.text


class TestMonadLaws:
    def test_left_identity(self):
        f = lambda x: write(f"saw {x}").map(lambda _: x + 1)
        assert observed(run(retn(1).then(f))) == observed(run(f(1)))

    def test_right_identity(self):
        assert observed(run(write("m").map(lambda _: 3).then(retn))) == (("ok", 3), ["m"])

    def test_associativity(self):
        f = lambda x: write("f").map(lambda _: x + 1)
        g = lambda x: write("g").map(lambda _: x * 2)
        left = write("m").map(lambda _: 1).then(f).then(g)
        right = write("m").map(lambda _: 1).then(lambda x: f(x).then(g))
        assert observed(run(left)) == observed(run(right)) == (("ok", 4), ["m", "f", "g"])


class TestWriterOperations:
    def test_map_and_map_err(self):
        assert observed(run(write("a").map(lambda _: 1))) == (("ok", 1), ["a"])
        assert observed(run(EffectStack.fail("e").map_err(str.upper))) == (("error", "E"), [])

    def test_with_log_after_success(self):
        assert observed(run(retn(1).with_log("x", "y"))) == (("ok", 1), ["x", "y"])

    def test_with_log_skipped_after_failure(self):
        assert observed(run(EffectStack.fail("e").with_log("x"))) == (("error", "e"), [])

    def test_listen(self):
        ((tag, (value, log)), entries) = observed(run(write("a").map(lambda _: 5).listen()))
        assert (tag, value, list(log), entries) == ("ok", 5, ["a"], ["a"])

    def test_log_cannot_be_rewritten(self):
        assert not hasattr(EffectStack, "censor")
        ((_, (_, seen)), entries) = observed(run(write("a").listen()))
        assert list(seen) == entries == ["a"]


class TestSequence:
    def test_collects_values_and_logs(self):
        stacks = [write(str(i)).map(lambda _, i=i: i) for i in range(3)]
        assert observed(run(sequence(stacks))) == (("ok", [0, 1, 2]), ["0", "1", "2"])

    def test_stops_at_first_error(self):
        tail = write("never")
        stacks = [write("a"), EffectStack.fail("e"), tail]
        assert observed(run(sequence(stacks))) == (("error", "e"), ["a"])
        assert not tail.forced


class TestForcing:
    def test_stack_is_one_shot(self):
        stack = retn(1)
        run(stack)
        with pytest.raises(AlreadyForcedError):
            run(stack)

    def test_reused_operand_in_chain_is_rejected(self):
        shared = write("x")
        with pytest.raises(AlreadyForcedError):
            run(shared.then(lambda _: shared))

    def test_cache_allows_reuse(self):
        calls = []

        async def work():
            calls.append(1)
            return WriterResult(Ok("v"), Log.of("ran"))

        cached = EffectStack(work).cache()
        assert observed(run(cached)) == (("ok", "v"), ["ran"])
        assert observed(run(cached)) == (("ok", "v"), ["ran"])
        assert calls == [1]

    def test_fatal_fault_reaches_run(self):
        async def broken():
            raise RuntimeError("scheduler died")

        stack = write("before").then(lambda _: EffectStack(broken)).then(lambda _: write("after"))
        with pytest.raises(RuntimeError, match="scheduler died"):
            run(stack)

    def test_fault_in_continuation_is_not_an_error_outcome(self):
        def explode(_):
            raise KeyError("missing")

        with pytest.raises(KeyError):
            run(retn(1).then(explode))

    @pytest.mark.asyncio
    async def test_run_async(self):
        assert observed(await run_async(write("a"))) == (("ok", None), ["a"])

    @pytest.mark.asyncio
    async def test_await_stack_directly(self):
        assert observed(await write("a")) == (("ok", None), ["a"])


class TestExports:
    def test_every_exported_name_resolves(self):
        for name in effectstack.__all__:
            assert hasattr(effectstack, name), name
        assert "Unit" not in effectstack.__all__
