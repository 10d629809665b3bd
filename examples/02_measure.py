from __future__ import annotations

from _infra import FakeThings, banner, show

from effectstack import effect, measure, run, write

things = FakeThings(delay_seconds=0.1)


@effect
def expr_with_measure(x: int):
    yield write("getting thing")
    thing = yield measure("elapsed", lambda: things.fail_to_get_thing(x))
    return thing


def main() -> None:
    banner("02_measure: timing entry survives a failure")
    show(run(expr_with_measure(0)))


if __name__ == "__main__":
    main()
