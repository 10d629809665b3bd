from __future__ import annotations

from _infra import FakeThings, banner, check_thing, show

from effectstack import effect, run, write

things = FakeThings(delay_seconds=0.1)


@effect
def expr(x: int):
    yield write("getting thing")
    thing = yield things.get_thing(x)
    yield write("checking thing")
    result = yield check_thing(thing)
    yield write("returning thing")
    return result


def main() -> None:
    banner("01_quickstart: @effect block, success path")
    show(run(expr(1)))

    banner("01_quickstart: failure short-circuits, 'returning thing' is never written")
    show(run(expr(0)))


if __name__ == "__main__":
    main()
