from __future__ import annotations

from _infra import FakeThings, banner, check_thing, show

from effectstack import MeasurePolicy, flow, run, write

things = FakeThings(delay_seconds=0.05)


def pipeline(x: int):
    return (
        flow(write("getting thing"))
        .then(lambda _: things.get_thing(x))
        .write("checking thing")
        .then(check_thing)
        .write("returning thing")
        .measure("pipeline", policy=MeasurePolicy(unit="s"))
        .map(str.upper)
        .compile()
    )


def main() -> None:
    banner("03_flow: fluent builder")
    show(run(pipeline(1)))
    show(run(pipeline(-1)))


if __name__ == "__main__":
    main()
