from __future__ import annotations

class AlreadyForcedError(Exception):
    """A one-shot computation was forced a second time."""

    computation: str

    def __init__(self, computation: str) -> None:
        self.computation = computation
        super().__init__(f"{computation} was already forced; use .cache() to force it more than once")

__all__ = ("AlreadyForcedError",)
