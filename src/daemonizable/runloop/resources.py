"""Shared resources that are reset after every iteration.

Long running loops accumulate per-iteration state in things like an ORM
session's identity map. Passing such a resource to the runloop clears it
once per iteration so it cannot grow without bound.
"""

from __future__ import annotations

from typing import Callable, Protocol


class ResettableResource(Protocol):
    def reset(self) -> None: ...


class CallbackResource:
    """Adapt any zero-argument callable to ``ResettableResource``.

    Example::

        Runloop(work, resource=CallbackResource(session.expunge_all))
    """

    def __init__(self, callback: Callable[[], object]) -> None:
        self.callback = callback

    def reset(self) -> None:
        self.callback()
