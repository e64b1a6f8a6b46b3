"""Cancellable debouncing for search input."""

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field
from typing import TypeVar

T = TypeVar("T")


def debounce_schedule(
    events: Iterable[tuple[float, T]], window: float
) -> list[tuple[float, T]]:
    """Return the ``(fire_time, value)`` pairs a debouncer emits.

    ``events`` are ``(timestamp, value)`` pairs in arrival order. A value is
    emitted ``window`` seconds after it arrived, unless another event arrives
    before then, in which case it is dropped.
    """
    emitted: list[tuple[float, T]] = []
    pending: tuple[float, T] | None = None
    for arrived_at, value in events:
        if pending is not None and arrived_at >= pending[0]:
            emitted.append(pending)
        pending = (arrived_at + window, value)
    if pending is not None:
        emitted.append(pending)
    return emitted


@dataclass
class Debouncer:
    """Runs only the most recently scheduled action after a quiet period.

    Once an action has fired it is no longer cancellable; a new schedule only
    replaces actions that are still waiting out the window.
    """

    window: float
    _timer: asyncio.Task[None] | None = field(default=None, init=False, repr=False)
    _tasks: set[asyncio.Task[None]] = field(default_factory=set, init=False, repr=False)

    @property
    def pending(self) -> bool:
        """Return True while a scheduled action is still waiting to fire."""
        return self._timer is not None

    def schedule(self, action: Callable[[], Awaitable[None]]) -> None:
        """Cancel any waiting action and schedule ``action`` after the window."""
        self.cancel()
        task = asyncio.get_running_loop().create_task(self._run(action))
        self._timer = task
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def cancel(self) -> None:
        """Cancel the waiting action, if any."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    async def drain(self) -> None:
        """Wait until every scheduled action has fired and finished."""
        while self._tasks:
            await asyncio.wait(set(self._tasks))

    async def _run(self, action: Callable[[], Awaitable[None]]) -> None:
        await asyncio.sleep(self.window)
        self._timer = None
        await action()
