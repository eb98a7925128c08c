from typing import Any

import dataclasses

from . import states


@dataclasses.dataclass(frozen=True)
class Result:
    value: Any
    done: bool


class Iterator:
    """Async iterator over the items of an `EventQueue`.

    The iterator has no state of its own: every step is a `receive` on the
    underlying queue, so a fresh iterator continues where the backlog stands.
    Iteration stops at the queue's end marker; a `Signal` makes the step raise
    the wrapped exception.
    """

    def __init__(self, queue):
        self._queue = queue

    def __repr__(self):
        cls = self.__class__.__name__
        return f"<{cls} object at {hex(id(self))} with queue={self._queue!r}>"

    def __aiter__(self):
        return self

    async def __anext__(self):
        if self._queue.state is states.CLOSED:
            raise StopAsyncIteration
        if (result := await self.next()).done:
            raise StopAsyncIteration
        return result.value

    async def next(self) -> Result:
        item = await self._queue.receive()
        if self._queue.is_signal(item):
            raise item.error
        return Result(item, item is self._queue.end)
