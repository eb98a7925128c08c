"""Single-consumer event queue.

An `EventQueue` hands values from any number of producers to one consumer.
Producers call the synchronous methods `send`, `raise_signal` and `shutdown`;
the consumer awaits `receive`, or iterates over the queue with `async for`.

Values that arrive while nobody is waiting are buffered; a consumer that is
already waiting gets the next value directly. Either way, values come out in
the order they went in. Besides ordinary values, the queue carries two kinds
of control items through the same FIFO path: the end marker enqueued by
`shutdown`, and `Signal`s wrapping an exception that the consumer's iteration
step raises when it reaches them.
"""

from __future__ import annotations
from typing import Any, Deque, Optional

import asyncio
import collections
import dataclasses
import logging

from .errors import ConcurrentReceiveError, ShutdownError, ValidationError
from .iterator import Iterator
from .states import CLOSED, CLOSING, OPEN, Marker


@dataclasses.dataclass(frozen=True)
class Signal:
    error: BaseException


# Queue ------------------------------------------------------------------------


class EventQueue:
    """An unbounded FIFO queue with exactly one consumer.

    At most one coroutine may be suspended in `receive` at a time; a second
    one gets a `ConcurrentReceiveError` while the first keeps waiting.

    After `shutdown`, the backlog (terminated by `end`) is still delivered in
    order; only then does `receive` raise `ShutdownError`.
    """

    def __init__(self, *, name: Optional[str] = None):
        self.name = name

        self._backlog: Deque[Any] = collections.deque()
        self._waiter: Optional[asyncio.Future] = None
        self._closed = False
        self._drained = False
        self._end = Marker("END")

    def __repr__(self):
        cls = self.__class__.__name__
        info = [f"state={self.state!r}", f"size={len(self._backlog)}"]
        if self.name is not None:
            info.insert(0, f"name={self.name!r}")
        return f"<{cls} object at {hex(id(self))} with {', '.join(info)}>"

    def __aiter__(self):
        return Iterator(self)

    @property
    def end(self):
        """The object that `shutdown` enqueues as the last item."""
        return self._end

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def waiting(self) -> bool:
        return self._waiter is not None and not self._waiter.cancelled()

    @property
    def state(self):
        if not self._closed:
            return OPEN
        if not self._drained:
            return CLOSING
        return CLOSED

    def qsize(self) -> int:
        return len(self._backlog)

    def empty(self) -> bool:
        return not self._backlog

    def _put(self, item):
        waiter, self._waiter = self._waiter, None
        # A cancelled receiver may not have cleared its slot yet.
        if waiter is not None and not waiter.done():
            waiter.set_result(item)
        else:
            self._backlog.append(item)

    def _deliver(self, item):
        if item is self._end:
            self._drained = True
        return item

    def send(self, value) -> None:
        """Deliver `value` to the waiting consumer, or buffer it."""
        if self._closed:
            raise ShutdownError("cannot send, queue is shut down")
        self._put(value)

    def raise_signal(self, error: BaseException) -> None:
        """Enqueue `error`, to be raised when the consumer iterates up to it."""
        if not isinstance(error, BaseException):
            raise ValidationError(
                f"signal must wrap an exception, got {type(error).__name__}"
            )
        self.send(Signal(error))
        logging.debug("%r raised %r", self, error)

    def shutdown(self) -> None:
        """Enqueue `end` and stop accepting new items."""
        if self._closed:
            return
        self._put(self._end)
        self._closed = True
        logging.debug("%r shut down", self)

    def is_signal(self, value) -> bool:
        return isinstance(value, Signal)

    async def receive(self):
        """Return the next item, waiting for one if the backlog is empty."""
        if self._backlog:
            return self._deliver(self._backlog.popleft())
        if self.waiting:
            raise ConcurrentReceiveError(
                "another operation is already waiting to receive from this queue"
            )
        if self._closed:
            raise ShutdownError("cannot read, queue is shut down")

        waiter = asyncio.get_running_loop().create_future()
        self._waiter = waiter
        try:
            item = await waiter
        except asyncio.CancelledError:
            if self._waiter is waiter:
                self._waiter = None
            elif waiter.done() and not waiter.cancelled():
                # The item was handed over just before the cancellation; put it
                # back so that the next receiver gets it.
                self._backlog.appendleft(waiter.result())
                logging.debug("%r requeued %r", self, waiter.result())
            raise
        return self._deliver(item)
