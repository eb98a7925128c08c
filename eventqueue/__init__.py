from .errors import (
    ConcurrentReceiveError,
    QueueError,
    ShutdownError,
    ValidationError,
)
from .iterator import Iterator, Result
from .queue import EventQueue, Signal
from .states import CLOSED, CLOSING, OPEN
