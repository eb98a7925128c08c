class QueueError(Exception):
    pass


class ShutdownError(QueueError):
    """Raised when a closed queue is written to or a drained one is read."""


class ConcurrentReceiveError(QueueError):
    """Raised when a second consumer tries to wait on the same queue."""


class ValidationError(QueueError, TypeError):
    """Raised when a signal is raised with something that is not an exception."""
