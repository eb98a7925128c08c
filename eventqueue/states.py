class Marker:
    def __init__(self, name):
        self._name = name

    def __repr__(self):
        return self._name


OPEN = Marker("OPEN")
CLOSING = Marker("CLOSING")
# The end marker has been delivered; `receive` raises `ShutdownError`.
CLOSED = Marker("CLOSED")
