"""Shared stream doubles for converter tests."""

import io


class NonSeekable(io.RawIOBase):
    """Readable byte stream that refuses to seek, like a pipe."""

    def __init__(self, data: bytes):
        self._inner = io.BytesIO(data)

    def readable(self):
        return True

    def readinto(self, b):
        return self._inner.readinto(b)

    def seekable(self):
        return False


class FailingReader(io.RawIOBase):
    """Readable byte stream whose reads always fail."""

    def readable(self):
        return True

    def readinto(self, b):
        raise OSError("device not ready")


class BrokenSink(io.RawIOBase):
    """Writable stream that accepts ``limit`` bytes, then fails."""

    def __init__(self, limit: int = 0):
        self.limit = limit
        self.received = bytearray()

    def writable(self):
        return True

    def write(self, b):
        if len(self.received) + len(b) > self.limit:
            raise OSError("disk full")
        self.received += b
        return len(b)
