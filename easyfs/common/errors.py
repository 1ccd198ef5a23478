"""Errors raised by EasyFS on top of the host's OSError family."""


class ShortWriteError(OSError):
    """Fewer bytes were written than requested."""

    def __init__(self, path: str, written: int, expected: int) -> None:
        super().__init__(f"short write on {path}: wrote {written} of {expected} bytes")
        self.path = path
        self.written = written
        self.expected = expected


class ShortReadError(OSError):
    """A positioned read reached end-of-file before filling the request."""

    def __init__(self, offset: int, read: int, expected: int) -> None:
        super().__init__(f"short read at offset {offset}: got {read} of {expected} bytes")
        self.offset = offset
        self.read = read
        self.expected = expected
