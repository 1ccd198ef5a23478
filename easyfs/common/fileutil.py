"""Cross-platform positioned-read helpers.

Provides ``pread`` that works on all platforms including Windows where
``os.pread`` is not available, plus ``fileno`` to accept either a raw
descriptor or a file object wherever a handle is expected.
"""

import os
import sys
from typing import IO, Any, Union

Handle = Union[int, IO[Any]]
PathLike = Union[str, "os.PathLike[str]"]

if sys.platform == "win32":

    def pread(fd: int, length: int, offset: int) -> bytes:
        """Positional read, emulated on Windows via seek + read."""
        os.lseek(fd, offset, os.SEEK_SET)
        return os.read(fd, length)

else:
    pread = os.pread

# Added to os.open() flags so Windows does not translate line endings
O_BINARY = getattr(os, "O_BINARY", 0)


def fileno(handle: Handle) -> int:
    """Return the OS descriptor behind *handle* (an int or a file object)."""
    if isinstance(handle, int):
        return handle
    return handle.fileno()
