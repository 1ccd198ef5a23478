"""Offset-based content scanner.

Locates byte offsets in an already-open file and extracts the bytes between
two offsets using positioned reads, so the file is never loaded whole and
the handle's own cursor is never moved.

The handle is owned by the caller: nothing here opens or closes it. Any
object with ``fileno()`` (or a raw descriptor) opened for reading works.

``find_next_byte`` issues one single-byte read per scanned position. That
keeps it simple and is fine for locating delimiters in moderately sized
files, but it is slow for large files or hot loops.
"""

import logging
from typing import Optional, Union

from easyfs.common.errors import ShortReadError
from easyfs.common.fileutil import Handle, fileno, pread

logger = logging.getLogger("easyfs.fs.scanner")

ByteLike = Union[int, bytes, str]


def _target_byte(target: ByteLike) -> int:
    """Normalise a scan target to a single byte value."""
    if isinstance(target, int):
        if not 0 <= target <= 255:
            raise ValueError(f"byte value out of range: {target}")
        return target
    if isinstance(target, str):
        target = target.encode("utf-8")
    if not target:
        raise ValueError("empty scan target")
    return target[0]


def find_next_byte(handle: Handle, target: ByteLike, start: int = 0) -> Optional[int]:
    """Return the absolute offset of the next *target* byte at or after *start*.

    Args:
        handle: Readable descriptor or file object
        target: Byte value, one-byte ``bytes``, or a ``str`` whose first
            UTF-8 byte is searched for
        start: Offset to start scanning from

    Returns:
        Offset of the match, or None when end-of-file (or a read error) is
        reached first

    Raises:
        ValueError: If *start* is negative or *target* is not a single byte
    """
    wanted = _target_byte(target)
    fd = fileno(handle)
    if start < 0:
        raise ValueError(f"negative start offset: {start}")
    offset = start
    while True:
        try:
            b = pread(fd, 1, offset)
        except OSError as e:
            logger.debug("Scan stopped at offset %d: %s", offset, e)
            return None
        if not b:
            return None
        if b[0] == wanted:
            return offset
        offset += 1


def read_range(handle: Handle, start: int, end: int) -> bytes:
    """Read exactly the bytes in ``[start, end)``.

    Raises:
        ValueError: If ``start`` is negative or ``end < start``
        ShortReadError: If end-of-file is reached before ``end``
        OSError: On any other read failure
    """
    if start < 0 or end < start:
        raise ValueError(f"invalid range [{start}, {end})")
    fd = fileno(handle)
    length = end - start
    parts = []
    received = 0
    while received < length:
        chunk = pread(fd, length - received, start + received)
        if not chunk:
            raise ShortReadError(start, received, length)
        parts.append(chunk)
        received += len(chunk)
    return b"".join(parts)


def read_until(handle: Handle, target: ByteLike, start: int = 0) -> Optional[bytes]:
    """Return the bytes from *start* up to (not including) the next *target*.

    Returns None if the delimiter does not occur at or after *start*.
    """
    offset = find_next_byte(handle, target, start)
    if offset is None:
        return None
    return read_range(handle, start, offset)
