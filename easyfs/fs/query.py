"""Best-effort filesystem queries.

These never raise for filesystem failures: any ``OSError`` (or a
``ValueError`` from a malformed path) is logged at DEBUG level and mapped to
a default value: ``False``, ``0``, ``None``, ``""`` or ``[]``. Callers
cannot tell "does not exist" from "stat failed for another reason".
"""

import logging
import os
import stat
import time
from typing import Optional

from easyfs.common.constants import DEFAULT_ENCODING
from easyfs.common.fileutil import O_BINARY, PathLike
from easyfs.common.models import DirEntry, PathInfo
from easyfs.fs.sizes import format_size

logger = logging.getLogger("easyfs.fs.query")

_QUERY_ERRORS = (OSError, ValueError)

# Access checks must not block on FIFOs with no peer
_NONBLOCK = getattr(os, "O_NONBLOCK", 0)


def info(path: PathLike) -> Optional[os.stat_result]:
    """Return ``os.stat`` for *path*, or None if it cannot be stat'ed."""
    try:
        return os.stat(path)
    except _QUERY_ERRORS as e:
        logger.debug("stat(%s) failed: %s", path, e)
        return None


def exists(path: PathLike) -> bool:
    return info(path) is not None


def is_dir(path: PathLike) -> bool:
    st = info(path)
    return st is not None and stat.S_ISDIR(st.st_mode)


def is_file(path: PathLike) -> bool:
    """True for any existing path that is not a directory."""
    st = info(path)
    return st is not None and not stat.S_ISDIR(st.st_mode)


def mtime(path: PathLike) -> int:
    """Modification time in whole seconds since the epoch, 0 on failure."""
    st = info(path)
    if st is None:
        return 0
    return int(st.st_mtime)


def mtime_ms(path: PathLike) -> int:
    """Modification time in milliseconds since the epoch, 0 on failure."""
    st = info(path)
    if st is None:
        return 0
    return st.st_mtime_ns // 1_000_000


def size(path: PathLike) -> int:
    st = info(path)
    if st is None:
        return 0
    return st.st_size


def readable_size(path: PathLike) -> str:
    return format_size(size(path))


def is_readable(path: PathLike) -> bool:
    """Check whether *path* can be opened read-only."""
    try:
        fd = os.open(path, os.O_RDONLY | O_BINARY | _NONBLOCK)
    except _QUERY_ERRORS as e:
        logger.debug("open(%s, O_RDONLY) failed: %s", path, e)
        return False
    os.close(fd)
    return True


def is_writable(path: PathLike) -> bool:
    """Check whether *path* can be written to.

    For a directory a marker file is created inside it and removed again;
    for anything else the path is opened write-only without blocking, so a
    FIFO with no reader reports False.
    """
    if is_dir(path):
        marker = os.path.join(path, f".easyfs-marker-{os.getpid()}-{time.time_ns()}")
        try:
            fd = os.open(marker, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
        except _QUERY_ERRORS as e:
            logger.debug("Directory %s is not writable: %s", path, e)
            return False
        os.close(fd)
        try:
            os.remove(marker)
        except OSError as e:
            logger.debug("Could not remove marker file %s: %s", marker, e)
        return True

    try:
        fd = os.open(path, os.O_WRONLY | O_BINARY | _NONBLOCK)
    except _QUERY_ERRORS as e:
        logger.debug("open(%s, O_WRONLY) failed: %s", path, e)
        return False
    os.close(fd)
    return True


def scan_dir(path: PathLike) -> list[str]:
    """Names of the immediate children of *path*, sorted byte-wise.

    Returns an empty list if the directory cannot be read.
    """
    try:
        names = os.listdir(path)
    except _QUERY_ERRORS as e:
        logger.debug("listdir(%s) failed: %s", path, e)
        return []
    return sorted(names, key=os.fsencode)


def list_entries(path: PathLike) -> list[DirEntry]:
    """Like :func:`scan_dir`, with type, size and mtime for each child."""
    entries = []
    for name in scan_dir(path):
        st = info(os.path.join(path, name))
        if st is None:
            entries.append(DirEntry(name=name))
            continue
        entries.append(
            DirEntry(
                name=name,
                is_dir=stat.S_ISDIR(st.st_mode),
                size=st.st_size,
                mtime=int(st.st_mtime),
            )
        )
    return entries


def stat_path(path: PathLike) -> Optional[PathInfo]:
    """Collect a :class:`PathInfo` snapshot, or None if *path* cannot be stat'ed."""
    st = info(path)
    if st is None:
        return None
    abs_path = os.path.abspath(path)
    return PathInfo(
        path=abs_path,
        name=os.path.basename(abs_path) or abs_path,
        is_dir=stat.S_ISDIR(st.st_mode),
        size=st.st_size,
        readable_size=format_size(st.st_size),
        mtime=int(st.st_mtime),
        mtime_ms=st.st_mtime_ns // 1_000_000,
        mode=stat.S_IMODE(st.st_mode),
        readable=is_readable(path),
        writable=is_writable(path),
    )


def get_bin_contents(path: PathLike) -> Optional[bytes]:
    """Read the whole file as bytes, or None if it cannot be read."""
    try:
        with open(path, "rb") as f:
            return f.read()
    except _QUERY_ERRORS as e:
        logger.debug("read(%s) failed: %s", path, e)
        return None


def get_contents(path: PathLike, encoding: str = DEFAULT_ENCODING) -> str:
    """Read the whole file as text, or ``""`` if it cannot be read.

    Undecodable bytes are replaced rather than treated as a failure. An
    unknown *encoding* also yields ``""``.
    """
    data = get_bin_contents(path)
    if data is None:
        return ""
    try:
        return data.decode(encoding, errors="replace")
    except LookupError as e:
        logger.debug("decode(%s) failed: %s", path, e)
        return ""
