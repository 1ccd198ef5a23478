"""Propagating filesystem mutations.

Every function here reports failure by raising; nothing is swallowed.
Operations that produce a path (create, open with create, copy, move and
the content writers) first make sure the destination's parent directory
exists via :func:`ensure_parent`.
"""

import logging
import os
import shutil
from typing import IO, Optional

from easyfs.common.constants import DEFAULT_COPY_BUFFER_SIZE, DEFAULT_DIR_MODE, DEFAULT_ENCODING, DEFAULT_FILE_MODE
from easyfs.common.errors import ShortWriteError
from easyfs.common.fileutil import O_BINARY, PathLike

logger = logging.getLogger("easyfs.fs.mutate")

# O_RDONLY | O_WRONLY | O_RDWR: the access-mode bits of an open() flag set
_ACCESS_MASK = os.O_RDONLY | os.O_WRONLY | os.O_RDWR

_TRUNCATE_FLAGS = os.O_WRONLY | os.O_CREAT | os.O_TRUNC
_APPEND_FLAGS = os.O_WRONLY | os.O_CREAT | os.O_APPEND


def mkdir(path: PathLike, mode: int = DEFAULT_DIR_MODE) -> None:
    """Create *path* and any missing ancestors. No error if it already exists."""
    os.makedirs(path, mode=mode, exist_ok=True)


def ensure_parent(path: PathLike, mode: int = DEFAULT_DIR_MODE) -> None:
    """Create the parent directory tree of *path* if it is missing."""
    parent = os.path.dirname(path)
    if not parent or os.path.exists(parent):
        return
    mkdir(parent, mode)
    logger.debug("Created parent directory %s", parent)


def create(
    path: PathLike,
    src: Optional[IO[bytes]] = None,
    perm: int = DEFAULT_FILE_MODE,
    dir_mode: int = DEFAULT_DIR_MODE,
) -> None:
    """Create a file, optionally filling it from a binary stream.

    Without *src* the file is created empty (truncating an existing one).
    With *src* the file is opened for writing without truncation and the
    stream is copied in from offset 0.
    """
    ensure_parent(path, dir_mode)
    flags = os.O_WRONLY | os.O_CREAT | O_BINARY
    if src is None:
        flags |= os.O_TRUNC
    fd = os.open(path, flags, perm)
    with os.fdopen(fd, "wb") as out:
        if src is not None:
            shutil.copyfileobj(src, out)


def _mode_for_flags(flags: int) -> str:
    """Pick the ``os.fdopen`` mode matching an ``os.open`` flag set."""
    access = flags & _ACCESS_MASK
    append = bool(flags & os.O_APPEND)
    if access == os.O_RDWR:
        return "a+b" if append else "r+b"
    if access == os.O_WRONLY:
        return "ab" if append else "wb"
    return "rb"


def open_file(
    path: PathLike,
    flags: Optional[int] = None,
    perm: int = DEFAULT_FILE_MODE,
    dir_mode: int = DEFAULT_DIR_MODE,
) -> IO[bytes]:
    """Open *path* with ``os.open`` flags and return a binary file object.

    Defaults to read-write-create. When the flags include ``O_CREAT`` the
    parent directory is created first. The caller owns (and closes) the
    returned file.
    """
    if flags is None:
        flags = os.O_RDWR | os.O_CREAT
    if flags & os.O_CREAT:
        ensure_parent(path, dir_mode)
    fd = os.open(path, flags | O_BINARY, perm)
    try:
        return os.fdopen(fd, _mode_for_flags(flags))
    except Exception:
        os.close(fd)
        raise


def copy(
    src: PathLike,
    dst: PathLike,
    buffer_size: int = DEFAULT_COPY_BUFFER_SIZE,
    fsync: bool = True,
    perm: int = DEFAULT_FILE_MODE,
    dir_mode: int = DEFAULT_DIR_MODE,
) -> None:
    """Copy the contents of file *src* to *dst*.

    A newly created destination gets *perm* (before umask). The destination
    is flushed (and fsync'ed unless disabled) before the copy is reported
    as successful.
    """
    with open(src, "rb") as fsrc:
        ensure_parent(dst, dir_mode)
        fd = os.open(dst, _TRUNCATE_FLAGS | O_BINARY, perm)
        with os.fdopen(fd, "wb") as fdst:
            shutil.copyfileobj(fsrc, fdst, buffer_size)
            fdst.flush()
            if fsync:
                os.fsync(fdst.fileno())
    logger.debug("Copied %s -> %s", src, dst)


def move(src: PathLike, dst: PathLike, dir_mode: int = DEFAULT_DIR_MODE) -> None:
    """Move/rename *src* to *dst*, replacing *dst* atomically where supported."""
    ensure_parent(dst, dir_mode)
    os.replace(src, dst)
    logger.debug("Moved %s -> %s", src, dst)


rename = move


def remove(path: PathLike) -> None:
    """Remove *path* and everything beneath it. Missing paths are ignored."""
    if os.path.isdir(path) and not os.path.islink(path):
        shutil.rmtree(path)
    elif os.path.lexists(path):
        os.remove(path)
    else:
        return
    logger.debug("Removed %s", path)


def chmod(path: PathLike, mode: int) -> None:
    os.chmod(path, mode)


def truncate(path: PathLike, size: int) -> None:
    """Change the size of the file at *path* to *size* bytes."""
    os.truncate(path, size)


def _put_contents(
    path: PathLike,
    data: bytes,
    flags: int,
    perm: int = DEFAULT_FILE_MODE,
    dir_mode: int = DEFAULT_DIR_MODE,
) -> None:
    """Write *data* to *path* with a single write using the given open flags."""
    ensure_parent(path, dir_mode)
    fd = os.open(path, flags | O_BINARY, perm)
    try:
        written = os.write(fd, data)
    finally:
        os.close(fd)
    if written < len(data):
        raise ShortWriteError(path, written, len(data))


def put_contents(
    path: PathLike,
    content: str,
    encoding: str = DEFAULT_ENCODING,
    perm: int = DEFAULT_FILE_MODE,
    dir_mode: int = DEFAULT_DIR_MODE,
) -> None:
    """Replace the file's contents with *content*."""
    _put_contents(path, content.encode(encoding), _TRUNCATE_FLAGS, perm, dir_mode)


def append_contents(
    path: PathLike,
    content: str,
    encoding: str = DEFAULT_ENCODING,
    perm: int = DEFAULT_FILE_MODE,
    dir_mode: int = DEFAULT_DIR_MODE,
) -> None:
    """Append *content* to the end of the file."""
    _put_contents(path, content.encode(encoding), _APPEND_FLAGS, perm, dir_mode)


def put_bin_contents(
    path: PathLike,
    content: bytes,
    perm: int = DEFAULT_FILE_MODE,
    dir_mode: int = DEFAULT_DIR_MODE,
) -> None:
    _put_contents(path, content, _TRUNCATE_FLAGS, perm, dir_mode)


def append_bin_contents(
    path: PathLike,
    content: bytes,
    perm: int = DEFAULT_FILE_MODE,
    dir_mode: int = DEFAULT_DIR_MODE,
) -> None:
    _put_contents(path, content, _APPEND_FLAGS, perm, dir_mode)
