"""EasyFS - filesystem convenience toolkit.

Two families of operations:

- propagating mutations (:mod:`easyfs.fs.mutate`) raise on any failure and
  create missing parent directories before writing;
- best-effort queries (:mod:`easyfs.fs.query`) never raise for filesystem
  errors and return ``False`` / ``0`` / ``None`` / ``""`` instead.

:mod:`easyfs.fs.scanner` extracts byte ranges from an open file using
positioned reads.
"""

__version__ = "0.1.0"

from easyfs.common.errors import ShortReadError, ShortWriteError
from easyfs.common.models import DirEntry, PathInfo
from easyfs.fs.mutate import (
    append_bin_contents,
    append_contents,
    chmod,
    copy,
    create,
    ensure_parent,
    mkdir,
    move,
    open_file,
    put_bin_contents,
    put_contents,
    remove,
    rename,
    truncate,
)
from easyfs.fs.paths import basename, dirname, exec_dir, exec_path, ext, filename, glob, home, real_path, temp_dir
from easyfs.fs.query import (
    exists,
    get_bin_contents,
    get_contents,
    info,
    is_dir,
    is_file,
    is_readable,
    is_writable,
    list_entries,
    mtime,
    mtime_ms,
    readable_size,
    scan_dir,
    size,
    stat_path,
)
from easyfs.fs.scanner import find_next_byte, read_range, read_until
from easyfs.fs.sizes import format_size, parse_size

__all__ = [
    "__version__",
    "DirEntry",
    "PathInfo",
    "ShortReadError",
    "ShortWriteError",
    "append_bin_contents",
    "append_contents",
    "basename",
    "chmod",
    "copy",
    "create",
    "dirname",
    "ensure_parent",
    "exec_dir",
    "exec_path",
    "exists",
    "ext",
    "filename",
    "find_next_byte",
    "format_size",
    "get_bin_contents",
    "get_contents",
    "glob",
    "home",
    "info",
    "is_dir",
    "is_file",
    "is_readable",
    "is_writable",
    "list_entries",
    "mkdir",
    "move",
    "mtime",
    "mtime_ms",
    "open_file",
    "parse_size",
    "put_bin_contents",
    "put_contents",
    "read_range",
    "read_until",
    "readable_size",
    "real_path",
    "remove",
    "rename",
    "scan_dir",
    "size",
    "stat_path",
    "temp_dir",
    "truncate",
]
