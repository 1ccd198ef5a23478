"""Path helpers and process-environment lookups.

``home``, ``temp_dir``, ``exec_path`` and ``exec_dir`` read the process
environment on every call; nothing is cached.
"""

import glob as _glob
import logging
import os
import subprocess  # nosec B404
import sys

from easyfs.common.fileutil import PathLike

logger = logging.getLogger("easyfs.fs.paths")


def dirname(path: PathLike) -> str:
    """Directory part of *path* (``"."`` for a bare file name)."""
    return os.path.dirname(path) or "."


def basename(path: PathLike) -> str:
    """Final component of *path*, ignoring trailing separators."""
    p = os.fspath(path)
    stripped = p.rstrip("/\\" if sys.platform == "win32" else "/")
    if not stripped:
        return os.sep if p else "."
    return os.path.basename(stripped)


filename = basename


def ext(path: PathLike) -> str:
    """File extension including the dot, or ``""``."""
    return os.path.splitext(path)[1]


def real_path(path: PathLike) -> str:
    """Absolute form of *path*, or ``""`` if it does not exist."""
    p = os.path.abspath(path)
    if not os.path.exists(p):
        return ""
    return p


def glob(pattern: str, recursive: bool = False) -> list[str]:
    """Paths matching a shell-style *pattern*, sorted."""
    return sorted(_glob.glob(pattern, recursive=recursive))


def exec_path() -> str:
    """Absolute path of the running program."""
    program = sys.argv[0] if sys.argv and sys.argv[0] else sys.executable
    return os.path.abspath(program)


def exec_dir() -> str:
    """Directory containing the running program."""
    return os.path.dirname(exec_path())


def temp_dir() -> str:
    """The system temporary directory, resolved from the environment."""
    if sys.platform == "win32":
        for key in ("TMP", "TEMP", "USERPROFILE"):
            value = os.environ.get(key, "")
            if value:
                return value
        return os.path.join(os.environ.get("SYSTEMROOT", "C:\\Windows"), "Temp")
    return os.environ.get("TMPDIR", "") or "/tmp"  # nosec B108


def _current_user_home() -> str:
    """Home directory from the user database (POSIX only)."""
    import pwd

    return pwd.getpwuid(os.getuid()).pw_dir


def home() -> str:
    """Return the current user's home directory.

    Tries the user database first, then falls back to environment probing:
    ``HOME`` (or the shell's ``~$USER``) on POSIX, ``HOMEDRIVE`` +
    ``HOMEPATH`` or ``USERPROFILE`` on Windows.

    Raises:
        OSError: If no source yields a home directory
    """
    if sys.platform != "win32":
        try:
            user_home = _current_user_home()
            if user_home:
                return user_home
        except (ImportError, KeyError, OSError) as e:
            logger.debug("User database lookup failed: %s", e)
        return _home_unix()
    return _home_windows()


def _home_unix() -> str:
    env_home = os.environ.get("HOME", "")
    if env_home:
        return env_home

    result = subprocess.run(  # nosec B603 B607
        ["sh", "-c", "eval echo ~$USER"],
        capture_output=True,
        text=True,
    )
    if result.returncode != 0:
        raise OSError(f"shell home lookup failed: {result.stderr.strip()}")
    out = result.stdout.strip()
    if not out:
        raise OSError("blank output when reading home directory")
    return out


def _home_windows() -> str:
    drive = os.environ.get("HOMEDRIVE", "")
    path = os.environ.get("HOMEPATH", "")
    env_home = drive + path
    if not drive or not path:
        env_home = os.environ.get("USERPROFILE", "")
    if not env_home:
        raise OSError("HOMEDRIVE, HOMEPATH, and USERPROFILE are blank")
    return env_home
