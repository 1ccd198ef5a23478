"""Constants for EasyFS."""

# Size formatting: binary (1024-based) units, smallest first
SIZE_UNIT_BASE = 1024
SIZE_UNITS = ("B", "K", "M", "G", "T", "P")

# Rendered by format_size for values at or beyond 1024 ** len(SIZE_UNITS)
SIZE_TOO_LARGE = "TooLarge"

# Permissions used when nothing else is configured (before umask)
DEFAULT_DIR_MODE = 0o777
DEFAULT_FILE_MODE = 0o666

# Copy streaming chunk: 1MB
DEFAULT_COPY_BUFFER_SIZE = 1024 * 1024  # 1MB

DEFAULT_ENCODING = "utf-8"

DEFAULT_LOG_LEVEL = "WARNING"

# Config directory name (under the user's home)
CONFIG_DIR_NAME = ".easyfs"

# Environment variable pointing at an explicit config file
CONFIG_ENV_VAR = "EASYFS_CONFIG"
