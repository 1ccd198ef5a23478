"""Filesystem operations, grouped by error policy."""
