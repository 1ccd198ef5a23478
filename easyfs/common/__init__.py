"""Shared constants, models and low-level I/O helpers."""
