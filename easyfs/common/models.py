"""Pydantic models for EasyFS."""

from typing import Optional

from pydantic import BaseModel, Field


class PathInfo(BaseModel):
    """Metadata snapshot of a filesystem path."""

    path: str = Field(..., description="Absolute path")
    name: str = Field(..., description="Final path component")
    is_dir: bool = Field(False, description="Whether the path is a directory")
    size: int = Field(0, description="Size in bytes")
    readable_size: str = Field("0.00B", description="Human-readable size")
    mtime: int = Field(0, description="Modification time (seconds since epoch)")
    mtime_ms: int = Field(0, description="Modification time (milliseconds since epoch)")
    mode: int = Field(0, description="Permission bits")
    readable: bool = Field(False, description="Whether the path can be opened for reading")
    writable: bool = Field(False, description="Whether the path can be written to")

    @property
    def is_file(self) -> bool:
        """Anything that is not a directory."""
        return not self.is_dir

    @property
    def mode_string(self) -> str:
        """Permission bits as an octal string, e.g. ``0644``."""
        return f"{self.mode:04o}"


class DirEntry(BaseModel):
    """One immediate child of a directory, as shown by listings."""

    name: str
    is_dir: bool = False
    size: int = 0
    mtime: Optional[int] = Field(None, description="Modification time, None when unavailable")
