from __future__ import annotations

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

# Access mode bits of an open flag set (O_RDONLY is 0 on every platform).
ACCESS_MASK = os.O_RDONLY | os.O_WRONLY | os.O_RDWR


def is_create(flags: int) -> bool:
    return flags & os.O_CREAT != 0


def is_append(flags: int) -> bool:
    return flags & os.O_APPEND != 0


def is_truncate(flags: int) -> bool:
    return flags & os.O_TRUNC != 0


def can_read(flags: int) -> bool:
    return flags & ACCESS_MASK in (os.O_RDONLY, os.O_RDWR)


def can_write(flags: int) -> bool:
    return flags & ACCESS_MASK in (os.O_WRONLY, os.O_RDWR)


@dataclass(frozen=True)
class FileInfo:
    """Metadata for a file or directory as returned by stat() and read_dir()."""

    name: str
    size: int
    is_dir: bool = False
    mode: int = 0
    mod_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class FileInterface(ABC):
    """An open file. Returned by every FileSystemInterface open operation."""

    name: str

    @abstractmethod
    def read(self, size: int = -1) -> bytes:
        """Read up to *size* bytes from the cursor (all remaining if negative).

        Returns ``b""`` at end of data.
        """
        ...

    @abstractmethod
    def read_at(self, size: int, offset: int) -> bytes:
        """Read up to *size* bytes at *offset* without moving the cursor."""
        ...

    @abstractmethod
    def write(self, data: bytes) -> int:
        """Write *data* at the cursor. Returns the number of bytes written."""
        ...

    @abstractmethod
    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int: ...

    @abstractmethod
    def tell(self) -> int: ...

    @abstractmethod
    def close(self) -> None:
        """Close the handle. Closing twice raises FileClosedError."""
        ...

    @property
    @abstractmethod
    def closed(self) -> bool: ...

    @abstractmethod
    def readable(self) -> bool: ...

    @abstractmethod
    def writable(self) -> bool: ...

    def __enter__(self) -> FileInterface:
        return self

    def __exit__(self, *exc: Any) -> None:
        if not self.closed:
            self.close()


class FileSystemInterface(ABC):
    """Abstracts a hierarchical filesystem so memory and disk backends are
    interchangeable at call sites."""

    def create(self, path: str) -> FileInterface:
        """Create or truncate *path* for reading and writing.

        Intermediate directories are created as needed.
        """
        return self.open_file(path, os.O_RDWR | os.O_CREAT | os.O_TRUNC, 0o666)

    def open(self, path: str) -> FileInterface:
        """Open an existing file read-only. Raises FileNotFoundError if missing."""
        return self.open_file(path, os.O_RDONLY, 0)

    @abstractmethod
    def open_file(self, path: str, flags: int, mode: int = 0o666) -> FileInterface:
        """Open *path* with ``os.O_*`` *flags*. Raises IsADirectoryError for directories."""
        ...

    @abstractmethod
    def stat(self, path: str) -> FileInfo:
        """Return metadata for *path*. Raises FileNotFoundError if missing."""
        ...

    @abstractmethod
    def read_dir(self, path: str) -> list[FileInfo]:
        """List the immediate children of a directory. Callers must not rely on order."""
        ...

    @abstractmethod
    def rename(self, src: str, dst: str) -> None: ...

    @abstractmethod
    def remove(self, path: str) -> None:
        """Remove a file or an empty directory."""
        ...

    @abstractmethod
    def temp_file(self, dir: str, prefix: str) -> FileInterface:
        """Create a new, uniquely named file in *dir* and open it read-write."""
        ...

    @abstractmethod
    def join(self, *elem: str) -> str: ...

    @abstractmethod
    def dir(self, path: str) -> FileSystemInterface:
        """Return a view of this filesystem rooted at *path*."""
        ...

    @abstractmethod
    def base(self) -> str: ...

    @abstractmethod
    def health_check(self) -> bool: ...
