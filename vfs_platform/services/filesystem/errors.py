"""Error types shared by every FileSystemInterface implementation.

Most error kinds map directly onto Python's built-in ``OSError`` subclasses
(``FileNotFoundError``, ``NotADirectoryError``, ``IsADirectoryError``) and
``io.UnsupportedOperation``. The classes below cover the kinds that have no
dedicated built-in.
"""

from __future__ import annotations

import errno
import os


class DirectoryNotEmptyError(OSError):
    """Raised when removing or replacing a directory that still has entries."""

    def __init__(self, path: str) -> None:
        super().__init__(errno.ENOTEMPTY, os.strerror(errno.ENOTEMPTY), path)


class FileClosedError(ValueError):
    """Raised on I/O against a handle that has already been closed."""

    def __init__(self, name: str, msg: str = "I/O operation on closed file") -> None:
        super().__init__(f"{msg}: {name}")
        self.name = name


class TempFileLimitError(OSError):
    """Raised when no free temporary file name was found within the attempt cap."""

    def __init__(self, directory: str, attempts: int) -> None:
        super().__init__(
            errno.EEXIST,
            f"max. number of tempfiles reached ({attempts} attempts)",
            directory,
        )
        self.attempts = attempts


def not_found(path: str) -> FileNotFoundError:
    return FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)


def not_a_directory(path: str) -> NotADirectoryError:
    return NotADirectoryError(errno.ENOTDIR, "not a directory", path)


def is_a_directory(path: str) -> IsADirectoryError:
    return IsADirectoryError(errno.EISDIR, "cannot open a directory", path)
