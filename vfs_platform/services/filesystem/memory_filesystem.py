"""In-memory filesystem.

A tree of ``_Directory`` nodes whose leaves are ``_Content`` buffers. Every
open returns a new ``MemoryFile`` with its own cursor, but all handles opened
on the same path share that path's buffer, so writes through one handle are
visible through the others (open file description semantics).

Not thread-safe: callers sharing an instance across threads must lock.
"""

from __future__ import annotations

import errno
import os
import time
from dataclasses import dataclass, field
from enum import Enum
from io import UnsupportedOperation

from vfs_platform.services.filesystem import paths
from vfs_platform.services.filesystem.errors import (
    DirectoryNotEmptyError,
    FileClosedError,
    TempFileLimitError,
    is_a_directory,
    not_a_directory,
    not_found,
)
from vfs_platform.services.filesystem.interface import (
    FileInfo,
    FileInterface,
    FileSystemInterface,
    can_read,
    can_write,
    is_append,
    is_create,
    is_truncate,
)

DEFAULT_MAX_TEMP_ATTEMPTS = 4096


class _Content:
    """Byte storage for one file, shared by all handles open on it."""

    def __init__(self) -> None:
        self._data = bytearray()

    def __len__(self) -> int:
        return len(self._data)

    def read_at(self, size: int, offset: int) -> bytes:
        if offset >= len(self._data):
            return b""
        if size < 0:
            return bytes(self._data[offset:])
        return bytes(self._data[offset : offset + size])

    def write_at(self, data: bytes, offset: int) -> int:
        # Overwrite in place; grows the buffer but never shrinks it.
        if offset > len(self._data):
            self._data.extend(bytes(offset - len(self._data)))
        self._data[offset : offset + len(data)] = data
        return len(data)

    def truncate(self) -> None:
        del self._data[:]


@dataclass
class _Directory:
    dirs: dict[str, _Directory] = field(default_factory=dict)
    files: dict[str, _Content] = field(default_factory=dict)

    def size(self) -> int:
        return len(self.dirs) + len(self.files)


class EntryKind(Enum):
    DIRECTORY = "directory"
    FILE = "file"


@dataclass
class _Entry:
    """Result of a path lookup: either a directory node or a file buffer."""

    kind: EntryKind
    name: str
    parent: _Directory | None
    directory: _Directory | None = None
    content: _Content | None = None


class MemoryFile(FileInterface):
    """A handle on a memory file: cursor, open flags and closed state."""

    def __init__(self, name: str, content: _Content, flags: int) -> None:
        self.name = name
        self._content = content
        self._flags = flags
        self._position = 0
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def readable(self) -> bool:
        return can_read(self._flags)

    def writable(self) -> bool:
        return can_write(self._flags)

    def read(self, size: int = -1) -> bytes:
        data = self._read_at(size, self._position)
        self._position += len(data)
        return data

    def read_at(self, size: int, offset: int) -> bytes:
        return self._read_at(size, offset)

    def _read_at(self, size: int, offset: int) -> bytes:
        self._check_open()
        if not self.readable():
            raise UnsupportedOperation("read not supported")
        return self._content.read_at(size, offset)

    def write(self, data: bytes) -> int:
        self._check_open()
        if not self.writable():
            raise UnsupportedOperation("write not supported")
        n = self._content.write_at(data, self._position)
        self._position += n
        return n

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        self._check_open()
        if whence == os.SEEK_SET:
            position = offset
        elif whence == os.SEEK_CUR:
            position = self._position + offset
        elif whence == os.SEEK_END:
            position = len(self._content) + offset
        else:
            raise ValueError(f"invalid whence ({whence}, should be 0, 1 or 2)")
        if position < 0:
            raise OSError(errno.EINVAL, "negative seek position", self.name)
        self._position = position
        return position

    def tell(self) -> int:
        self._check_open()
        return self._position

    def close(self) -> None:
        if self._closed:
            raise FileClosedError(self.name, "file already closed")
        self._closed = True

    def reopen(self) -> None:
        """Clear the closed state; the cursor is left where it was."""
        self._closed = False

    def _check_open(self) -> None:
        if self._closed:
            raise FileClosedError(self.name)

    def __repr__(self) -> str:
        return f"MemoryFile({self.name!r}, position={self._position})"


class MemoryFileSystem(FileSystemInterface):
    """Filesystem held entirely in process memory. Content is lost on exit."""

    def __init__(
        self,
        base: str = paths.SEPARATOR,
        max_temp_attempts: int = DEFAULT_MAX_TEMP_ATTEMPTS,
    ) -> None:
        self._base = paths.join(paths.SEPARATOR, base)
        self._root = _Directory()
        self._max_temp_attempts = max_temp_attempts
        self._temp_count = 0

    @classmethod
    def _view(cls, base: str, root: _Directory, max_temp_attempts: int) -> MemoryFileSystem:
        """A filesystem rooted at *base* that shares the tree *root*."""
        view = cls(base=base, max_temp_attempts=max_temp_attempts)
        view._root = root
        return view

    # ── Resolution ────────────────────────────────────────────────────────

    def _full_path(self, path: str) -> str:
        return paths.absolute(self._base, path)

    def _lookup(self, path: str, create: bool = False) -> _Entry:
        """Walk the tree to *path*, creating missing nodes when *create* is set."""
        full = self._full_path(path)
        segments = paths.split(full)
        if not segments:
            return _Entry(EntryKind.DIRECTORY, paths.SEPARATOR, None, directory=self._root)

        current = self._root
        for segment in segments[:-1]:
            child = current.dirs.get(segment)
            if child is None:
                if segment in current.files:
                    raise not_a_directory(path)
                if not create:
                    raise not_found(path)
                child = _Directory()
                current.dirs[segment] = child
            current = child

        name = segments[-1]
        if name in current.dirs:
            return _Entry(EntryKind.DIRECTORY, name, current, directory=current.dirs[name])
        if name in current.files:
            return _Entry(EntryKind.FILE, name, current, content=current.files[name])
        if not create:
            raise not_found(path)

        content = _Content()
        current.files[name] = content
        return _Entry(EntryKind.FILE, name, current, content=content)

    def _try_lookup(self, path: str) -> _Entry | None:
        try:
            return self._lookup(path)
        except FileNotFoundError:
            return None

    # ── FileSystemInterface ───────────────────────────────────────────────

    def open_file(self, path: str, flags: int, mode: int = 0o666) -> MemoryFile:
        entry = self._lookup(path, create=is_create(flags))
        if entry.kind is EntryKind.DIRECTORY:
            raise is_a_directory(path)
        assert entry.content is not None

        handle = MemoryFile(self._name_for(path), entry.content, flags)
        if is_truncate(flags):
            entry.content.truncate()
        if is_append(flags):
            handle.seek(0, os.SEEK_END)
        return handle

    def stat(self, path: str) -> FileInfo:
        entry = self._lookup(path)
        name = paths.basename(self._full_path(path))
        if entry.kind is EntryKind.DIRECTORY:
            assert entry.directory is not None
            return FileInfo(name=name, size=entry.directory.size(), is_dir=True)
        assert entry.content is not None
        return FileInfo(name=name, size=len(entry.content))

    def read_dir(self, path: str) -> list[FileInfo]:
        entry = self._lookup(path)
        if entry.kind is EntryKind.FILE:
            raise not_a_directory(path)
        assert entry.directory is not None

        infos = [
            FileInfo(name=name, size=d.size(), is_dir=True)
            for name, d in entry.directory.dirs.items()
        ]
        infos.extend(
            FileInfo(name=name, size=len(c)) for name, c in entry.directory.files.items()
        )
        return sorted(infos, key=lambda info: info.name)

    def rename(self, src: str, dst: str) -> None:
        source = self._lookup(src)
        if source.parent is None:
            raise OSError(errno.EBUSY, "cannot rename the root directory", src)

        src_full = self._full_path(src)
        dst_full = self._full_path(dst)
        if src_full == dst_full:
            return

        target = self._try_lookup(dst)
        if source.kind is EntryKind.DIRECTORY:
            if dst_full.startswith(src_full + paths.SEPARATOR):
                raise OSError(errno.EINVAL, "cannot move a directory into itself", dst)
            if target is not None:
                if target.kind is EntryKind.FILE:
                    raise not_a_directory(dst)
                assert target.directory is not None
                if target.directory.size() > 0:
                    raise DirectoryNotEmptyError(dst)
        elif target is not None and target.kind is EntryKind.DIRECTORY:
            raise is_a_directory(dst)

        parent = self._parent_of(dst)
        name = paths.basename(dst_full)
        if source.kind is EntryKind.DIRECTORY:
            assert source.directory is not None
            parent.files.pop(name, None)
            parent.dirs[name] = source.directory
            del source.parent.dirs[source.name]
        else:
            assert source.content is not None
            parent.dirs.pop(name, None)
            parent.files[name] = source.content
            del source.parent.files[source.name]

    def _parent_of(self, path: str) -> _Directory:
        """Return the directory that holds *path*, creating it if missing."""
        full = self._full_path(path)
        parent_path = paths.join(paths.SEPARATOR, *paths.split(full)[:-1])
        current = self._root
        for segment in paths.split(parent_path):
            if segment in current.files:
                raise not_a_directory(path)
            current = current.dirs.setdefault(segment, _Directory())
        return current

    def remove(self, path: str) -> None:
        entry = self._lookup(path)
        if entry.parent is None:
            raise OSError(errno.EBUSY, "cannot remove the root directory", path)

        if entry.kind is EntryKind.DIRECTORY:
            assert entry.directory is not None
            if entry.directory.size() > 0:
                raise DirectoryNotEmptyError(path)
            del entry.parent.dirs[entry.name]
        else:
            del entry.parent.files[entry.name]

    def temp_file(self, dir: str, prefix: str) -> MemoryFile:
        for _ in range(self._max_temp_attempts):
            path = self._temp_filename(dir, prefix)
            if self._try_lookup(path) is None:
                return self.create(path)
        raise TempFileLimitError(dir, self._max_temp_attempts)

    def _temp_filename(self, dir: str, prefix: str) -> str:
        self._temp_count += 1
        return self.join(dir, f"{prefix}_{self._temp_count}_{time.time_ns()}")

    def join(self, *elem: str) -> str:
        return paths.join(*elem)

    def dir(self, path: str) -> MemoryFileSystem:
        return self._view(self._full_path(path), self._root, self._max_temp_attempts)

    def base(self) -> str:
        return self._base

    def health_check(self) -> bool:
        return True

    def _name_for(self, path: str) -> str:
        return paths.relative(self._base, self._full_path(path))
