from __future__ import annotations

import errno
import os
import tempfile
from datetime import datetime, timezone
from io import UnsupportedOperation
from pathlib import Path

from vfs_platform.services.filesystem import paths
from vfs_platform.services.filesystem.errors import (
    DirectoryNotEmptyError,
    FileClosedError,
    is_a_directory,
    not_a_directory,
)
from vfs_platform.services.filesystem.interface import (
    FileInfo,
    FileInterface,
    FileSystemInterface,
    can_read,
    can_write,
    is_create,
)
from vfs_platform.services.secrets.interface import SecretsInterface

_DEFAULT_ROOT = "/tmp/vfs-platform"


class LocalFile(FileInterface):
    """A handle on a real file descriptor."""

    def __init__(self, name: str, fd: int, flags: int) -> None:
        self.name = name
        self._fd = fd
        self._flags = flags
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def readable(self) -> bool:
        return can_read(self._flags)

    def writable(self) -> bool:
        return can_write(self._flags)

    def read(self, size: int = -1) -> bytes:
        self._check_readable()
        if size >= 0:
            return os.read(self._fd, size)
        chunks: list[bytes] = []
        while chunk := os.read(self._fd, 64 * 1024):
            chunks.append(chunk)
        return b"".join(chunks)

    def read_at(self, size: int, offset: int) -> bytes:
        self._check_readable()
        if size < 0:
            size = max(os.fstat(self._fd).st_size - offset, 0)
        return os.pread(self._fd, size, offset)

    def write(self, data: bytes) -> int:
        self._check_open()
        if not self.writable():
            raise UnsupportedOperation("write not supported")
        view = memoryview(data)
        written = 0
        while written < len(view):
            written += os.write(self._fd, view[written:])
        return written

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        self._check_open()
        if whence not in (os.SEEK_SET, os.SEEK_CUR, os.SEEK_END):
            raise ValueError(f"invalid whence ({whence}, should be 0, 1 or 2)")
        return os.lseek(self._fd, offset, whence)

    def tell(self) -> int:
        self._check_open()
        return os.lseek(self._fd, 0, os.SEEK_CUR)

    def close(self) -> None:
        if self._closed:
            raise FileClosedError(self.name, "file already closed")
        self._closed = True
        os.close(self._fd)

    def _check_open(self) -> None:
        if self._closed:
            raise FileClosedError(self.name)

    def _check_readable(self) -> None:
        self._check_open()
        if not self.readable():
            raise UnsupportedOperation("read not supported")

    def __repr__(self) -> str:
        return f"LocalFile({self.name!r}, fd={self._fd})"


class LocalFileSystem(FileSystemInterface):
    """File system implementation backed by local disk.

    Config (via secrets):
        FS_LOCAL_ROOT - Directory used as the filesystem base (default: /tmp/vfs-platform)
    """

    def __init__(self, secrets: SecretsInterface, root: str | None = None) -> None:
        self._secrets = secrets
        if root is None:
            root = secrets.get_or_default("FS_LOCAL_ROOT", _DEFAULT_ROOT)
        self._root = Path(root).resolve()

    def _resolve(self, path: str) -> Path:
        """Resolve a relative path against root, rejecting traversal attempts."""
        rel = self._name_for(path)
        return self._root / rel if rel else self._root

    def _name_for(self, path: str) -> str:
        return paths.relative(paths.SEPARATOR, paths.absolute(paths.SEPARATOR, path))

    def open_file(self, path: str, flags: int, mode: int = 0o666) -> LocalFile:
        full = self._resolve(path)
        if full.is_dir():
            raise is_a_directory(path)
        if is_create(flags):
            self._make_parents(full, path)
        fd = os.open(full, flags, mode)
        return LocalFile(self._name_for(path), fd, flags)

    def _make_parents(self, full: Path, path: str) -> None:
        try:
            full.parent.mkdir(parents=True, exist_ok=True)
        except FileExistsError as exc:
            # an intermediate segment is a regular file
            raise not_a_directory(path) from exc

    def stat(self, path: str) -> FileInfo:
        full = self._resolve(path)
        st = full.stat()
        return FileInfo(
            name=full.name or paths.SEPARATOR,
            size=st.st_size,
            is_dir=full.is_dir(),
            mode=st.st_mode,
            mod_time=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
        )

    def read_dir(self, path: str) -> list[FileInfo]:
        full = self._resolve(path)
        if full.exists() and not full.is_dir():
            raise not_a_directory(path)
        infos: list[FileInfo] = []
        with os.scandir(full) as it:
            for entry in it:
                st = entry.stat()
                infos.append(
                    FileInfo(
                        name=entry.name,
                        size=st.st_size,
                        is_dir=entry.is_dir(),
                        mode=st.st_mode,
                        mod_time=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
                    )
                )
        return sorted(infos, key=lambda info: info.name)

    def rename(self, src: str, dst: str) -> None:
        src_full = self._resolve(src)
        dst_full = self._resolve(dst)
        if not src_full.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), src)
        self._make_parents(dst_full, dst)
        try:
            os.replace(src_full, dst_full)
        except OSError as exc:
            if exc.errno in (errno.ENOTEMPTY, errno.EEXIST):
                raise DirectoryNotEmptyError(dst) from exc
            raise

    def remove(self, path: str) -> None:
        full = self._resolve(path)
        if full == self._root:
            raise OSError(errno.EBUSY, "cannot remove the root directory", path)
        if not full.is_dir():
            full.unlink()
            return
        try:
            full.rmdir()
        except OSError as exc:
            if exc.errno in (errno.ENOTEMPTY, errno.EEXIST):
                raise DirectoryNotEmptyError(path) from exc
            raise

    def temp_file(self, dir: str, prefix: str) -> LocalFile:
        full_dir = self._resolve(dir)
        full_dir.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=full_dir, prefix=f"{prefix}_")
        name = str(Path(tmp).relative_to(self._root))
        return LocalFile(name, fd, os.O_RDWR | os.O_CREAT)

    def join(self, *elem: str) -> str:
        return paths.join(*elem)

    def dir(self, path: str) -> LocalFileSystem:
        return LocalFileSystem(self._secrets, root=str(self._resolve(path)))

    def base(self) -> str:
        return str(self._root)

    def health_check(self) -> bool:
        try:
            self._root.mkdir(parents=True, exist_ok=True)
            return self._root.is_dir() and os.access(self._root, os.W_OK)
        except OSError:
            return False
