"""Helpers composed purely from FileSystemInterface, so they work across backends."""

from __future__ import annotations

from vfs_platform.services.filesystem.interface import FileInterface, FileSystemInterface

_CHUNK_SIZE = 32 * 1024


def copy_file(
    src: FileSystemInterface,
    dst: FileSystemInterface,
    src_path: str,
    dst_path: str,
) -> None:
    """Copy a file across filesystems.

    If opening, copying or closing either file fails, the partially written
    destination is removed and the original error is re-raised. Errors raised
    during that cleanup are discarded.
    """
    src_file = src.open(src_path)
    try:
        dst_file = dst.create(dst_path)
    except Exception:
        _quietly(src_file.close)
        _quietly(dst.remove, dst_path)
        raise

    try:
        _stream(src_file, dst_file)
    except Exception:
        _quietly(dst_file.close)
        _quietly(dst.remove, dst_path)
        _quietly(src_file.close)
        raise

    try:
        src_file.close()
    except Exception:
        _quietly(dst_file.close)
        _quietly(dst.remove, dst_path)
        raise

    try:
        dst_file.close()
    except Exception:
        _quietly(dst.remove, dst_path)
        raise


def copy_tree(
    src: FileSystemInterface,
    dst: FileSystemInterface,
    src_path: str,
    dst_path: str,
) -> None:
    """Copy a file, or a directory and everything below it, across filesystems."""
    info = src.stat(src_path)
    if not info.is_dir:
        copy_file(src, dst, src_path, dst_path)
        return

    children = src.read_dir(src_path)
    if not children:
        # an empty directory only materialises once something is created in it;
        # a temp file never collides with an existing entry
        placeholder = dst.temp_file(dst_path, ".keep")
        placeholder.close()
        dst.remove(placeholder.name)
        return

    for child in children:
        copy_tree(
            src,
            dst,
            src.join(src_path, child.name),
            dst.join(dst_path, child.name),
        )


def exists(fs: FileSystemInterface, path: str) -> bool:
    """Return True if *path* exists. Errors other than not-found propagate."""
    try:
        fs.stat(path)
    except FileNotFoundError:
        return False
    return True


def read_all(fs: FileSystemInterface, path: str) -> bytes:
    """Return the full content of *path*."""
    with fs.open(path) as f:
        return f.read()


def write_all(fs: FileSystemInterface, path: str, data: bytes) -> None:
    """Create (or truncate) *path* and write *data* to it."""
    with fs.create(path) as f:
        f.write(data)


def _stream(src_file: FileInterface, dst_file: FileInterface) -> None:
    while chunk := src_file.read(_CHUNK_SIZE):
        dst_file.write(chunk)


def _quietly(fn, *args) -> None:  # type: ignore[no-untyped-def]
    try:
        fn(*args)
    except Exception:
        pass
