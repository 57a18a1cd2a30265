import pytest

from vfs_platform.services.registry import resolve_implementation, resolve_interface_type


def test_resolve_memory_filesystem():
    cls = resolve_implementation("fs", "memory")
    from vfs_platform.services.filesystem.memory_filesystem import MemoryFileSystem

    assert cls is MemoryFileSystem


def test_resolve_local_filesystem():
    cls = resolve_implementation("fs", "local")
    from vfs_platform.services.filesystem.local_filesystem import LocalFileSystem

    assert cls is LocalFileSystem


def test_resolve_metrics():
    from vfs_platform.services.metrics.memory_metrics import MemoryMetrics
    from vfs_platform.services.metrics.noop_metrics import NoopMetrics

    assert resolve_implementation("metrics", "noop") is NoopMetrics
    assert resolve_implementation("metrics", "memory") is MemoryMetrics


def test_resolve_interface_types():
    from vfs_platform.services.filesystem.interface import FileSystemInterface

    fs_type = resolve_interface_type("fs")
    assert fs_type is FileSystemInterface
    assert issubclass(resolve_implementation("fs", "memory"), fs_type)
    assert issubclass(resolve_implementation("fs", "local"), fs_type)


def test_unknown_flag_raises():
    with pytest.raises(ValueError, match="Unknown interface flag"):
        resolve_implementation("db", "memory")
    with pytest.raises(ValueError, match="Unknown interface flag"):
        resolve_interface_type("db")


def test_unknown_impl_lists_available():
    with pytest.raises(ValueError, match="available: memory, local"):
        resolve_implementation("fs", "s3")
