from pathlib import Path

import pytest

from vfs_platform.services.filesystem.factory import FileSystemFactory
from vfs_platform.services.filesystem.local_filesystem import LocalFileSystem
from vfs_platform.services.filesystem.memory_filesystem import MemoryFileSystem
from vfs_platform.services.filesystem.observable_filesystem import ObservableFileSystem
from vfs_platform.services.logger.memory_logger import MemoryLogger
from vfs_platform.services.metrics.memory_metrics import MemoryMetrics
from vfs_platform.services.secrets.env_secrets import EnvSecrets


def _factory(**overrides: str) -> FileSystemFactory:
    return FileSystemFactory(EnvSecrets(overrides=overrides), logger=MemoryLogger())


def test_default_is_memory():
    fs = _factory(FS_IMPL="memory").get()
    assert isinstance(fs, MemoryFileSystem)


def test_local_backend_uses_root(tmp_path):
    fs = _factory(FS_IMPL="local", FS_LOCAL_ROOT=str(tmp_path)).get()
    assert isinstance(fs, LocalFileSystem)
    assert fs.base() == str(tmp_path.resolve())


def test_instances_are_cached():
    factory = _factory(FS_IMPL="memory")
    assert factory.get() is factory.get("memory")
    assert factory.names == ["memory"]


def test_unknown_backend_raises():
    with pytest.raises(ValueError, match="Unknown implementation 'ftp'"):
        _factory().get("ftp")


def test_temp_attempts_from_config():
    fs = _factory(FS_IMPL="memory", FS_TEMP_MAX_ATTEMPTS="7").get()
    assert fs._max_temp_attempts == 7


def test_invalid_temp_attempts_raises():
    with pytest.raises(ValueError, match="FS_TEMP_MAX_ATTEMPTS"):
        _factory(FS_IMPL="memory", FS_TEMP_MAX_ATTEMPTS="lots").get()


def test_memory_metrics_wraps_backend():
    factory = _factory(FS_IMPL="memory", METRICS_IMPL="memory")
    fs = factory.get()
    assert isinstance(fs, ObservableFileSystem)
    fs.create("f.txt").close()
    assert isinstance(factory.metrics, MemoryMetrics)
    assert len(factory.metrics.histograms["fs_operation_duration_seconds"]) == 1


def test_explicit_metrics_wraps_backend():
    metrics = MemoryMetrics()
    factory = FileSystemFactory(EnvSecrets(overrides={}), logger=MemoryLogger(), metrics=metrics)
    fs = factory.get("memory")
    fs.stat("/")
    assert metrics.histograms["fs_operation_duration_seconds"]


def test_register_instance():
    factory = _factory()
    prebuilt = MemoryFileSystem()
    factory.register_instance("memory", prebuilt)
    assert factory.get("memory") is prebuilt


def test_logs_when_backend_ready():
    logger = MemoryLogger()
    factory = FileSystemFactory(EnvSecrets(overrides={"FS_IMPL": "memory"}), logger=logger)
    factory.get()
    assert logger.messages == ["Filesystem ready"]
    assert logger.entries[0].ctx == {"backend": "memory", "base": "/"}


def test_from_env_file(tmp_path: Path):
    env_dir = tmp_path / ".env"
    env_dir.mkdir()
    (env_dir / "test.env").write_text(f"FS_IMPL=local\nFS_LOCAL_ROOT={tmp_path / 'data'}\nLOG_IMPL=memory\n")
    factory = FileSystemFactory.from_env("test", project_root=tmp_path)
    fs = factory.get()
    assert isinstance(fs, LocalFileSystem)
    assert fs.base() == str((tmp_path / "data").resolve())


def test_from_env_overrides_win(tmp_path: Path):
    env_dir = tmp_path / ".env"
    env_dir.mkdir()
    (env_dir / "test.env").write_text("FS_IMPL=local\nLOG_IMPL=memory\n")
    factory = FileSystemFactory.from_env("test", overrides={"FS_IMPL": "memory"}, project_root=tmp_path)
    assert isinstance(factory.get(), MemoryFileSystem)
