"""Root-level pytest fixtures: one filesystem per backend, plus a parametrised any_fs."""

from __future__ import annotations

import pytest

from vfs_platform.services.filesystem.local_filesystem import LocalFileSystem
from vfs_platform.services.filesystem.memory_filesystem import MemoryFileSystem
from vfs_platform.services.secrets.env_secrets import EnvSecrets


@pytest.fixture
def memory_fs():
    return MemoryFileSystem()


@pytest.fixture
def local_fs(tmp_path):
    secrets = EnvSecrets(overrides={"FS_LOCAL_ROOT": str(tmp_path / "root")})
    fs = LocalFileSystem(secrets)
    fs.health_check()
    return fs


@pytest.fixture(params=["memory", "local"])
def any_fs(request):
    """The same test body against both backends."""
    return request.getfixturevalue(f"{request.param}_fs")
