"""Observable wrapper around FileSystemInterface that adds timing metrics and logging.

Records a histogram sample for every filesystem call, tagged with the
operation and backend name, and counts failures. Mutating operations are
logged at debug level; failures at warn level. Errors are always re-raised
unchanged.
"""

from __future__ import annotations

import time
from typing import Any, Callable, TypeVar

from vfs_platform.services.filesystem.interface import (
    FileInfo,
    FileInterface,
    FileSystemInterface,
)
from vfs_platform.services.logger.interface import LoggingInterface
from vfs_platform.services.metrics.interface import MetricsInterface

_DURATION_METRIC = "fs_operation_duration_seconds"
_ERROR_METRIC = "fs_operation_errors_total"

T = TypeVar("T")


class ObservableFileSystem(FileSystemInterface):
    """Transparent wrapper that records timing histograms for every filesystem call."""

    def __init__(
        self,
        inner: FileSystemInterface,
        metrics: MetricsInterface,
        logger: LoggingInterface,
        backend: str = "",
    ) -> None:
        self._inner = inner
        self._metrics = metrics
        self._log = logger
        self._backend = backend or type(inner).__name__

    @property
    def inner(self) -> FileSystemInterface:
        return self._inner

    # -- Delegation helpers ---------------------------------------------------

    def _call(
        self,
        operation: str,
        fn: Callable[..., T],
        *args: Any,
        mutating: bool = False,
        **ctx: Any,
    ) -> T:
        tags = {"operation": operation, "backend": self._backend}
        t0 = time.perf_counter()
        try:
            result = fn(*args)
        except Exception as exc:
            self._metrics.counter(_ERROR_METRIC, tags=tags)
            self._log.warn(
                "Filesystem operation failed",
                op=operation,
                backend=self._backend,
                error=f"{type(exc).__name__}: {exc}",
                **ctx,
            )
            raise
        finally:
            self._metrics.histogram(_DURATION_METRIC, time.perf_counter() - t0, tags=tags)
        if mutating:
            self._log.debug("Filesystem operation", op=operation, backend=self._backend, **ctx)
        return result

    # -- FileSystemInterface --------------------------------------------------

    def create(self, path: str) -> FileInterface:
        return self._call("create", self._inner.create, path, mutating=True, path=path)

    def open(self, path: str) -> FileInterface:
        return self._call("open", self._inner.open, path, path=path)

    def open_file(self, path: str, flags: int, mode: int = 0o666) -> FileInterface:
        return self._call(
            "open_file",
            self._inner.open_file,
            path,
            flags,
            mode,
            mutating=True,
            path=path,
            flags=flags,
        )

    def stat(self, path: str) -> FileInfo:
        return self._call("stat", self._inner.stat, path, path=path)

    def read_dir(self, path: str) -> list[FileInfo]:
        return self._call("read_dir", self._inner.read_dir, path, path=path)

    def rename(self, src: str, dst: str) -> None:
        self._call("rename", self._inner.rename, src, dst, mutating=True, src=src, dst=dst)

    def remove(self, path: str) -> None:
        self._call("remove", self._inner.remove, path, mutating=True, path=path)

    def temp_file(self, dir: str, prefix: str) -> FileInterface:
        return self._call(
            "temp_file", self._inner.temp_file, dir, prefix, mutating=True, dir=dir, prefix=prefix
        )

    def join(self, *elem: str) -> str:
        return self._inner.join(*elem)

    def dir(self, path: str) -> ObservableFileSystem:
        return ObservableFileSystem(
            self._inner.dir(path), self._metrics, self._log, backend=self._backend
        )

    def base(self) -> str:
        return self._inner.base()

    def health_check(self) -> bool:
        return self._inner.health_check()
