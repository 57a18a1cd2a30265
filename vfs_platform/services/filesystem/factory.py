"""FileSystemFactory: builds configured filesystem backends with lazy instantiation."""

from __future__ import annotations

from pathlib import Path

from vfs_platform.config.env_loader import load_env_file
from vfs_platform.services.filesystem.interface import FileSystemInterface
from vfs_platform.services.filesystem.memory_filesystem import DEFAULT_MAX_TEMP_ATTEMPTS
from vfs_platform.services.filesystem.observable_filesystem import ObservableFileSystem
from vfs_platform.services.logger.factory import LoggerFactory
from vfs_platform.services.logger.interface import LoggingInterface
from vfs_platform.services.metrics.interface import MetricsInterface
from vfs_platform.services.registry import resolve_implementation
from vfs_platform.services.secrets.env_secrets import EnvSecrets
from vfs_platform.services.secrets.interface import SecretsInterface


class FileSystemFactory:
    """Registry of named filesystem instances built from configuration.

    Config (via secrets):
        FS_IMPL              - Default backend: memory | local (default: memory)
        FS_TEMP_MAX_ATTEMPTS - Temp-file name attempts for the memory backend (default: 4096)
        LOG_IMPL             - Logger: pretty | memory (default: pretty)
        LOG_LEVEL            - Minimum level for the pretty logger (default: INFO)
        METRICS_IMPL         - Metrics: noop | memory | prometheus (default: noop)

    Backends are wrapped in ObservableFileSystem unless METRICS_IMPL is noop.
    """

    def __init__(
        self,
        secrets: SecretsInterface,
        logger: LoggingInterface | None = None,
        metrics: MetricsInterface | None = None,
    ) -> None:
        self._secrets = secrets
        self._default_impl = secrets.get_or_default("FS_IMPL", "memory")
        self._metrics_impl = secrets.get_or_default("METRICS_IMPL", "noop")
        self._logger = logger
        self._metrics = metrics
        self._instances: dict[str, FileSystemInterface] = {}

    @classmethod
    def from_env(
        cls,
        env_name: str | None = None,
        overrides: dict[str, str] | None = None,
        project_root: Path | None = None,
    ) -> FileSystemFactory:
        """Build a factory from the process environment, an optional
        ``.env/<env_name>.env`` file and explicit overrides (highest priority)."""
        merged = load_env_file(env_name, project_root) if env_name else {}
        merged.update(overrides or {})
        return cls(EnvSecrets(overrides=merged))

    @property
    def logger(self) -> LoggingInterface:
        if self._logger is None:
            factory = LoggerFactory(
                default_impl=self._secrets.get_or_default("LOG_IMPL", "pretty"),
                level=self._secrets.get_or_default("LOG_LEVEL", "INFO"),
            )
            self._logger = factory.create()
        return self._logger

    @property
    def metrics(self) -> MetricsInterface:
        if self._metrics is None:
            cls = resolve_implementation("metrics", self._metrics_impl)
            if self._metrics_impl == "prometheus":
                self._metrics = cls(secrets=self._secrets)
            else:
                self._metrics = cls()
        return self._metrics

    def register_instance(self, name: str, instance: FileSystemInterface) -> None:
        """Register a pre-built filesystem (useful for testing)."""
        self._instances[name] = instance

    def get(self, name: str | None = None) -> FileSystemInterface:
        """Return the filesystem for backend *name*, building it on first use."""
        name = name or self._default_impl
        if name in self._instances:
            return self._instances[name]
        instance = self._build(name)
        self._instances[name] = instance
        self.logger.info("Filesystem ready", backend=name, base=instance.base())
        return instance

    def _build(self, name: str) -> FileSystemInterface:
        cls = resolve_implementation("fs", name)
        if name == "local":
            fs: FileSystemInterface = cls(secrets=self._secrets)
        else:
            fs = cls(
                max_temp_attempts=self._secrets.get_int(
                    "FS_TEMP_MAX_ATTEMPTS", DEFAULT_MAX_TEMP_ATTEMPTS
                )
            )
        if self._metrics is None and self._metrics_impl == "noop":
            return fs
        return ObservableFileSystem(fs, self.metrics, self.logger, backend=name)

    @property
    def names(self) -> list[str]:
        return list(self._instances.keys())
