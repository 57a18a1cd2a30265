from __future__ import annotations

import os

from vfs_platform.services.secrets.interface import SecretsInterface


class EnvSecrets(SecretsInterface):
    """Reads configuration from environment variables with optional overrides.

    Overrides win over the process environment, so tests can pin values
    without touching ``os.environ``.
    """

    def __init__(self, overrides: dict[str, str] | None = None) -> None:
        self._env = dict(os.environ)
        if overrides:
            self._env.update(overrides)

    def get(self, key: str) -> str | None:
        return self._env.get(key)

    def get_or_default(self, key: str, default: str) -> str:
        return self._env.get(key, default)

    def require(self, key: str) -> str:
        value = self._env.get(key)
        if value is None:
            raise KeyError(f"Required config value '{key}' is not set")
        return value
