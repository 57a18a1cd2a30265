from abc import ABC, abstractmethod


class SecretsInterface(ABC):
    """Provides access to secrets and configuration values."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Get a value by key. Returns None if not found."""
        ...

    @abstractmethod
    def get_or_default(self, key: str, default: str) -> str:
        """Get a value, returning default if not found."""
        ...

    @abstractmethod
    def require(self, key: str) -> str:
        """Get a value, raising KeyError if not found."""
        ...

    def get_int(self, key: str, default: int) -> int:
        """Get an integer value, raising ValueError if it is not a valid int."""
        raw = self.get(key)
        if raw is None or raw == "":
            return default
        try:
            return int(raw)
        except ValueError:
            raise ValueError(f"Config value '{key}' must be an integer, got {raw!r}") from None
