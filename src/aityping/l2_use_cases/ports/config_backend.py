"""Port: configuration backend shared with the key-listener process."""

from __future__ import annotations

from typing import Protocol

from aityping.l1_entities.config import AppConfig


class ConfigBackend(Protocol):
    """Abstract request/response boundary to the process that owns the persisted config."""

    async def get_config(self) -> AppConfig:
        """Return the persisted configuration. Raises on any failure."""
        ...

    async def save_config(self, config: AppConfig) -> None:
        """Durably store the full configuration. Raises PersistError on failure."""
        ...

    async def get_enabled(self) -> bool:
        """Return the global enabled flag."""
        ...

    async def set_enabled(self, enabled: bool) -> None:
        """Set the global enabled flag."""
        ...
