"""Port: authority on reserved system shortcuts."""

from __future__ import annotations

from typing import Protocol

from aityping.l1_entities.hotkey import Hotkey


class ConflictChecker(Protocol):
    """Abstract conflict authority. Platform shortcut knowledge stays behind this port."""

    async def check_conflicts(self, hotkey: Hotkey) -> list[str]:
        """Return human-readable descriptors of shortcuts *hotkey* collides with (possibly empty)."""
        ...
