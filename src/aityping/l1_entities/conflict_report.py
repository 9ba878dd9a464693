"""Conflict report entity — descriptors of system shortcuts a hotkey collides with."""

from __future__ import annotations

from dataclasses import dataclass

from aityping.l1_entities.hotkey import Hotkey


@dataclass(frozen=True)
class ConflictReport:
    hotkey: Hotkey
    conflicts: tuple[str, ...] = ()

    @property
    def has_conflicts(self) -> bool:
        return bool(self.conflicts)
