"""HotkeySettingsController — wires capture sessions, conflict checks, and the store."""

from __future__ import annotations

import logging

from aityping.l1_entities.config import AppConfig
from aityping.l1_entities.conflict_report import ConflictReport
from aityping.l1_entities.hotkey import Hotkey, Slot
from aityping.l1_entities.key_event import KeyEvent
from aityping.l2_use_cases.capture_hotkey_use_case import CaptureResult, HotkeyCaptureSession
from aityping.l2_use_cases.config_store import ConfigStore, SaveResult
from aityping.l2_use_cases.conflict_monitor_use_case import ConflictMonitor
from aityping.l2_use_cases.ports.conflict_checker import ConflictChecker

log = logging.getLogger('ait.controller')


class HotkeySettingsController:
    """Central orchestrator between the settings UI and the store.

    Owns one capture session per slot and lets at most one of them record at
    a time. Captured hotkeys land in the store as optimistic local edits;
    ``save`` persists them.
    """

    def __init__(self, store: ConfigStore, conflict_checker: ConflictChecker) -> None:
        self._store = store
        self.conflicts = ConflictMonitor(conflict_checker)
        self.sessions: dict[Slot, HotkeyCaptureSession] = {}
        self.last_error: str = ''

    @property
    def store(self) -> ConfigStore:
        return self._store

    @property
    def config(self) -> AppConfig | None:
        return self._store.config

    @property
    def conflict_report(self) -> ConflictReport | None:
        return self.conflicts.report

    @property
    def recording_slot(self) -> Slot | None:
        for slot, session in self.sessions.items():
            if session.is_recording:
                return slot
        return None

    async def load(self) -> AppConfig:
        config = await self._store.load()
        self._sync_sessions()
        return config

    def start_recording(self, slot: Slot) -> None:
        for other, session in self._require_sessions().items():
            if other is not slot:
                session.cancel()
        self.last_error = ''
        self.sessions[slot].start_recording()

    def focus_lost(self, slot: Slot) -> None:
        if slot in self.sessions:
            self.sessions[slot].cancel()

    def handle_key_down(self, event: KeyEvent) -> CaptureResult | None:
        """Route a key-down to whichever slot is recording."""
        slot = self.recording_slot
        if slot is None:
            return None
        result = self.sessions[slot].handle_key_down(event)
        if result is not None:
            self.last_error = result.error
        return result

    def set_full_repeat_count(self, count: int) -> Hotkey:
        """Edit the full-text slot's press count. Raises HotkeyValidationError if refused."""
        return self._require_sessions()[Slot.FULL].set_repeat_count(count)

    async def save(self) -> SaveResult:
        config = self._store.config
        if config is None:
            return SaveResult(error='Config has not been loaded yet')
        result = await self._store.save(config)
        self._sync_sessions()
        return result

    def revert(self) -> None:
        self._store.revert_local()
        self.conflicts.clear()
        self._sync_sessions()

    def _on_commit(self, slot: Slot, hotkey: Hotkey) -> None:
        self._store.update_hotkey(slot, hotkey)

    def _require_sessions(self) -> dict[Slot, HotkeyCaptureSession]:
        if not self.sessions:
            raise RuntimeError('Settings not loaded; call load() first')
        return self.sessions

    def _sync_sessions(self) -> None:
        config = self._store.config
        if config is None:
            return
        for slot in Slot:
            hotkey = config.hotkey.for_slot(slot)
            session = self.sessions.get(slot)
            if session is None:
                monitor = self.conflicts if slot is Slot.SELECTED else None
                self.sessions[slot] = HotkeyCaptureSession(slot, hotkey, self._on_commit, monitor)
            elif not session.is_recording:
                session.reset(hotkey)
        log.debug('Capture sessions synced with config')
