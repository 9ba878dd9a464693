"""Use case: record a hotkey for one slot from raw key-down events."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from aityping.l1_entities.capture_state import CaptureState
from aityping.l1_entities.errors import (
    MissingModifierError,
    NotConsecutiveError,
    RepeatCountOutOfRangeError,
)
from aityping.l1_entities.hotkey import (
    DEFAULT_REPEAT_COUNT,
    MAX_REPEAT_COUNT,
    MIN_REPEAT_COUNT,
    Combination,
    Consecutive,
    Hotkey,
    Slot,
    validate_hotkey,
)
from aityping.l1_entities.key_event import KeyEvent
from aityping.l2_use_cases.conflict_monitor_use_case import ConflictMonitor

log = logging.getLogger('ait.capture')


@dataclass(frozen=True)
class CaptureResult:
    """Outcome of a capture cycle — either a committed hotkey or the reason it was refused."""

    hotkey: Hotkey | None = None
    error: str = ''

    @property
    def committed(self) -> bool:
        return self.hotkey is not None


class HotkeyCaptureSession:
    """Idle → Recording → Idle recorder for a single slot.

    Committed hotkeys are handed to *on_commit*; the caller owns the
    configuration they end up in. Conflict checks run only for the
    selected-text slot and never hold up the commit.
    """

    def __init__(
        self,
        slot: Slot,
        hotkey: Hotkey,
        on_commit: Callable[[Slot, Hotkey], None],
        conflict_monitor: ConflictMonitor | None = None,
    ) -> None:
        self.slot = slot
        self._hotkey = hotkey
        self._on_commit = on_commit
        self._conflicts = conflict_monitor
        self._state = CaptureState.IDLE

    @property
    def state(self) -> CaptureState:
        return self._state

    @property
    def hotkey(self) -> Hotkey:
        return self._hotkey

    @property
    def is_recording(self) -> bool:
        return self._state is CaptureState.RECORDING

    def reset(self, hotkey: Hotkey) -> None:
        """Re-seed the previous value, e.g. after the store reloads."""
        self._hotkey = hotkey

    def start_recording(self) -> None:
        self._state = CaptureState.RECORDING
        log.debug('Recording %s', self.slot.value)

    def cancel(self) -> None:
        """Focus lost: abandon the cycle without committing anything."""
        if self._state is CaptureState.RECORDING:
            log.debug('Recording %s aborted', self.slot.value)
        self._state = CaptureState.IDLE

    def handle_key_down(self, event: KeyEvent) -> CaptureResult | None:
        """Feed one key-down. Returns None while the event is ignored or swallowed."""
        if self._state is not CaptureState.RECORDING or event.is_modifier:
            return None

        candidate = self._build_candidate(event)
        self._state = CaptureState.IDLE
        try:
            validate_hotkey(candidate, self.slot)
        except MissingModifierError as e:
            log.info('Rejected %s hotkey %r: %s', self.slot.value, candidate, e)
            return CaptureResult(error=str(e))

        self._commit(candidate)
        if self.slot is Slot.SELECTED and self._conflicts is not None:
            self._conflicts.request(candidate)
        return CaptureResult(hotkey=candidate)

    def set_repeat_count(self, count: int) -> Hotkey:
        """Edit a consecutive hotkey's press count and re-commit it immediately."""
        if not isinstance(self._hotkey, Consecutive):
            raise NotConsecutiveError(f'{self.slot.value} is not a consecutive-press hotkey')
        if not MIN_REPEAT_COUNT <= count <= MAX_REPEAT_COUNT:
            raise RepeatCountOutOfRangeError(
                f'Repeat count must be between {MIN_REPEAT_COUNT} and {MAX_REPEAT_COUNT}, got {count}'
            )
        updated = Consecutive(key=self._hotkey.key, count=count)
        self._commit(updated)
        return updated

    def _build_candidate(self, event: KeyEvent) -> Hotkey:
        # The selected-text slot only ever holds combinations; a bare key fails validation.
        if event.modifiers or self.slot is Slot.SELECTED:
            return Combination(modifiers=event.modifiers, key=event.key)
        count = self._hotkey.count if isinstance(self._hotkey, Consecutive) else DEFAULT_REPEAT_COUNT
        return Consecutive(key=event.key, count=count)

    def _commit(self, hotkey: Hotkey) -> None:
        self._hotkey = hotkey
        log.info('Committed %s hotkey %r', self.slot.value, hotkey)
        self._on_commit(self.slot, hotkey)
