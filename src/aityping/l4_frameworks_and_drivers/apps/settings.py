"""SettingsApp — Textual shell for recording hotkeys and saving the configuration."""

from __future__ import annotations

import logging
from pathlib import Path

from textual.app import App as TextualApp
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Input, Static

from aityping.l1_entities.conflict_report import ConflictReport
from aityping.l1_entities.errors import HotkeyValidationError
from aityping.l1_entities.hotkey import Consecutive, Slot, format_hotkey
from aityping.l2_use_cases.config_store import StoreSnapshot
from aityping.l3_interface_adapters.controllers.hotkey_settings_controller import HotkeySettingsController
from aityping.l4_frameworks_and_drivers.logging_setup import setup_file_logging
from aityping.l4_frameworks_and_drivers.messages import KeyCaptured, RecordingAborted, RecordingStarted
from aityping.l4_frameworks_and_drivers.widgets.hotkey_field import HotkeyField

log = logging.getLogger('ait.app')

_SLOT_TITLES = {
    Slot.SELECTED: 'Translate selection',
    Slot.FULL: 'Translate full text',
}


class SettingsApp(TextualApp):
    """Two hotkey fields, a repeat-count input, and conflict / status lines."""

    # Focusing a hotkey field starts a recording, so nothing gets focus implicitly.
    AUTO_FOCUS = None

    BINDINGS = [
        Binding('ctrl+s', 'save', 'Save', priority=True),
        Binding('ctrl+r', 'revert', 'Revert', priority=True),
        Binding('ctrl+q', 'quit', 'Quit', priority=True),
    ]

    def __init__(
        self,
        controller: HotkeySettingsController,
        log_dir: Path | None = None,
        platform: str | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._controller = controller
        self._platform = platform
        self._unsubscribers: list = []
        if log_dir is not None:
            setup_file_logging(log_dir)

    def compose(self) -> ComposeResult:
        yield Static('  aityping | hotkey settings', id='header')
        with Vertical(id='fields'):
            for slot, title in _SLOT_TITLES.items():
                yield HotkeyField(slot, title, id=f'field-{slot.value}')
            yield Input(placeholder='Repeat count (2-10)', type='integer', id='count-input')
        yield Static('', id='conflicts')
        yield Static('', id='status')

    async def on_mount(self) -> None:
        store = self._controller.store
        self._unsubscribers.append(store.subscribe(self._on_snapshot))
        self._unsubscribers.append(self._controller.conflicts.subscribe(self._on_conflicts))
        await self._controller.load()
        self._set_status('')
        self._refresh_fields()

    def on_unmount(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()

    # --- capture routing ---

    def on_recording_started(self, message: RecordingStarted) -> None:
        if not self._controller.sessions:
            return
        self._controller.start_recording(message.slot)
        self._set_status('')
        self._refresh_fields()

    def on_recording_aborted(self, message: RecordingAborted) -> None:
        self._controller.focus_lost(message.slot)
        self._refresh_fields()

    def on_key_captured(self, message: KeyCaptured) -> None:
        result = self._controller.handle_key_down(message.key_event)
        if result is not None and not result.committed:
            self._set_status(f'Error: {result.error}')
        self._refresh_fields()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id != 'count-input':
            return
        try:
            self._controller.set_full_repeat_count(int(event.value))
        except (ValueError, HotkeyValidationError) as e:
            self._set_status(f'Error: {e}')
        self._refresh_fields()

    # --- actions ---

    async def action_save(self) -> None:
        result = await self._controller.save()
        self._set_status('Saved' if result.ok else f'Save failed: {result.error}')
        self._refresh_fields()

    def action_revert(self) -> None:
        self._controller.revert()
        self._set_status('Reverted to saved settings')
        self._refresh_fields()

    # --- rendering ---

    def _on_snapshot(self, snapshot: StoreSnapshot) -> None:
        if snapshot.is_loading:
            self._set_status('Working…')

    def _on_conflicts(self, report: ConflictReport | None) -> None:
        text = ''
        if report is not None and report.has_conflicts:
            text = 'Conflicts with: ' + ', '.join(report.conflicts)
        self.query_one('#conflicts', Static).update(text)

    def _refresh_fields(self) -> None:
        config = self._controller.config
        if config is None:
            return
        recording = self._controller.recording_slot
        for field in self.query(HotkeyField):
            field.hotkey_label = format_hotkey(config.hotkey.for_slot(field.slot), self._platform)
            field.recording = field.slot is recording
        full = config.hotkey.full_mode
        count_input = self.query_one('#count-input', Input)
        count_input.disabled = not isinstance(full, Consecutive)
        if isinstance(full, Consecutive):
            count_input.value = str(full.count)

    def _set_status(self, text: str) -> None:
        self.query_one('#status', Static).update(text)
