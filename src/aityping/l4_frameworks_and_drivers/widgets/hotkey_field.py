"""Hotkey field — focusable display of one slot's hotkey that records while focused."""

from __future__ import annotations

from textual import events
from textual.reactive import reactive
from textual.widgets import Static

from aityping.l1_entities.hotkey import Slot
from aityping.l4_frameworks_and_drivers.key_adapter import key_event_from_textual
from aityping.l4_frameworks_and_drivers.messages import KeyCaptured, RecordingAborted, RecordingStarted


class HotkeyField(Static, can_focus=True):
    """Focus starts a recording, blur aborts it, key presses are forwarded while recording."""

    DEFAULT_CSS = """
    HotkeyField {
        border: round $primary;
        padding: 0 1;
        height: 3;
    }

    HotkeyField.-recording {
        border: round $warning;
    }
    """

    recording: reactive[bool] = reactive(False)
    hotkey_label: reactive[str] = reactive('')

    def __init__(self, slot: Slot, title: str, **kwargs) -> None:
        super().__init__(**kwargs)
        self.slot = slot
        self._title = title

    def render(self) -> str:
        suffix = '  (press keys…)' if self.recording else ''
        return f'{self._title}: {self.hotkey_label}{suffix}'

    def watch_recording(self, recording: bool) -> None:
        self.set_class(recording, '-recording')

    def on_focus(self, event: events.Focus) -> None:
        self.post_message(RecordingStarted(self.slot))

    def on_blur(self, event: events.Blur) -> None:
        self.post_message(RecordingAborted(self.slot))

    def on_key(self, event: events.Key) -> None:
        if not self.recording:
            return
        event.stop()
        event.prevent_default()
        self.post_message(KeyCaptured(self.slot, key_event_from_textual(event.key, event.character)))
