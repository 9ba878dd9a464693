"""Textual Message subclasses — contracts between hotkey fields and the App."""

from __future__ import annotations

from textual.message import Message

from aityping.l1_entities.hotkey import Slot
from aityping.l1_entities.key_event import KeyEvent


class RecordingStarted(Message):
    """Posted by a hotkey field when it gains focus."""

    def __init__(self, slot: Slot) -> None:
        super().__init__()
        self.slot = slot


class RecordingAborted(Message):
    """Posted by a hotkey field when it loses focus mid-recording."""

    def __init__(self, slot: Slot) -> None:
        super().__init__()
        self.slot = slot


class KeyCaptured(Message):
    """Posted by a recording hotkey field for every key-down it swallows."""

    def __init__(self, slot: Slot, key_event: KeyEvent) -> None:
        super().__init__()
        self.slot = slot
        self.key_event = key_event
