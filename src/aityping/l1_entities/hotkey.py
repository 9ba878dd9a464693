"""Hotkey entities — tagged union of combination and consecutive-press triggers."""

from __future__ import annotations

import enum
import sys
from collections.abc import Iterable
from typing import Annotated, Literal, assert_never

from pydantic import BaseModel, Field, field_serializer, field_validator

from aityping.l1_entities.errors import MissingModifierError

MIN_REPEAT_COUNT = 2
MAX_REPEAT_COUNT = 10
DEFAULT_REPEAT_COUNT = 3

SPACE_KEY = ' '


class ModifierKey(enum.Enum):
    META = 'Meta'
    CONTROL = 'Control'
    ALT = 'Alt'
    SHIFT = 'Shift'


class Slot(enum.Enum):
    SELECTED = 'selected_mode'
    FULL = 'full_mode'


# Canonical order for display and persistence.
MODIFIER_ORDER: tuple[ModifierKey, ...] = (
    ModifierKey.META,
    ModifierKey.CONTROL,
    ModifierKey.ALT,
    ModifierKey.SHIFT,
)

_MODIFIER_LABELS: dict[str, dict[ModifierKey, str]] = {
    'darwin': {
        ModifierKey.META: 'Cmd',
        ModifierKey.CONTROL: 'Ctrl',
        ModifierKey.ALT: 'Option',
        ModifierKey.SHIFT: 'Shift',
    },
    'win32': {
        ModifierKey.META: 'Win',
        ModifierKey.CONTROL: 'Ctrl',
        ModifierKey.ALT: 'Alt',
        ModifierKey.SHIFT: 'Shift',
    },
}
_FALLBACK_LABELS: dict[ModifierKey, str] = {
    ModifierKey.META: 'Super',
    ModifierKey.CONTROL: 'Ctrl',
    ModifierKey.ALT: 'Alt',
    ModifierKey.SHIFT: 'Shift',
}


def normalize_key(key: str) -> str:
    """Canonical key code: single characters lowercase, any spelling of space as ' '."""
    if not key:
        raise ValueError('key must not be empty')
    if key.lower() == 'space':
        return SPACE_KEY
    if len(key) == 1:
        return key.lower()
    return key


def ordered_modifiers(modifiers: Iterable[ModifierKey]) -> list[ModifierKey]:
    held = set(modifiers)
    return [m for m in MODIFIER_ORDER if m in held]


class Combination(BaseModel):
    """A key pressed while holding a set of modifiers, e.g. Cmd + T."""

    type: Literal['Combination'] = 'Combination'
    modifiers: frozenset[ModifierKey] = frozenset()
    key: str

    model_config = {'frozen': True}

    @field_validator('key')
    @classmethod
    def _normalize_key(cls, value: str) -> str:
        return normalize_key(value)

    @field_serializer('modifiers')
    def _serialize_modifiers(self, modifiers: frozenset[ModifierKey]) -> list[str]:
        return [m.value for m in ordered_modifiers(modifiers)]


class Consecutive(BaseModel):
    """A single key pressed *count* times in quick succession, no modifiers."""

    type: Literal['Consecutive'] = 'Consecutive'
    key: str
    count: int = Field(default=DEFAULT_REPEAT_COUNT, ge=MIN_REPEAT_COUNT, le=MAX_REPEAT_COUNT)

    model_config = {'frozen': True}

    @field_validator('key')
    @classmethod
    def _normalize_key(cls, value: str) -> str:
        return normalize_key(value)


Hotkey = Annotated[Combination | Consecutive, Field(discriminator='type')]


def validate_hotkey(hotkey: Combination | Consecutive, slot: Slot) -> None:
    """Raise MissingModifierError for a bare combination in the selected-text slot.

    Every other shape is structurally valid for either slot.
    """
    match hotkey:
        case Combination(modifiers=modifiers):
            if slot is Slot.SELECTED and not modifiers:
                raise MissingModifierError()
        case Consecutive():
            pass
        case _:
            assert_never(hotkey)


def _key_label(key: str) -> str:
    return 'SPACE' if key == SPACE_KEY else key.upper()


def format_hotkey(hotkey: Combination | Consecutive, platform: str | None = None) -> str:
    """Display string for a hotkey, e.g. ``Cmd + Shift + T`` or ``SPACE × 3``."""
    match hotkey:
        case Combination(modifiers=modifiers, key=key):
            labels = _MODIFIER_LABELS.get(platform or sys.platform, _FALLBACK_LABELS)
            parts = [labels[m] for m in ordered_modifiers(modifiers)]
            parts.append(_key_label(key))
            return ' + '.join(parts)
        case Consecutive(key=key, count=count):
            return f'{_key_label(key)} × {count}'
        case _:
            assert_never(hotkey)


def hotkey_matches(hotkey: Combination | Consecutive, modifiers: Iterable[ModifierKey], key: str) -> bool:
    """True if *hotkey* is a combination of exactly *modifiers* + *key* (key compared case-insensitively)."""
    match hotkey:
        case Combination():
            return hotkey.modifiers == frozenset(modifiers) and hotkey.key.lower() == normalize_key(key).lower()
        case Consecutive():
            return False
        case _:
            assert_never(hotkey)
