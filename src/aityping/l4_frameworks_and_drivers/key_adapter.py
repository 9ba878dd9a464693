"""Translate Textual key names into toolkit-independent KeyEvents."""

from __future__ import annotations

from aityping.l1_entities.hotkey import SPACE_KEY, ModifierKey
from aityping.l1_entities.key_event import KeyEvent

_TEXTUAL_MODIFIERS: dict[str, ModifierKey] = {
    'ctrl': ModifierKey.CONTROL,
    'control': ModifierKey.CONTROL,
    'alt': ModifierKey.ALT,
    'option': ModifierKey.ALT,
    'shift': ModifierKey.SHIFT,
    'meta': ModifierKey.META,
    'super': ModifierKey.META,
    'cmd': ModifierKey.META,
}

_NAMED_KEYS: dict[str, str] = {
    'space': SPACE_KEY,
    'enter': 'Enter',
    'tab': 'Tab',
    'escape': 'Escape',
    'backspace': 'Backspace',
    'delete': 'Delete',
    'up': 'ArrowUp',
    'down': 'ArrowDown',
    'left': 'ArrowLeft',
    'right': 'ArrowRight',
    'home': 'Home',
    'end': 'End',
    'pageup': 'PageUp',
    'pagedown': 'PageDown',
    'insert': 'Insert',
}


def key_event_from_textual(key: str, character: str | None = None) -> KeyEvent:
    """Build a KeyEvent from a Textual ``events.Key`` (``key`` like ``ctrl+shift+t``)."""
    *mod_names, name = key.split('+') if key != '+' else ['+']
    modifiers = frozenset(_TEXTUAL_MODIFIERS[m] for m in mod_names if m in _TEXTUAL_MODIFIERS)

    if name in _TEXTUAL_MODIFIERS:
        # A modifier pressed on its own (terminals with the kitty keyboard protocol).
        return KeyEvent(key=_TEXTUAL_MODIFIERS[name].value, modifiers=modifiers)
    if name in _NAMED_KEYS:
        return KeyEvent(key=_NAMED_KEYS[name], modifiers=modifiers)
    if len(name) == 1:
        if name.isalpha() and name.isupper():
            modifiers |= {ModifierKey.SHIFT}
        return KeyEvent(key=name, modifiers=modifiers)
    if name[0] == 'f' and name[1:].isdigit():
        return KeyEvent(key=name.upper(), modifiers=modifiers)
    if character is not None and len(character) == 1 and character.isprintable():
        return KeyEvent(key=character, modifiers=modifiers)
    return KeyEvent(key=name, modifiers=modifiers)
