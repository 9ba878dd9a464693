"""Raw key-down event entity, independent of any UI toolkit."""

from __future__ import annotations

from dataclasses import dataclass, field

from aityping.l1_entities.hotkey import ModifierKey

# Key names reported for the modifier keys themselves.
MODIFIER_KEY_NAMES: dict[str, ModifierKey] = {
    'Meta': ModifierKey.META,
    'OS': ModifierKey.META,
    'Super': ModifierKey.META,
    'Control': ModifierKey.CONTROL,
    'Alt': ModifierKey.ALT,
    'AltGraph': ModifierKey.ALT,
    'Shift': ModifierKey.SHIFT,
}


@dataclass(frozen=True)
class KeyEvent:
    """A key-down: the key pressed plus the modifiers held at that moment."""

    key: str
    modifiers: frozenset[ModifierKey] = field(default_factory=frozenset)

    @property
    def is_modifier(self) -> bool:
        return self.key in MODIFIER_KEY_NAMES
