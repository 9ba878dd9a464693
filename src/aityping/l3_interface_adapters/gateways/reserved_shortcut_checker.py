"""Gateway: reserved system shortcut checker — implements ConflictChecker port."""

from __future__ import annotations

import asyncio
import logging
import plistlib
import sys
from pathlib import Path

from aityping.l1_entities.errors import ConflictCheckError
from aityping.l1_entities.hotkey import Hotkey, ModifierKey, hotkey_matches

log = logging.getLogger('ait.conflicts')

M = ModifierKey

ReservedShortcut = tuple[str, frozenset[ModifierKey], str]

RESERVED_SHORTCUTS: dict[str, list[ReservedShortcut]] = {
    'darwin': [
        ('Spotlight', frozenset({M.META}), ' '),
        ('Finder search', frozenset({M.META, M.ALT}), ' '),
        ('Screenshot', frozenset({M.META, M.SHIFT}), '3'),
        ('Screenshot', frozenset({M.META, M.SHIFT}), '4'),
        ('Screenshot', frozenset({M.META, M.SHIFT}), '5'),
        ('App switcher', frozenset({M.META}), 'Tab'),
        ('Quit application', frozenset({M.META}), 'q'),
    ],
    'win32': [
        ('Show desktop', frozenset({M.META}), 'd'),
        ('Lock screen', frozenset({M.META}), 'l'),
        ('File Explorer', frozenset({M.META}), 'e'),
        ('Task switcher', frozenset({M.ALT}), 'Tab'),
        ('Close window', frozenset({M.ALT}), 'F4'),
    ],
    'linux': [
        ('Open terminal', frozenset({M.CONTROL, M.ALT}), 't'),
        ('Task switcher', frozenset({M.ALT}), 'Tab'),
        ('Log out', frozenset({M.CONTROL, M.ALT}), 'Delete'),
        ('Lock screen', frozenset({M.META}), 'l'),
    ],
}

SYMBOLIC_HOTKEYS_PLIST = Path.home() / 'Library' / 'Preferences' / 'com.apple.symbolichotkeys.plist'

# NSEvent modifier flag bits used in the symbolic hotkeys plist.
_PLIST_MODIFIER_BITS: dict[int, ModifierKey] = {
    1 << 17: M.SHIFT,
    1 << 18: M.CONTROL,
    1 << 19: M.ALT,
    1 << 20: M.META,
}

# macOS virtual key codes for the keys that show up in system shortcuts.
_MAC_KEYCODES: dict[int, str] = {
    0: 'a', 1: 's', 2: 'd', 3: 'f', 4: 'h', 5: 'g', 6: 'z', 7: 'x', 8: 'c', 9: 'v',
    11: 'b', 12: 'q', 13: 'w', 14: 'e', 15: 'r', 16: 'y', 17: 't',
    18: '1', 19: '2', 20: '3', 21: '4', 22: '6', 23: '5',
    36: 'Enter', 48: 'Tab', 49: ' ', 51: 'Backspace', 53: 'Escape',
}  # fmt: skip


def parse_symbolic_hotkeys(data: dict) -> list[ReservedShortcut]:
    """Extract the enabled shortcuts from a decoded symbolic hotkeys plist."""
    shortcuts: list[ReservedShortcut] = []
    entries = data.get('AppleSymbolicHotKeys') or {}
    for hotkey_id, entry in entries.items():
        if not isinstance(entry, dict) or not entry.get('enabled'):
            continue
        params = (entry.get('value') or {}).get('parameters') or []
        if len(params) < 3:
            continue
        keycode, flags = params[1], params[2]
        key = _MAC_KEYCODES.get(keycode, f'key_{keycode}')
        modifiers = frozenset(mod for bit, mod in _PLIST_MODIFIER_BITS.items() if flags & bit)
        shortcuts.append((f'System shortcut #{hotkey_id}', modifiers, key))
    return shortcuts


class ReservedShortcutChecker:
    """Reports built-in reserved shortcuts for the platform, plus the user's macOS ones."""

    def __init__(self, platform: str | None = None, plist_path: Path | None = None) -> None:
        self._platform = platform or sys.platform
        self._plist_path = plist_path or SYMBOLIC_HOTKEYS_PLIST

    async def check_conflicts(self, hotkey: Hotkey) -> list[str]:
        shortcuts = list(RESERVED_SHORTCUTS.get(self._platform, []))
        if self._platform == 'darwin':
            shortcuts.extend(await asyncio.to_thread(self._read_plist))

        conflicts: list[str] = []
        for name, modifiers, key in shortcuts:
            if hotkey_matches(hotkey, modifiers, key) and name not in conflicts:
                conflicts.append(name)
        return conflicts

    def _read_plist(self) -> list[ReservedShortcut]:
        if not self._plist_path.exists():
            return []
        try:
            with self._plist_path.open('rb') as f:
                data = plistlib.load(f)
        except (OSError, plistlib.InvalidFileException) as e:
            raise ConflictCheckError(f'Cannot read {self._plist_path}: {e}') from e
        shortcuts = parse_symbolic_hotkeys(data)
        log.debug('Read %d system shortcuts from %s', len(shortcuts), self._plist_path)
        return shortcuts
