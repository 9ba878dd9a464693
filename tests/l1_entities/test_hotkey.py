"""Tests for hotkey entities — validation, formatting, matching."""

from __future__ import annotations

import pytest
from pydantic import TypeAdapter, ValidationError

from aityping.l1_entities.errors import MissingModifierError
from aityping.l1_entities.hotkey import (
    SPACE_KEY,
    Combination,
    Consecutive,
    Hotkey,
    ModifierKey,
    Slot,
    format_hotkey,
    hotkey_matches,
    validate_hotkey,
)

M = ModifierKey

SAMPLE_HOTKEYS = [
    Combination(modifiers={M.META}, key='t'),
    Combination(modifiers={M.CONTROL, M.SHIFT}, key='F5'),
    Combination(modifiers=set(), key='k'),
    Consecutive(key=SPACE_KEY, count=3),
    Consecutive(key='a', count=10),
]


class TestCombination:
    def test_single_char_key_lowercased(self):
        assert Combination(modifiers={M.META}, key='T').key == 't'

    def test_named_key_kept(self):
        assert Combination(modifiers={M.ALT}, key='Enter').key == 'Enter'

    def test_space_spellings_normalized(self):
        assert Combination(modifiers={M.META}, key='Space').key == SPACE_KEY

    def test_empty_key_rejected(self):
        with pytest.raises(ValidationError):
            Combination(modifiers={M.META}, key='')

    def test_modifiers_from_strings(self):
        hk = Combination.model_validate({'modifiers': ['Meta', 'Shift'], 'key': 't'})
        assert hk.modifiers == frozenset({M.META, M.SHIFT})

    def test_modifier_order_irrelevant_for_equality(self):
        a = Combination.model_validate({'modifiers': ['Shift', 'Meta'], 'key': 't'})
        b = Combination.model_validate({'modifiers': ['Meta', 'Shift'], 'key': 't'})
        assert a == b

    def test_dump_uses_canonical_modifier_order(self):
        hk = Combination(modifiers={M.SHIFT, M.CONTROL, M.META}, key='t')
        assert hk.model_dump(mode='json')['modifiers'] == ['Meta', 'Control', 'Shift']

    def test_frozen(self):
        hk = Combination(modifiers={M.META}, key='t')
        with pytest.raises(ValidationError):
            hk.key = 'x'  # type: ignore[misc]


class TestConsecutive:
    def test_space_kept_distinct(self):
        assert Consecutive(key=' ', count=3).key == ' '

    @pytest.mark.parametrize('count', [1, 11, 0, -3])
    def test_count_out_of_range(self, count):
        with pytest.raises(ValidationError):
            Consecutive(key='a', count=count)

    @pytest.mark.parametrize('count', [2, 10])
    def test_count_bounds_inclusive(self, count):
        assert Consecutive(key='a', count=count).count == count


class TestDiscriminatedUnion:
    def test_parses_by_type_tag(self):
        adapter = TypeAdapter(Hotkey)
        assert isinstance(adapter.validate_python({'type': 'Consecutive', 'key': ' ', 'count': 3}), Consecutive)
        assert isinstance(adapter.validate_python({'type': 'Combination', 'modifiers': ['Meta'], 'key': 't'}), Combination)

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            TypeAdapter(Hotkey).validate_python({'type': 'Chord', 'key': 't'})


class TestValidateHotkey:
    @pytest.mark.parametrize('hotkey', SAMPLE_HOTKEYS)
    def test_full_slot_never_fails(self, hotkey):
        validate_hotkey(hotkey, Slot.FULL)

    @pytest.mark.parametrize('hotkey', SAMPLE_HOTKEYS)
    def test_selected_slot_fails_only_for_bare_combination(self, hotkey):
        bare = isinstance(hotkey, Combination) and not hotkey.modifiers
        if bare:
            with pytest.raises(MissingModifierError):
                validate_hotkey(hotkey, Slot.SELECTED)
        else:
            validate_hotkey(hotkey, Slot.SELECTED)

    def test_consecutive_allowed_in_selected_slot(self):
        validate_hotkey(Consecutive(key='a', count=2), Slot.SELECTED)


class TestFormatHotkey:
    def test_mac_combination(self):
        hk = Combination(modifiers={M.SHIFT, M.META}, key='t')
        assert format_hotkey(hk, 'darwin') == 'Cmd + Shift + T'

    def test_windows_meta_label(self):
        assert format_hotkey(Combination(modifiers={M.META}, key='t'), 'win32') == 'Win + T'

    def test_other_platform_uses_super(self):
        assert format_hotkey(Combination(modifiers={M.META, M.ALT}, key='t'), 'linux') == 'Super + Alt + T'

    def test_alt_is_option_on_mac(self):
        assert format_hotkey(Combination(modifiers={M.ALT}, key='x'), 'darwin') == 'Option + X'

    def test_consecutive_space(self):
        assert format_hotkey(Consecutive(key=' ', count=3), 'darwin') == 'SPACE × 3'

    def test_consecutive_letter(self):
        assert format_hotkey(Consecutive(key='k', count=2), 'linux') == 'K × 2'

    @pytest.mark.parametrize('hotkey', SAMPLE_HOTKEYS)
    def test_deterministic_and_total(self, hotkey):
        first = format_hotkey(hotkey, 'darwin')
        assert first
        assert format_hotkey(hotkey, 'darwin') == first

    def test_defaults_to_running_platform(self):
        hk = Combination(modifiers={M.CONTROL}, key='k')
        assert format_hotkey(hk) == 'Ctrl + K'


class TestHotkeyMatches:
    def test_same_combination_case_insensitive(self):
        hk = Combination(modifiers={M.META, M.SHIFT}, key='t')
        assert hotkey_matches(hk, {M.SHIFT, M.META}, 'T')

    def test_different_modifiers(self):
        assert not hotkey_matches(Combination(modifiers={M.META}, key='t'), {M.CONTROL}, 't')

    def test_consecutive_never_matches(self):
        assert not hotkey_matches(Consecutive(key=' ', count=3), set(), ' ')
