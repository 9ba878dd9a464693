"""Configuration Pydantic models — pure schema, no infrastructure defaults."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from aityping.l1_entities.errors import (
    DuplicateLanguageError,
    EmptyFavoritesError,
    UnknownLanguageError,
)
from aityping.l1_entities.hotkey import Hotkey, Slot, validate_hotkey


class LLMConfig(BaseModel):
    base_url: str
    api_key: str = ''
    model: str
    temperature: float = Field(ge=0.0, le=2.0)
    top_p: float = Field(ge=0.0, le=1.0)
    system_prompt: str
    user_prompt_template: str  # supports {target_language} and {text}
    stream_mode: bool = True

    model_config = {'frozen': True}


class HotkeyConfig(BaseModel):
    selected_mode: Hotkey
    full_mode: Hotkey

    model_config = {'frozen': True}

    @model_validator(mode='after')
    def _selected_needs_modifier(self) -> HotkeyConfig:
        validate_hotkey(self.selected_mode, Slot.SELECTED)
        return self

    def for_slot(self, slot: Slot) -> Hotkey:
        return self.selected_mode if slot is Slot.SELECTED else self.full_mode

    def with_slot(self, slot: Slot, hotkey: Hotkey) -> HotkeyConfig:
        """Return a new HotkeyConfig with *slot* replaced, validated as a whole."""
        data = {'selected_mode': self.selected_mode, 'full_mode': self.full_mode, slot.value: hotkey}
        return HotkeyConfig.model_validate(data)


class Language(BaseModel):
    code: str = Field(min_length=1)
    name: str

    model_config = {'frozen': True}


class LanguageConfig(BaseModel):
    """Target language plus the ordered favorites list it must point into."""

    current_target: str
    favorite_languages: tuple[Language, ...] = ()

    model_config = {'frozen': True}

    @model_validator(mode='after')
    def _check_favorites(self) -> LanguageConfig:
        codes = self.codes()
        if len(set(codes)) != len(codes):
            raise DuplicateLanguageError('favorite_languages must be unique by code')
        if codes and self.current_target not in codes:
            raise UnknownLanguageError(f'current_target {self.current_target!r} is not a favorite language')
        return self

    def codes(self) -> list[str]:
        return [lang.code for lang in self.favorite_languages]

    def with_target(self, code: str) -> LanguageConfig:
        if code not in self.codes():
            raise UnknownLanguageError(f'{code!r} is not a favorite language')
        return LanguageConfig(current_target=code, favorite_languages=self.favorite_languages)

    def with_favorite_added(self, language: Language) -> LanguageConfig:
        """Append *language*. The first favorite added to an empty list becomes the target."""
        if language.code in self.codes():
            raise DuplicateLanguageError(f'{language.code!r} is already a favorite language')
        target = self.current_target if self.favorite_languages else language.code
        return LanguageConfig(current_target=target, favorite_languages=(*self.favorite_languages, language))

    def with_favorite_removed(self, code: str) -> LanguageConfig:
        """Remove *code*. Removing the current target moves it to the new first entry.

        The last favorite cannot be removed: there would be nothing left for
        current_target to point at.
        """
        if code not in self.codes():
            raise UnknownLanguageError(f'{code!r} is not a favorite language')
        remaining = tuple(lang for lang in self.favorite_languages if lang.code != code)
        if not remaining:
            raise EmptyFavoritesError('At least one favorite language is required')
        target = remaining[0].code if code == self.current_target else self.current_target
        return LanguageConfig(current_target=target, favorite_languages=remaining)


class AppConfig(BaseModel):
    llm: LLMConfig
    hotkey: HotkeyConfig
    language: LanguageConfig
    history_limit: int = Field(gt=0)

    model_config = {'frozen': True}
