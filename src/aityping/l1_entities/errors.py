"""Domain error types."""


class HotkeyValidationError(ValueError):
    """Raised when a hotkey is not acceptable for the slot or edit requested."""


class MissingModifierError(HotkeyValidationError):
    """Raised when a selected-text hotkey combination has no modifier key."""

    def __init__(self, message: str = 'Selected-text hotkey needs at least one modifier key') -> None:
        super().__init__(message)


class RepeatCountOutOfRangeError(HotkeyValidationError):
    """Raised when a consecutive hotkey's repeat count leaves the allowed range."""


class NotConsecutiveError(HotkeyValidationError):
    """Raised when a repeat count edit targets a combination hotkey."""


class LanguageConfigError(ValueError):
    """Raised when a favorites edit would break the language configuration."""


class UnknownLanguageError(LanguageConfigError):
    """Raised when a language code is not among the favorites."""


class DuplicateLanguageError(LanguageConfigError):
    """Raised when adding a language code that is already a favorite."""


class EmptyFavoritesError(LanguageConfigError):
    """Raised when removing the last favorite language."""


class ConfigLoadError(Exception):
    """Raised by a config backend when the persisted configuration cannot be read."""


class PersistError(Exception):
    """Raised by a config backend when the configuration cannot be stored."""


class ConflictCheckError(Exception):
    """Raised when the conflict authority cannot answer."""
