"""aityping — hotkey capture and configuration core for the AITyping translator."""

__version__ = '0.1.0'
