"""Shared path constants for the persisted configuration and logs."""

from __future__ import annotations

from platformdirs import user_config_path

CONFIG_DIR = user_config_path('aityping')
DEFAULT_CONFIG_PATH = CONFIG_DIR / 'config.yaml'
LOG_DIR = CONFIG_DIR / 'logs'
