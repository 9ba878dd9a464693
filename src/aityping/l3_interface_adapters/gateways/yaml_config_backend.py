"""Gateway: YAML file config backend — implements ConfigBackend port."""

from __future__ import annotations

import asyncio
import copy
import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from aityping.l1_entities.config import AppConfig
from aityping.l1_entities.errors import ConfigLoadError, PersistError
from aityping.l3_interface_adapters.gateways.paths import DEFAULT_CONFIG_PATH

log = logging.getLogger('ait.backend')


class YamlConfigBackend:
    """Stores the whole AppConfig as one YAML document.

    File I/O runs in a worker thread so the event loop is never blocked.
    When *defaults* is given, the document on disk is merged over it, so a
    partial file only has to name the values it changes.
    The enabled flag is process state and is not written to disk.
    """

    def __init__(
        self,
        config_path: Path | None = None,
        *,
        defaults: dict | None = None,
        enabled: bool = True,
    ) -> None:
        self._path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
        self._defaults = defaults
        self._enabled = enabled

    @property
    def config_path(self) -> Path:
        return self._path

    async def get_config(self) -> AppConfig:
        return await asyncio.to_thread(self._read)

    async def save_config(self, config: AppConfig) -> None:
        await asyncio.to_thread(self._write, config)

    async def get_enabled(self) -> bool:
        return self._enabled

    async def set_enabled(self, enabled: bool) -> None:
        log.info('Translator %s', 'enabled' if enabled else 'disabled')
        self._enabled = enabled

    def _read(self) -> AppConfig:
        if not self._path.exists():
            raise ConfigLoadError(f'Config file not found: {self._path}')
        try:
            data = yaml.safe_load(self._path.read_text(encoding='utf-8')) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigLoadError(f'Cannot read {self._path}: {e}') from e
        if not isinstance(data, dict):
            raise ConfigLoadError(f'Invalid config in {self._path}: expected a mapping')
        if self._defaults is not None:
            data = deep_merge(copy.deepcopy(self._defaults), data)
        try:
            config = AppConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigLoadError(f'Invalid config in {self._path}: {e}') from e
        log.debug('Config read from %s', self._path)
        return config

    def _write(self, config: AppConfig) -> None:
        content = yaml.safe_dump(config.model_dump(mode='json'), allow_unicode=True, sort_keys=False)
        tmp_path = self._path.with_name(self._path.name + '.tmp')
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(content, encoding='utf-8')
            os.replace(tmp_path, self._path)
        except OSError as e:
            if tmp_path.exists():
                tmp_path.unlink()
            raise PersistError(f'Cannot write {self._path}: {e}') from e
        log.info('Config saved to %s', self._path)


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (mutates base)."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            deep_merge(base[key], value)
        else:
            base[key] = value
    return base
