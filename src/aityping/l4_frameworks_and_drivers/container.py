"""Dependency container — composition root for wiring all layers together."""

from __future__ import annotations

from pathlib import Path

from aityping.l2_use_cases.config_store import ConfigStore
from aityping.l2_use_cases.ports.config_backend import ConfigBackend
from aityping.l2_use_cases.ports.conflict_checker import ConflictChecker
from aityping.l3_interface_adapters.controllers.hotkey_settings_controller import HotkeySettingsController
from aityping.l3_interface_adapters.gateways.reserved_shortcut_checker import ReservedShortcutChecker
from aityping.l3_interface_adapters.gateways.yaml_config_backend import YamlConfigBackend
from aityping.l4_frameworks_and_drivers.infra_config import APP_CONFIG_DEFAULTS, build_app_config


class DependencyContainer:
    """Creates and wires all concrete instances. Easy to override for testing."""

    def __init__(
        self,
        config_path: Path | None = None,
        platform: str | None = None,
        backend: ConfigBackend | None = None,
        conflict_checker: ConflictChecker | None = None,
    ) -> None:
        self.backend: ConfigBackend = backend or YamlConfigBackend(config_path, defaults=APP_CONFIG_DEFAULTS)
        self.conflict_checker: ConflictChecker = conflict_checker or ReservedShortcutChecker(platform)
        self.store = ConfigStore(self.backend, default_config=build_app_config({}))
        self.controller = HotkeySettingsController(self.store, self.conflict_checker)
