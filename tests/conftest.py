"""Shared test fixtures and protocol-conforming fakes."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from aityping.l1_entities.config import AppConfig
from aityping.l1_entities.errors import ConflictCheckError, PersistError
from aityping.l1_entities.hotkey import Hotkey
from aityping.l2_use_cases.config_store import ConfigStore
from aityping.l4_frameworks_and_drivers.infra_config import build_app_config

# --- Protocol-conforming Fakes ---


class FakeConfigBackend:
    """In-memory ConfigBackend for L2/L3 tests."""

    def __init__(self, config: AppConfig | None = None):
        self.stored = config
        self.enabled = True
        self.fail_get = False
        self.fail_save = ''
        self.fail_enabled = False
        self.save_delays: list[float] = []
        self.get_calls = 0
        self.save_calls: list[AppConfig] = []

    async def get_config(self) -> AppConfig:
        self.get_calls += 1
        if self.fail_get or self.stored is None:
            raise RuntimeError('backend unavailable')
        return self.stored

    async def save_config(self, config: AppConfig) -> None:
        self.save_calls.append(config)
        if self.save_delays:
            await asyncio.sleep(self.save_delays.pop(0))
        if self.fail_save:
            raise PersistError(self.fail_save)
        self.stored = config

    async def get_enabled(self) -> bool:
        if self.fail_enabled:
            raise RuntimeError('backend unavailable')
        return self.enabled

    async def set_enabled(self, enabled: bool) -> None:
        if self.fail_enabled:
            raise RuntimeError('backend unavailable')
        self.enabled = enabled


class FakeConflictChecker:
    """Fake conflict authority returning canned descriptors."""

    def __init__(self, conflicts: list[str] | None = None):
        self._conflicts = list(conflicts or [])
        self.fail = False
        self.delays: list[float] = []
        self.calls: list[Hotkey] = []

    async def check_conflicts(self, hotkey: Hotkey) -> list[str]:
        self.calls.append(hotkey)
        if self.delays:
            await asyncio.sleep(self.delays.pop(0))
        if self.fail:
            raise ConflictCheckError('authority unavailable')
        return list(self._conflicts)

    def set_conflicts(self, conflicts: list[str]) -> None:
        self._conflicts = list(conflicts)


# --- Standard Fixtures ---


@pytest.fixture
def default_config() -> AppConfig:
    return build_app_config({})


@pytest.fixture
def fake_backend(default_config: AppConfig) -> FakeConfigBackend:
    return FakeConfigBackend(default_config)


@pytest.fixture
def fake_checker() -> FakeConflictChecker:
    return FakeConflictChecker()


@pytest.fixture
def store(fake_backend: FakeConfigBackend, default_config: AppConfig) -> ConfigStore:
    return ConfigStore(fake_backend, default_config=default_config)


@pytest.fixture
def sample_config_yaml(tmp_path: Path) -> Path:
    content = """\
llm:
  base_url: "https://example.invalid/v1"
  api_key: ""
  model: "test-model"
  temperature: 0.5
  top_p: 0.9
  system_prompt: "Translate."
  user_prompt_template: "{text} -> {target_language}"
  stream_mode: false
hotkey:
  selected_mode:
    type: Combination
    modifiers: [Control, Shift]
    key: "k"
  full_mode:
    type: Consecutive
    key: " "
    count: 4
language:
  current_target: ja-JP
  favorite_languages:
    - {code: en-US, name: English}
    - {code: ja-JP, name: "日本語"}
history_limit: 200
"""
    p = tmp_path / 'config.yaml'
    p.write_text(content, encoding='utf-8')
    return p
