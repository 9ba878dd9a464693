"""Tests for YAML config backend gateway."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from aityping.l1_entities.config import AppConfig
from aityping.l1_entities.errors import ConfigLoadError, PersistError
from aityping.l1_entities.hotkey import Combination, Consecutive, ModifierKey, Slot
from aityping.l2_use_cases.config_store import ConfigStore
from aityping.l3_interface_adapters.gateways.yaml_config_backend import YamlConfigBackend
from aityping.l4_frameworks_and_drivers.infra_config import APP_CONFIG_DEFAULTS


class TestGetConfig:
    @pytest.mark.asyncio
    async def test_reads_document(self, sample_config_yaml: Path):
        cfg = await YamlConfigBackend(sample_config_yaml).get_config()
        assert cfg.hotkey.selected_mode == Combination(modifiers={ModifierKey.CONTROL, ModifierKey.SHIFT}, key='k')
        assert cfg.hotkey.full_mode == Consecutive(key=' ', count=4)
        assert cfg.language.current_target == 'ja-JP'
        assert cfg.history_limit == 200

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigLoadError):
            await YamlConfigBackend(tmp_path / 'nope.yaml').get_config()

    @pytest.mark.asyncio
    async def test_invalid_yaml(self, tmp_path: Path):
        p = tmp_path / 'bad.yaml'
        p.write_text('llm: [unclosed', encoding='utf-8')
        with pytest.raises(ConfigLoadError):
            await YamlConfigBackend(p).get_config()

    @pytest.mark.asyncio
    async def test_partial_document_rejected(self, tmp_path: Path):
        p = tmp_path / 'partial.yaml'
        p.write_text('history_limit: 10\n', encoding='utf-8')
        with pytest.raises(ConfigLoadError):
            await YamlConfigBackend(p).get_config()

    @pytest.mark.asyncio
    async def test_partial_document_inherits_defaults(self, tmp_path: Path):
        p = tmp_path / 'partial.yaml'
        p.write_text('history_limit: 10\nllm:\n  model: local-model\n', encoding='utf-8')
        cfg = await YamlConfigBackend(p, defaults=APP_CONFIG_DEFAULTS).get_config()
        assert cfg.history_limit == 10
        assert cfg.llm.model == 'local-model'
        assert cfg.llm.temperature == 0.3
        assert cfg.hotkey.full_mode == Consecutive(key=' ', count=3)
        assert APP_CONFIG_DEFAULTS['history_limit'] == 500

    @pytest.mark.asyncio
    async def test_non_mapping_document(self, tmp_path: Path):
        p = tmp_path / 'list.yaml'
        p.write_text('- 1\n- 2\n', encoding='utf-8')
        with pytest.raises(ConfigLoadError):
            await YamlConfigBackend(p, defaults=APP_CONFIG_DEFAULTS).get_config()

    @pytest.mark.asyncio
    async def test_bare_selected_hotkey_rejected(self, sample_config_yaml: Path):
        data = yaml.safe_load(sample_config_yaml.read_text(encoding='utf-8'))
        data['hotkey']['selected_mode']['modifiers'] = []
        sample_config_yaml.write_text(yaml.safe_dump(data), encoding='utf-8')
        with pytest.raises(ConfigLoadError):
            await YamlConfigBackend(sample_config_yaml).get_config()


class TestSaveConfig:
    @pytest.mark.asyncio
    async def test_round_trip(self, tmp_path: Path, default_config: AppConfig):
        backend = YamlConfigBackend(tmp_path / 'sub' / 'config.yaml')
        candidate = default_config.model_copy(
            update={'hotkey': default_config.hotkey.with_slot(Slot.FULL, Consecutive(key=' ', count=5))}
        )
        await backend.save_config(candidate)
        assert await backend.get_config() == candidate

    @pytest.mark.asyncio
    async def test_document_shape(self, tmp_path: Path, default_config: AppConfig):
        path = tmp_path / 'config.yaml'
        await YamlConfigBackend(path).save_config(default_config)
        data = yaml.safe_load(path.read_text(encoding='utf-8'))
        assert data['hotkey']['selected_mode'] == {'type': 'Combination', 'modifiers': ['Meta'], 'key': 't'}
        assert data['hotkey']['full_mode'] == {'type': 'Consecutive', 'key': ' ', 'count': 3}
        assert not (tmp_path / 'config.yaml.tmp').exists()

    @pytest.mark.asyncio
    async def test_failed_replace_removes_temp_file(
        self, tmp_path: Path, default_config: AppConfig, monkeypatch: pytest.MonkeyPatch
    ):
        def fail_replace(src, dst):
            raise OSError('disk full')

        monkeypatch.setattr('aityping.l3_interface_adapters.gateways.yaml_config_backend.os.replace', fail_replace)
        with pytest.raises(PersistError):
            await YamlConfigBackend(tmp_path / 'config.yaml').save_config(default_config)
        assert not (tmp_path / 'config.yaml.tmp').exists()
        assert not (tmp_path / 'config.yaml').exists()

    @pytest.mark.asyncio
    async def test_unwritable_target_raises_persist_error(self, tmp_path: Path, default_config: AppConfig):
        blocker = tmp_path / 'file'
        blocker.write_text('x', encoding='utf-8')
        with pytest.raises(PersistError):
            await YamlConfigBackend(blocker / 'config.yaml').save_config(default_config)

    @pytest.mark.asyncio
    async def test_store_round_trip_through_file(self, tmp_path: Path, default_config: AppConfig):
        backend = YamlConfigBackend(tmp_path / 'config.yaml')
        store = ConfigStore(backend, default_config=default_config)
        loaded = await store.load()
        assert loaded == default_config

        edited = store.update_local(language=loaded.language.with_target('fr-FR'))
        result = await store.save(edited)

        assert result.ok
        fresh = ConfigStore(YamlConfigBackend(tmp_path / 'config.yaml'), default_config=default_config)
        assert await fresh.load() == edited


class TestEnabledFlag:
    @pytest.mark.asyncio
    async def test_in_memory_flag(self, tmp_path: Path):
        backend = YamlConfigBackend(tmp_path / 'config.yaml')
        assert await backend.get_enabled() is True
        await backend.set_enabled(False)
        assert await backend.get_enabled() is False
        assert not (tmp_path / 'config.yaml').exists()
