"""Built-in configuration defaults — lives in L4, not domain."""

from __future__ import annotations

import copy

from aityping.l1_entities.config import AppConfig
from aityping.l3_interface_adapters.gateways.yaml_config_backend import deep_merge

APP_CONFIG_DEFAULTS: dict = {
    'llm': {
        'base_url': 'https://api.openai.com/v1',
        'api_key': '',
        'model': 'gpt-4o-mini',
        'temperature': 0.3,
        'top_p': 1.0,
        'system_prompt': 'You are a professional translator. Maintain the original formatting of the text.',
        'user_prompt_template': 'Translate the following text into {target_language}, keeping its formatting: {text}',
        'stream_mode': True,
    },
    'hotkey': {
        'selected_mode': {'type': 'Combination', 'modifiers': ['Meta'], 'key': 't'},
        'full_mode': {'type': 'Consecutive', 'key': ' ', 'count': 3},
    },
    'language': {
        'current_target': 'en-US',
        'favorite_languages': [
            {'code': 'en-US', 'name': 'English'},
            {'code': 'zh-CN', 'name': '简体中文'},
            {'code': 'ja-JP', 'name': '日本語'},
            {'code': 'ko-KR', 'name': '한국어'},
            {'code': 'fr-FR', 'name': 'Français'},
            {'code': 'es-ES', 'name': 'Español'},
        ],
    },
    'history_limit': 500,
}


def build_app_config(raw: dict) -> AppConfig:
    """Merge *raw* user overrides on top of defaults, then validate."""
    merged = copy.deepcopy(APP_CONFIG_DEFAULTS)
    deep_merge(merged, raw)
    return AppConfig.model_validate(merged)
