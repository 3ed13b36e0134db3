"""Application defaults — lives in L4, not domain."""

from __future__ import annotations

import copy

from clip_scribe.l1_entities.config import AppConfig
from clip_scribe.l3_interface_adapters.gateways.yaml_config_loader import deep_merge

APP_CONFIG_DEFAULTS: dict = {
    'transcription': {
        'model': 'tiny',
        'language': 'english',
        'chunk_length_s': 30.0,
        'stride_length_s': 5.0,
    },
    'audio': {
        'max_duration_seconds': 120.0,
        'ffmpeg_timeout': 300.0,
    },
    'ui': {
        'error_reset_delay': 4.0,
        'auto_copy': True,
    },
}


def build_app_config(raw: dict) -> AppConfig:
    """Merge *raw* user overrides on top of defaults, then validate."""
    merged = copy.deepcopy(APP_CONFIG_DEFAULTS)
    deep_merge(merged, raw)
    return AppConfig.model_validate(merged)
