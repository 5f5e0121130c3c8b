"""YAML configuration loader with environment variable overrides.

Configuration is layered, later layers winning:

  1. config/config.yaml  -- static defaults checked into the repo
  2. .env file           -- local developer overrides (not committed)
  3. Environment vars    -- set at deploy time

:func:`load_config` reads the YAML file, then deep-merges the
environment-backed :class:`Settings` values on top.
"""

from pathlib import Path

import yaml

from raven_extract.config.settings import Settings

DEFAULT_CONFIG: dict = {
    "extraction": {
        "max_concurrency": 1,
        "text_encoding": "utf-8",
    },
    "ocr": {
        "provider_priority": ["tesseract", "easyocr"],
        "min_confidence": 0.6,
    },
    "pdf": {
        "ocr_fallback": True,
        "ocr_dpi": 200,
    },
    "transcription": {
        "provider": "whisper_local",
    },
}


def load_config(path: str = "config/config.yaml", settings: Settings | None = None) -> dict:
    """Load YAML config and merge with environment-based Settings.

    Args:
        path: Path to the YAML configuration file.  A missing file means
              the built-in defaults are used.
        settings: Pre-built settings; a fresh ``Settings()`` is read otherwise.

    Returns:
        Fully resolved configuration dictionary.
    """
    config: dict = {}
    _deep_merge(config, DEFAULT_CONFIG)

    config_path = Path(path)
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}
        _deep_merge(config, yaml_config)

    settings = settings or Settings()
    env_overrides: dict = {
        "app": {
            "env": settings.app_env,
        },
        "logging": {
            "level": settings.log_level,
        },
        "transcription": {
            "available_providers": settings.get_available_transcription_providers(),
        },
    }
    # Only explicitly-set fields override YAML; Settings defaults must not
    # clobber values from config.yaml.
    if "transcription_provider" in settings.model_fields_set:
        env_overrides["transcription"]["provider"] = settings.transcription_provider
    if "extraction_max_concurrency" in settings.model_fields_set:
        env_overrides["extraction"] = {"max_concurrency": settings.extraction_max_concurrency}
    if "text_encoding" in settings.model_fields_set:
        env_overrides.setdefault("extraction", {})["text_encoding"] = settings.text_encoding

    _deep_merge(config, env_overrides)
    return config


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        elif isinstance(value, dict):
            base[key] = {}
            _deep_merge(base[key], value)
        else:
            base[key] = value
