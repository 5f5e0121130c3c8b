"""Configuration: pydantic-settings environment values plus YAML defaults."""

from raven_extract.config.loader import load_config
from raven_extract.config.settings import Settings

__all__ = ["Settings", "load_config"]
