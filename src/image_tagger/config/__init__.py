"""Configuration helpers for the image tagger."""

from .schemas import TaggerConfig, load_config, resolve_config

__all__ = ["TaggerConfig", "load_config", "resolve_config"]
