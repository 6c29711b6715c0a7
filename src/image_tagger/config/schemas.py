"""Configuration schema for the image tagger command line."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from ..tagging.options import TagOptions, TagSelection
from ..utils.env import prefixed_environ


@dataclass(slots=True)
class TaggerConfig:
    """Settings needed to tag an image from a working copy."""

    image_name: Optional[str] = None
    working_dir: Path = field(default_factory=lambda: Path("."))
    tag_selection: TagSelection = TagSelection.SMALLEST
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        self.working_dir = Path(self.working_dir)
        self.tag_selection = TagSelection(self.tag_selection)
        self.log_level = str(self.log_level).upper()

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "TaggerConfig":
        known = {item.name for item in fields(cls)}
        unknown = sorted(set(payload) - known)
        if unknown:
            raise ValueError(f"Unknown tagger config keys: {', '.join(unknown)}")
        return cls(**dict(payload))

    def merged(self, overrides: Mapping[str, Any]) -> "TaggerConfig":
        """Return a copy with every non-``None`` value from ``overrides`` applied."""

        updates: Dict[str, Any] = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **updates)

    def to_options(self) -> TagOptions:
        if not self.image_name:
            raise ValueError("An image name is required (--image, config file or IMAGE_TAGGER_IMAGE_NAME).")
        return TagOptions(image_name=self.image_name, tag_selection=self.tag_selection)


def load_config(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        try:
            payload = yaml.safe_load(handle)
        except yaml.YAMLError as exc:
            raise ValueError(f"Config file {path} is not valid YAML: {exc}") from exc
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValueError(f"Config file {path} must contain a mapping.")
    return payload


def resolve_config(
    *,
    config_path: Optional[Path] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> TaggerConfig:
    """Layer defaults, ``IMAGE_TAGGER_*`` variables, a YAML file and explicit overrides."""

    known = {item.name for item in fields(TaggerConfig)}
    env = {key: value for key, value in prefixed_environ().items() if key in known}
    config = TaggerConfig().merged(env)
    if config_path is not None:
        payload = load_config(config_path)
        TaggerConfig.from_mapping(payload)
        config = config.merged(payload)
    return config.merged(overrides or {})


__all__ = ["TaggerConfig", "load_config", "resolve_config"]
