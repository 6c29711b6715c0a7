"""Inputs shared by the image taggers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TagSelection(str, Enum):
    """How to choose between several tags pointing at HEAD."""

    SMALLEST = "smallest"
    LAST_SEEN = "last_seen"


@dataclass(frozen=True)
class TagOptions:
    """Immutable tagging inputs."""

    image_name: str
    tag_selection: TagSelection = TagSelection.SMALLEST

    def __post_init__(self) -> None:
        if not isinstance(self.image_name, str) or not self.image_name.strip():
            raise ValueError("image_name must be a non-empty string.")
        object.__setattr__(self, "tag_selection", TagSelection(self.tag_selection))


__all__ = ["TagOptions", "TagSelection"]
