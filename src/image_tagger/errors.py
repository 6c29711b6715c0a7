"""Exceptions raised while computing image tags from repository state."""

from __future__ import annotations


class TaggingError(RuntimeError):
    """Raised when a tag cannot be computed; wraps the failing stage's cause."""

    stage: str = "computing tag"

    def __init__(self, cause: BaseException | str, *, stage: str | None = None) -> None:
        if stage is not None:
            self.stage = stage
        super().__init__(f"{self.stage}: {cause}")
        if isinstance(cause, BaseException):
            self.__cause__ = cause


class RepositoryNotFound(TaggingError):
    stage = "opening git repo"


class WorktreeReadError(TaggingError):
    stage = "reading worktree"


class StatusReadError(TaggingError):
    stage = "reading status"


class HeadResolutionError(TaggingError):
    stage = "determining current git commit"


class TagEnumerationError(TaggingError):
    stage = "determining git tag"


class DiffReadError(TaggingError):
    stage = "reading diff"


__all__ = [
    "TaggingError",
    "RepositoryNotFound",
    "WorktreeReadError",
    "StatusReadError",
    "HeadResolutionError",
    "TagEnumerationError",
    "DiffReadError",
]
