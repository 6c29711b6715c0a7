"""Read-only repository interface consumed by the taggers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, Dict, Iterable, Protocol


class StatusCode(str, Enum):
    """Single-character file status codes, as printed by ``git status --short``."""

    UNMODIFIED = " "
    UNTRACKED = "?"
    MODIFIED = "M"
    ADDED = "A"
    DELETED = "D"
    RENAMED = "R"
    COPIED = "C"
    UPDATED_BUT_UNMERGED = "U"

    @property
    def char(self) -> str:
        return self.value

    @classmethod
    def from_char(cls, value: str) -> "StatusCode":
        try:
            return cls(value)
        except ValueError as exc:
            raise ValueError(f"unknown status code {value!r}") from exc


@dataclass(frozen=True)
class FileStatus:
    """Status of one path: index vs HEAD (``staging``) and worktree vs index (``worktree``)."""

    staging: StatusCode = StatusCode.UNMODIFIED
    worktree: StatusCode = StatusCode.UNMODIFIED

    @property
    def is_unmodified(self) -> bool:
        return self.staging is StatusCode.UNMODIFIED and self.worktree is StatusCode.UNMODIFIED


class WorktreeStatus(Dict[str, FileStatus]):
    """Mapping of repository-relative paths to their :class:`FileStatus`."""

    def is_clean(self) -> bool:
        return all(entry.is_unmodified for entry in self.values())


@dataclass(frozen=True)
class TagRef:
    """A tag's short name and the commit it points at."""

    name: str
    commit: str


class Repository(Protocol):
    """Narrow read capability over a single working copy."""

    def head(self) -> str:
        """Return the full hex identifier of the checked-out commit."""
        ...

    def status(self) -> WorktreeStatus:
        """Return the working-tree status keyed by repository-relative path."""
        ...

    def tags(self) -> Iterable[TagRef]:
        """Yield every tag in the repository."""
        ...

    def open_file(self, path: str) -> BinaryIO:
        """Open ``path`` as currently present in the working tree."""
        ...

    def close(self) -> None:
        """Release handles and helper processes held by the repository."""
        ...


__all__ = ["StatusCode", "FileStatus", "WorktreeStatus", "TagRef", "Repository"]
