"""Repository access used by the image taggers."""

from .base import FileStatus, Repository, StatusCode, TagRef, WorktreeStatus
from .gitpython import GitRepository, open_repository, parse_porcelain_status

__all__ = [
    "FileStatus",
    "Repository",
    "StatusCode",
    "TagRef",
    "WorktreeStatus",
    "GitRepository",
    "open_repository",
    "parse_porcelain_status",
]
