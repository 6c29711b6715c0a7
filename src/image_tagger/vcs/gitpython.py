"""GitPython-backed implementation of :class:`~image_tagger.vcs.base.Repository`."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO, Iterator, List

import git
from git.exc import BadName

from ..errors import (
    HeadResolutionError,
    RepositoryNotFound,
    StatusReadError,
    TagEnumerationError,
    WorktreeReadError,
)
from .base import FileStatus, StatusCode, TagRef, WorktreeStatus

logger = logging.getLogger(__name__)

# Type changes have no dedicated short-status code in the tagger; treat them as edits.
_PORCELAIN_ALIASES = {"T": StatusCode.MODIFIED.value}


def parse_porcelain_status(output: str) -> WorktreeStatus:
    """Parse ``git status --porcelain -z`` output into a :class:`WorktreeStatus`."""

    status = WorktreeStatus()
    records = _iter_records(output)
    for record in records:
        if len(record) < 4 or record[2] != " ":
            raise ValueError(f"malformed status record {record!r}")
        staging = _status_code(record[0])
        worktree = _status_code(record[1])
        status[record[3:]] = FileStatus(staging=staging, worktree=worktree)
        if StatusCode.RENAMED in (staging, worktree) or StatusCode.COPIED in (staging, worktree):
            # Renames and copies are followed by the origin path.
            next(records, None)
    return status


def _iter_records(output: str) -> Iterator[str]:
    for record in output.split("\0"):
        if record:
            yield record


def _status_code(char: str) -> StatusCode:
    return StatusCode.from_char(_PORCELAIN_ALIASES.get(char, char))


class GitRepository:
    """Read-only view of a git working copy."""

    def __init__(self, repo: git.Repo) -> None:
        if repo.bare or repo.working_tree_dir is None:
            repo.close()
            raise WorktreeReadError(f"repository at {repo.git_dir} has no working tree")
        self._repo = repo
        self.working_tree = Path(repo.working_tree_dir)

    def head(self) -> str:
        try:
            return self._repo.head.commit.hexsha
        except (ValueError, BadName, git.GitError) as exc:
            raise HeadResolutionError(exc) from exc

    def status(self) -> WorktreeStatus:
        try:
            output = self._repo.git.status("--porcelain", "-z", "--untracked-files=all")
            return parse_porcelain_status(output)
        except (ValueError, git.GitError) as exc:
            raise StatusReadError(exc) from exc

    def tags(self) -> List[TagRef]:
        refs: List[TagRef] = []
        try:
            for tag in self._repo.tags:
                try:
                    commit = tag.commit.hexsha
                except ValueError:
                    logger.debug("Skipping tag %s: does not point at a commit", tag.name)
                    continue
                refs.append(TagRef(name=tag.name, commit=commit))
        except (OSError, git.GitError) as exc:
            raise TagEnumerationError(exc) from exc
        return refs

    def open_file(self, path: str) -> BinaryIO:
        return (self.working_tree / path).open("rb")

    def close(self) -> None:
        self._repo.close()


def open_repository(working_dir: Path | str) -> GitRepository:
    """Open the repository containing ``working_dir``, searching parent directories."""

    try:
        repo = git.Repo(Path(working_dir), search_parent_directories=True)
    except (git.InvalidGitRepositoryError, git.NoSuchPathError) as exc:
        raise RepositoryNotFound(f"no git repository at or above {working_dir}") from exc
    logger.debug("Resolved %s to repository %s", working_dir, repo.working_tree_dir or repo.git_dir)
    return GitRepository(repo)


__all__ = ["GitRepository", "open_repository", "parse_porcelain_status"]
