"""Tag images by the git commit they were built from."""

from __future__ import annotations

import hashlib
import logging
import os
from pathlib import Path
from typing import Callable, Iterable, List, Mapping, Optional

from ..errors import (
    DiffReadError,
    HeadResolutionError,
    StatusReadError,
    TagEnumerationError,
    TaggingError,
)
from ..vcs.base import FileStatus, Repository, StatusCode, TagRef
from ..vcs.gitpython import open_repository
from .options import TagOptions, TagSelection

logger = logging.getLogger(__name__)

SHORT_HASH_LENGTH = 7
DIRTY_HASH_LENGTH = 16
_READ_CHUNK_SIZE = 64 * 1024

RepositoryFactory = Callable[[Path], Repository]


def changed_paths(status: Mapping[str, FileStatus]) -> List[str]:
    """Return paths with worktree changes in a stable order.

    Paths sort by their filesystem bytes, so names git reports undecoded
    (surrogate-escaped) keep byte-wise order. The order feeds the dirty
    digest and must not depend on how ``status`` happens to iterate.
    """

    changed = (path for path, entry in status.items() if entry.worktree is not StatusCode.UNMODIFIED)
    return sorted(changed, key=os.fsencode)


def dirty_hash(repo: Repository, status: Mapping[str, FileStatus]) -> str:
    """Digest changed paths, their status characters and their current contents."""

    digest = hashlib.sha256()
    for path in changed_paths(status):
        code = status[path].worktree
        digest.update(code.char.encode("ascii") + b" " + os.fsencode(path))
        if code is StatusCode.DELETED:
            logger.debug("Hashed deleted path %s", path)
            continue
        try:
            with repo.open_file(path) as handle:
                for chunk in iter(lambda: handle.read(_READ_CHUNK_SIZE), b""):
                    digest.update(chunk)
        except OSError as exc:
            raise DiffReadError(exc) from exc
        logger.debug("Hashed %s path %s", code.name.lower(), path)
    return digest.hexdigest()[:DIRTY_HASH_LENGTH]


def select_tag(tags: Iterable[TagRef], commit: str, selection: TagSelection) -> Optional[str]:
    """Pick the tag name to use for ``commit``, or ``None`` when no tag points at it."""

    candidates = [tag.name for tag in tags if tag.commit == commit]
    if not candidates:
        return None
    if len(candidates) > 1:
        logger.debug("Multiple tags point at %s: %s", commit[:SHORT_HASH_LENGTH], ", ".join(candidates))
    if selection is TagSelection.LAST_SEEN:
        return candidates[-1]
    return min(candidates)


class GitCommitTagger:
    """Compute ``image:tag`` references from the state of a working copy."""

    def __init__(self, repository_factory: Optional[RepositoryFactory] = None) -> None:
        self._open = repository_factory or open_repository

    def generate_fully_qualified_image_name(self, working_dir: Path | str, options: TagOptions) -> str:
        repo = self._open(Path(working_dir))
        try:
            return self._tag(repo, options)
        finally:
            repo.close()

    def _tag(self, repo: Repository, options: TagOptions) -> str:
        try:
            status = repo.status()
        except TaggingError:
            raise
        except OSError as exc:
            raise StatusReadError(exc) from exc
        logger.debug("Read status for %d paths", len(status))

        try:
            head = repo.head()
        except TaggingError:
            raise
        except (OSError, ValueError) as exc:
            raise HeadResolutionError(exc) from exc

        short_hash = head.lower()[:SHORT_HASH_LENGTH]

        if status.is_clean():
            try:
                tag = select_tag(repo.tags(), head, options.tag_selection)
            except TaggingError:
                raise
            except OSError as exc:
                raise TagEnumerationError(exc) from exc
            fqn = f"{options.image_name}:{tag or short_hash}"
            logger.info("Working tree is clean, tagging %s", fqn)
            return fqn

        # The working tree is dirty: suffix a digest of the modified files so
        # local iterations get distinct but reproducible tags.
        fqn = f"{options.image_name}:{short_hash}-dirty-{dirty_hash(repo, status)}"
        logger.info("Working tree is dirty (%d changed paths), tagging %s", len(changed_paths(status)), fqn)
        return fqn


def compute_tag(
    working_dir: Path | str,
    options: TagOptions | str,
    *,
    repository_factory: Optional[RepositoryFactory] = None,
) -> str:
    """Return the fully qualified image reference for ``working_dir``."""

    if isinstance(options, str):
        options = TagOptions(image_name=options)
    return GitCommitTagger(repository_factory).generate_fully_qualified_image_name(working_dir, options)


__all__ = [
    "GitCommitTagger",
    "RepositoryFactory",
    "changed_paths",
    "compute_tag",
    "dirty_hash",
    "select_tag",
    "DIRTY_HASH_LENGTH",
    "SHORT_HASH_LENGTH",
]
