"""Image taggers and their options."""

from .git_commit import GitCommitTagger, changed_paths, compute_tag, dirty_hash, select_tag
from .options import TagOptions, TagSelection
from .reference import is_valid_tag

__all__ = [
    "GitCommitTagger",
    "TagOptions",
    "TagSelection",
    "changed_paths",
    "compute_tag",
    "dirty_hash",
    "is_valid_tag",
    "select_tag",
]
