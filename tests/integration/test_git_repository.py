"""Integration tests running the tagger against real git repositories."""

from __future__ import annotations

import hashlib
import os
import shutil
import sys
from pathlib import Path

import pytest

git = pytest.importorskip("git")

from image_tagger.errors import (  # noqa: E402
    HeadResolutionError,
    RepositoryNotFound,
    WorktreeReadError,
)
from image_tagger.tagging import compute_tag  # noqa: E402
from image_tagger.vcs import StatusCode, open_repository  # noqa: E402

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git executable not available.")


def _digest(*parts: bytes) -> str:
    return hashlib.sha256(b"".join(parts)).hexdigest()[:16]


def _init_repo(path: Path) -> "git.Repo":
    repo = git.Repo.init(path)
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Image Tagger Tests")
        writer.set_value("user", "email", "tests@example.invalid")
    return repo


@pytest.fixture()
def repo(tmp_path: Path) -> "git.Repo":
    repo = _init_repo(tmp_path / "checkout")
    root = Path(repo.working_tree_dir)
    (root / "app.txt").write_bytes(b"hello\n")
    (root / "src").mkdir()
    (root / "src" / "main.go").write_bytes(b"package main\n")
    repo.index.add(["app.txt", "src/main.go"])
    repo.index.commit("initial commit")
    return repo


def _root(repo: "git.Repo") -> Path:
    return Path(repo.working_tree_dir)


def test_clean_untagged_repository(repo: "git.Repo") -> None:
    sha = repo.head.commit.hexsha
    assert compute_tag(_root(repo), "myapp") == f"myapp:{sha[:7]}"


def test_clean_tagged_repository(repo: "git.Repo") -> None:
    repo.create_tag("v1.2.3")
    assert compute_tag(_root(repo), "myapp") == "myapp:v1.2.3"


def test_annotated_tags_resolve_to_their_commit(repo: "git.Repo") -> None:
    repo.create_tag("release-1", message="first release")
    assert compute_tag(_root(repo), "myapp") == "myapp:release-1"


def test_tags_on_older_commits_are_ignored(repo: "git.Repo") -> None:
    repo.create_tag("v0.1.0")
    (_root(repo) / "app.txt").write_bytes(b"hello again\n")
    repo.index.add(["app.txt"])
    repo.index.commit("second commit")
    assert compute_tag(_root(repo), "myapp") == f"myapp:{repo.head.commit.hexsha[:7]}"


def test_repository_is_found_from_subdirectory(repo: "git.Repo") -> None:
    repo.create_tag("v2.0.0")
    assert compute_tag(_root(repo) / "src", "myapp") == "myapp:v2.0.0"


def test_modified_file_produces_dirty_tag(repo: "git.Repo") -> None:
    repo.create_tag("v1.2.3")
    (_root(repo) / "src" / "main.go").write_bytes(b"package main\n\nfunc main() {}\n")
    short = repo.head.commit.hexsha[:7]

    expected = _digest(b"M src/main.go", b"package main\n\nfunc main() {}\n")
    assert compute_tag(_root(repo), "myapp") == f"myapp:{short}-dirty-{expected}"


def test_untracked_and_deleted_files_are_hashed(repo: "git.Repo") -> None:
    (_root(repo) / "app.txt").unlink()
    (_root(repo) / "notes.md").write_bytes(b"todo\n")
    short = repo.head.commit.hexsha[:7]

    expected = _digest(b"D app.txt", b"? notes.md", b"todo\n")
    assert compute_tag(_root(repo), "myapp") == f"myapp:{short}-dirty-{expected}"


@pytest.mark.skipif(
    not sys.platform.startswith("linux") or sys.getfilesystemencoding().lower() != "utf-8",
    reason="Needs a filesystem that accepts arbitrary bytes in names.",
)
def test_non_utf8_file_name_is_hashed_by_its_bytes(repo: "git.Repo") -> None:
    with open(os.path.join(os.fsencode(_root(repo)), b"caf\xe9.txt"), "wb") as handle:
        handle.write(b"espresso\n")
    short = repo.head.commit.hexsha[:7]

    expected = _digest(b"? caf\xe9.txt", b"espresso\n")
    assert compute_tag(_root(repo), "myapp") == f"myapp:{short}-dirty-{expected}"


def test_reverting_a_change_restores_the_clean_tag(repo: "git.Repo") -> None:
    target = _root(repo) / "app.txt"
    clean = compute_tag(_root(repo), "myapp")
    target.write_bytes(b"changed\n")
    dirty = compute_tag(_root(repo), "myapp")
    assert dirty != clean
    assert compute_tag(_root(repo), "myapp") == dirty
    target.write_bytes(b"hello\n")
    assert compute_tag(_root(repo), "myapp") == clean


def test_staged_only_change_is_dirty(repo: "git.Repo") -> None:
    (_root(repo) / "app.txt").write_bytes(b"staged\n")
    repo.index.add(["app.txt"])

    status = open_repository(_root(repo)).status()
    assert status["app.txt"].staging is StatusCode.MODIFIED
    assert status["app.txt"].worktree is StatusCode.UNMODIFIED

    short = repo.head.commit.hexsha[:7]
    assert compute_tag(_root(repo), "myapp") == f"myapp:{short}-dirty-{_digest()}"


def test_missing_repository_raises(tmp_path: Path) -> None:
    plain = tmp_path / "plain"
    plain.mkdir()
    with pytest.raises(RepositoryNotFound):
        compute_tag(plain, "myapp")


def test_repository_without_commits_raises(tmp_path: Path) -> None:
    repo = _init_repo(tmp_path / "empty")
    with pytest.raises(HeadResolutionError):
        compute_tag(_root(repo), "myapp")


def test_bare_repository_raises(tmp_path: Path) -> None:
    bare = tmp_path / "bare.git"
    git.Repo.init(bare, bare=True)
    with pytest.raises(WorktreeReadError):
        open_repository(bare)
