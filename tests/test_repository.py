"""Tests for git repository resolution."""

import pytest

from enforce_hooks.git.repository import (
    GitRepository,
    NotGitRepositoryError,
    find_repository_root,
)


def test_root_from_repository(temp_git_repo):
    assert find_repository_root(temp_git_repo) == temp_git_repo


def test_root_from_subdirectory(temp_git_repo):
    subdir = temp_git_repo / "a" / "b"
    subdir.mkdir(parents=True)

    assert GitRepository(subdir).root == temp_git_repo


def test_default_hooks_dir(temp_git_repo):
    repo = GitRepository(temp_git_repo)

    assert repo.hooks_dir() == temp_git_repo / ".git" / "hooks"


def test_custom_target_dir(temp_git_repo):
    repo = GitRepository(temp_git_repo)

    assert repo.hooks_dir(".githooks") == temp_git_repo / ".githooks"


def test_hooks_dir_follows_gitdir_file(tmp_path, temp_git_repo, monkeypatch):
    worktree = tmp_path / "worktree"
    worktree.mkdir()
    real_git_dir = temp_git_repo / ".git"
    (worktree / ".git").write_text(f"gitdir: {real_git_dir}\n")

    repo = GitRepository(temp_git_repo)
    monkeypatch.setattr(repo, "root", worktree)

    assert repo.hooks_dir() == real_git_dir / "hooks"


def test_not_a_repository(tmp_path, monkeypatch):
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    outside = tmp_path / "plain"
    outside.mkdir()

    with pytest.raises(NotGitRepositoryError):
        GitRepository(outside)


def test_missing_directory(tmp_path):
    with pytest.raises(NotGitRepositoryError):
        GitRepository(tmp_path / "missing")
