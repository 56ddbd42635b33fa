"""Git repository helpers."""

from .repository import (
    GitError,
    GitRepository,
    NotGitRepositoryError,
    find_repository_root,
)

__all__ = [
    "GitError",
    "GitRepository",
    "NotGitRepositoryError",
    "find_repository_root",
]
