"""Git adapter used by the release workflow.

Usage:
    from relbranch.git import Repository

    repo = Repository(Path("/path/to/repo"))
    if repo.exists():
        print(repo.current_branch())
"""

from relbranch.git.repository import (
    GitError,
    GitStatus,
    Repository,
    StatusEntry,
)

__all__ = [
    "GitError",
    "GitStatus",
    "Repository",
    "StatusEntry",
]
