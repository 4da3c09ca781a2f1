"""Git operations module.

Usage:
    from draftrel.git import Repository

    repo = Repository(Path("/path/to/repo"))
    commits = repo.commits_since("v1.2.3")
"""

from draftrel.git.repository import GitError, Repository, parse_log

__all__ = [
    "GitError",
    "Repository",
    "parse_log",
]
