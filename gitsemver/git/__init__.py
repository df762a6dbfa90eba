"""
Git access for gitsemver.

``GitRepositoryStore`` is the GitPython-backed implementation of the
``RepositoryStore`` protocol consumed by the version strategies. The handles
in ``refs`` are what the rest of the package passes around.
"""

from .refs import Branch, Commit, Tag, trim_remote
from .repository import GitRepositoryStore, open_repository

__all__ = [
    "Branch",
    "Commit",
    "Tag",
    "trim_remote",
    "GitRepositoryStore",
    "open_repository",
]
