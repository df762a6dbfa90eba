"""Lightweight handles for commits, branches and tags.

The version engine only ever holds these handles. Walking history and
resolving ancestry is left to the repository store that produced them.
"""

import re
from dataclasses import dataclass, field
from typing import Tuple

_REMOTE_PREFIX = re.compile(r"^(refs/)?(remotes/)?[^/]+/")


@dataclass(frozen=True)
class Commit:
    """A commit, identified by its sha."""

    sha: str
    message: str = field(default="", compare=False)
    parents: Tuple[str, ...] = field(default=(), compare=False)

    @property
    def short_sha(self) -> str:
        return self.sha[:7]

    @property
    def is_merge(self) -> bool:
        return len(self.parents) > 1

    @property
    def summary(self) -> str:
        """First line of the commit message."""
        return self.message.strip().splitlines()[0] if self.message.strip() else ""


@dataclass(frozen=True)
class Branch:
    """A local or remote-tracking branch and the commit at its tip."""

    name: str
    tip: Commit
    is_remote: bool = False

    @property
    def friendly_name(self) -> str:
        """Name without the remote prefix ("origin/release/1.0" -> "release/1.0")."""
        if self.is_remote:
            return _REMOTE_PREFIX.sub("", self.name, count=1)
        return self.name


@dataclass(frozen=True)
class Tag:
    """A tag and the commit it points at (annotated tags are peeled)."""

    name: str
    commit: Commit


def trim_remote(branch_name: str) -> str:
    """Strip a leading ``origin/`` or ``refs/remotes/origin/`` prefix when present."""
    if branch_name.startswith("refs/remotes/") or branch_name.startswith("origin/"):
        return _REMOTE_PREFIX.sub("", branch_name, count=1)
    return branch_name
