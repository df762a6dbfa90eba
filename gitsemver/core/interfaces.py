"""Protocol interfaces for the repository store.

The version engine depends on this protocol only, so strategies can be
exercised against any store (GitPython-backed or in memory).
"""

from typing import TYPE_CHECKING, Iterable, List, Optional, Protocol

from gitsemver.git.refs import Branch, Commit, Tag

if TYPE_CHECKING:
    from gitsemver.model.configuration import BranchConfig


class RepositoryStore(Protocol):
    """Read-only view of a git repository for one version calculation."""

    @property
    def current_branch(self) -> Optional[Branch]:
        """Checked out branch, or None on a detached HEAD."""
        ...

    @property
    def current_commit(self) -> Commit:
        """Commit at HEAD."""
        ...

    def find_branch(self, name: str) -> Optional[Branch]:
        """Branch with the given friendly name, if any."""
        ...

    def get_branches(self) -> List[Branch]:
        """All local branches plus remote branches without a local counterpart."""
        ...

    def find_merge_base(self, branch: Branch, other: Branch) -> Optional[Commit]:
        """Most recent common ancestor of two branches."""
        ...

    def get_release_branches(
        self, release_branch_configs: Iterable["BranchConfig"]
    ) -> List[Branch]:
        """Branches whose name matches any of the release branch configurations."""
        ...

    def get_tags_on_branch(self, branch: Branch) -> List[Tag]:
        """Tags whose commit is reachable from the branch tip."""
        ...

    def get_merge_commits(self, branch: Branch) -> List[Commit]:
        """Merge commits reachable from the branch tip, newest first."""
        ...

    def count_commits_since(self, base: Optional[Commit], head: Commit) -> int:
        """Commits reachable from head but not from base (all when base is None)."""
        ...
