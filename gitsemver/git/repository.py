"""
GitPython implementation of the repository store.

The store is a read-only snapshot for one version calculation. Reachability
sets are memoised per branch tip for the lifetime of the instance only.
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Set, Union

from git import Repo
from git.exc import InvalidGitRepositoryError, NoSuchPathError

from gitsemver.versioning.exceptions import RepositoryError

from .refs import Branch, Commit, Tag

if TYPE_CHECKING:
    from gitsemver.model.configuration import BranchConfig

logger = logging.getLogger(__name__)


def _to_commit(git_commit) -> Commit:
    return Commit(
        sha=git_commit.hexsha,
        message=git_commit.message,
        parents=tuple(parent.hexsha for parent in git_commit.parents),
    )


def open_repository(path: Union[str, Path]) -> Repo:
    """
    Open the git repository containing ``path``.

    Raises:
        RepositoryError: If there is no readable repository at or above path
    """
    try:
        return Repo(Path(path), search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError) as e:
        raise RepositoryError(str(path), "not a git repository") from e


class GitRepositoryStore:
    """
    Repository store backed by a GitPython ``Repo``.

    Args:
        path: Any directory inside the working tree
        target_branch: Calculate for this branch instead of the checked out one
    """

    def __init__(
        self, path: Union[str, Path] = ".", target_branch: Optional[str] = None
    ):
        self.path = Path(path)
        self.repo = open_repository(self.path)
        self.target_branch = target_branch
        self._reachable: Dict[str, Set[str]] = {}

        try:
            self._validate()
        except RepositoryError:
            self.close()
            raise

    def _validate(self):
        try:
            self.repo.head.commit
        except ValueError as e:
            raise RepositoryError(str(self.path), "repository has no commits") from e

        if self.target_branch and self.find_branch(self.target_branch) is None:
            raise RepositoryError(
                str(self.path), f"branch '{self.target_branch}' does not exist"
            )

    def close(self):
        """Stop the git helper processes GitPython keeps for this repository."""
        self.repo.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @property
    def root(self) -> Path:
        return Path(self.repo.working_tree_dir or self.repo.git_dir)

    @property
    def current_branch(self) -> Optional[Branch]:
        if self.target_branch:
            return self.find_branch(self.target_branch)
        if self.repo.head.is_detached:
            return None
        head = self.repo.active_branch
        return Branch(head.name, _to_commit(head.commit))

    @property
    def current_commit(self) -> Commit:
        if self.target_branch:
            branch = self.find_branch(self.target_branch)
            if branch is not None:
                return branch.tip
        return _to_commit(self.repo.head.commit)

    def _local_branches(self) -> List[Branch]:
        return [Branch(head.name, _to_commit(head.commit)) for head in self.repo.heads]

    def _remote_branches(self) -> List[Branch]:
        branches = []
        for remote in self.repo.remotes:
            for ref in remote.refs:
                if ref.remote_head == "HEAD":
                    continue
                branches.append(
                    Branch(ref.name, _to_commit(ref.commit), is_remote=True)
                )
        return branches

    def get_branches(self) -> List[Branch]:
        local = self._local_branches()
        local_names = {branch.name for branch in local}
        remote = [
            branch
            for branch in self._remote_branches()
            if branch.friendly_name not in local_names
        ]
        return local + remote

    def find_branch(self, name: str) -> Optional[Branch]:
        for branch in self._local_branches():
            if branch.name == name:
                return branch
        for branch in self._remote_branches():
            if name in (branch.name, branch.friendly_name):
                return branch
        return None

    def find_merge_base(self, branch: Branch, other: Branch) -> Optional[Commit]:
        bases = self.repo.merge_base(branch.tip.sha, other.tip.sha)
        if not bases:
            logger.debug(f"No merge base between '{branch.name}' and '{other.name}'")
            return None
        return _to_commit(bases[0])

    def get_release_branches(
        self, release_branch_configs: Iterable["BranchConfig"]
    ) -> List[Branch]:
        configs = list(release_branch_configs)
        return [
            branch
            for branch in self.get_branches()
            if any(config.matches(branch.friendly_name) for config in configs)
        ]

    def _reachable_from(self, tip: Commit) -> Set[str]:
        if tip.sha not in self._reachable:
            self._reachable[tip.sha] = {
                commit.hexsha for commit in self.repo.iter_commits(tip.sha)
            }
        return self._reachable[tip.sha]

    def get_tags_on_branch(self, branch: Branch) -> List[Tag]:
        reachable = self._reachable_from(branch.tip)
        tags = []
        for tag_ref in self.repo.tags:
            try:
                target = tag_ref.commit
            except ValueError:
                # tag points at a tree or blob
                logger.debug(f"Skipping tag '{tag_ref.name}': not a commit")
                continue
            if target.hexsha in reachable:
                tags.append(Tag(tag_ref.name, _to_commit(target)))
        return tags

    def get_merge_commits(self, branch: Branch) -> List[Commit]:
        return [
            _to_commit(commit)
            for commit in self.repo.iter_commits(branch.tip.sha, merges=True)
        ]

    def count_commits_since(self, base: Optional[Commit], head: Commit) -> int:
        rev_range = f"{base.sha}..{head.sha}" if base is not None else head.sha
        return int(self.repo.git.rev_list("--count", rev_range))
