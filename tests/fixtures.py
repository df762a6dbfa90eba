"""In-memory repository store for strategy and engine tests."""

from typing import Dict, Iterable, List, Optional, Set

from gitsemver.git.refs import Branch, Commit, Tag
from gitsemver.model.configuration import BranchConfig


class InMemoryRepositoryStore:
    """
    Small commit graph built step by step in a test.

    Shas are derived from a counter, so a higher sha index means a younger
    commit. The merge base of two branches is the youngest common ancestor.
    """

    def __init__(self, initial_branch: str = "main"):
        self._commits: Dict[str, Commit] = {}
        self._order: Dict[str, int] = {}
        self._branches: Dict[str, str] = {}
        self._remote: Set[str] = set()
        self._tags: List[Tag] = []
        self._head: Optional[str] = initial_branch
        self._detached: Optional[str] = None

        self._branches[initial_branch] = self._new_commit("Initial commit", ()).sha

    def _new_commit(self, message: str, parents: Iterable[str]) -> Commit:
        index = len(self._commits) + 1
        commit = Commit(sha=f"{index:040x}", message=message, parents=tuple(parents))
        self._commits[commit.sha] = commit
        self._order[commit.sha] = index
        return commit

    # building the graph

    def commit(self, branch: Optional[str] = None, message: str = "Change") -> Commit:
        branch = branch or self._head
        commit = self._new_commit(message, (self._branches[branch],))
        self._branches[branch] = commit.sha
        return commit

    def commits(self, count: int, branch: Optional[str] = None) -> List[Commit]:
        return [self.commit(branch, f"Change {n}") for n in range(count)]

    def create_branch(
        self, name: str, source: Optional[str] = None, remote: bool = False
    ) -> Branch:
        self._branches[name] = self._branches[source or self._head]
        if remote:
            self._remote.add(name)
        return self.find_branch(name)

    def merge(
        self, source: str, target: Optional[str] = None, message: Optional[str] = None
    ) -> Commit:
        target = target or self._head
        message = message or f"Merge branch '{source}' into {target}"
        commit = self._new_commit(
            message, (self._branches[target], self._branches[source])
        )
        self._branches[target] = commit.sha
        return commit

    def tag(self, name: str, commit: Optional[Commit] = None) -> Tag:
        commit = commit or self.tip(self._head)
        tag = Tag(name, commit)
        self._tags.append(tag)
        return tag

    def checkout(self, name: str):
        self._head = name
        self._detached = None

    def detach(self, commit: Optional[Commit] = None):
        self._detached = (commit or self.current_commit).sha
        self._head = None

    def tip(self, branch: str) -> Commit:
        return self._commits[self._branches[branch]]

    def _branch(self, name: str) -> Branch:
        return Branch(name, self.tip(name), is_remote=name in self._remote)

    def _ancestors(self, sha: str) -> Set[str]:
        seen: Set[str] = set()
        pending = [sha]
        while pending:
            current = pending.pop()
            if current in seen:
                continue
            seen.add(current)
            pending.extend(self._commits[current].parents)
        return seen

    # RepositoryStore

    @property
    def current_branch(self) -> Optional[Branch]:
        return self._branch(self._head) if self._head else None

    @property
    def current_commit(self) -> Commit:
        if self._detached:
            return self._commits[self._detached]
        return self.tip(self._head)

    def find_branch(self, name: str) -> Optional[Branch]:
        for branch in self.get_branches():
            if name in (branch.name, branch.friendly_name):
                return branch
        return None

    def get_branches(self) -> List[Branch]:
        return [self._branch(name) for name in self._branches]

    def find_merge_base(self, branch: Branch, other: Branch) -> Optional[Commit]:
        common = self._ancestors(branch.tip.sha) & self._ancestors(other.tip.sha)
        if not common:
            return None
        return self._commits[max(common, key=self._order.__getitem__)]

    def get_release_branches(
        self, release_branch_configs: Iterable[BranchConfig]
    ) -> List[Branch]:
        configs = list(release_branch_configs)
        return [
            branch
            for branch in self.get_branches()
            if any(config.matches(branch.friendly_name) for config in configs)
        ]

    def get_tags_on_branch(self, branch: Branch) -> List[Tag]:
        reachable = self._ancestors(branch.tip.sha)
        return [tag for tag in self._tags if tag.commit.sha in reachable]

    def get_merge_commits(self, branch: Branch) -> List[Commit]:
        merges = [
            self._commits[sha]
            for sha in self._ancestors(branch.tip.sha)
            if self._commits[sha].is_merge
        ]
        return sorted(merges, key=lambda c: self._order[c.sha], reverse=True)

    def count_commits_since(self, base: Optional[Commit], head: Commit) -> int:
        reachable = self._ancestors(head.sha)
        if base is not None:
            reachable -= self._ancestors(base.sha)
        return len(reachable)
