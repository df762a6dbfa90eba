"""
Selection of one base version out of all strategy candidates.

The winner is the candidate whose version, after its pending increment, is
the greatest. When two candidates resolve to the same version the one
produced first wins, so strategy order is observable.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from returns.maybe import Maybe, Nothing, Some

from gitsemver.git.refs import Commit

from .base_version import BaseVersion
from .version import SemanticVersion, VersionField


@dataclass(frozen=True)
class SelectedVersion:
    """The base version chosen for a calculation run."""

    base_version: BaseVersion
    semantic_version: SemanticVersion
    increment_applied: bool
    commits_since_source: int = 0

    @property
    def base_version_source(self) -> Optional[Commit]:
        return self.base_version.base_version_source

    @property
    def source(self) -> str:
        return self.base_version.source


def apply_increment(
    base_version: BaseVersion, increment: VersionField
) -> SelectedVersion:
    """Resolve a candidate's pending increment."""
    version = base_version.semantic_version
    if base_version.should_increment:
        incremented = version.increment(increment)
        return SelectedVersion(base_version, incremented, incremented != version)
    return SelectedVersion(base_version, version, False)


def select_base_version(
    candidates: Iterable[BaseVersion], increment: VersionField
) -> Maybe[SelectedVersion]:
    """
    Pick the candidate with the greatest post-increment version.

    Args:
        candidates: Candidates in strategy order
        increment: Increment unit for candidates that should increment

    Returns:
        Some(SelectedVersion), or Nothing when there are no candidates
    """
    best: Optional[SelectedVersion] = None
    for base_version in candidates:
        resolved = apply_increment(base_version, increment)
        # strictly greater: earlier candidates win ties
        if best is None or resolved.semantic_version > best.semantic_version:
            best = resolved

    if best is None:
        return Nothing
    return Some(best)
