"""Candidate versions proposed by the version strategies."""

from dataclasses import dataclass, replace
from typing import Optional

from gitsemver.git.refs import Commit

from .version import SemanticVersion


@dataclass(frozen=True)
class BaseVersion:
    """
    A candidate version together with where it came from.

    Attributes:
        source: Provenance shown in diagnostics ("Git tag 'v1.0.0'")
        should_increment: Whether commits after the anchor bump the version
        semantic_version: The proposed version
        base_version_source: Commit the candidate is anchored to, if known
        branch_name_override: Branch name to use for the pre-release tag
    """

    source: str
    should_increment: bool
    semantic_version: SemanticVersion
    base_version_source: Optional[Commit] = None
    branch_name_override: Optional[str] = None

    def with_source_prefix(self, prefix: str) -> "BaseVersion":
        return replace(self, source=f"{prefix}{self.source}")

    def anchored_at(self, commit: Optional[Commit]) -> "BaseVersion":
        return replace(self, base_version_source=commit)

    def incrementing(self, should_increment: bool = True) -> "BaseVersion":
        return replace(self, should_increment=should_increment)

    def without_branch_name_override(self) -> "BaseVersion":
        return replace(self, branch_name_override=None)

    def __str__(self) -> str:
        anchor = (
            self.base_version_source.short_sha
            if self.base_version_source is not None
            else "external"
        )
        return (
            f"{self.source}: {self.semantic_version} "
            f"with commit source '{anchor}'"
            f"{'' if self.should_increment else ' (no increment)'}"
        )
