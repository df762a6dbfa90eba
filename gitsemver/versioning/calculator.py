"""
Next version calculation.

``NextVersionCalculator`` is the caller of the strategy engine: it builds the
context, handles the no-base-version outcome through the configured fallback,
and turns the selected base version into the version variables for output.
"""

import logging
import re
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from returns.maybe import Some

from gitsemver.core.interfaces import RepositoryStore
from gitsemver.model.configuration import BRANCH_NAME_PLACEHOLDER, Configuration

from .base_version import BaseVersion
from .context import VersionContext, create_context
from .engine import VersionStrategyEngine
from .exceptions import NoBaseVersionError
from .selection import SelectedVersion
from .version import SemanticVersion

logger = logging.getLogger(__name__)

FALLBACK_SOURCE = "Fallback base version"


def sanitize_prerelease(text: str) -> str:
    """Replace every run of characters outside ``[0-9A-Za-z]`` with a dot."""
    return re.sub(r"[^0-9A-Za-z]+", ".", text).strip(".")


@dataclass(frozen=True)
class VersionVariables:
    """Calculated version and the facts it was derived from."""

    major: int
    minor: int
    patch: int
    pre_release_tag: Optional[str]
    commits_since_version_source: int
    version_source_sha: Optional[str]
    branch_name: str
    sha: str
    source: str
    increment_applied: bool

    @property
    def major_minor_patch(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    @property
    def sem_ver(self) -> str:
        if self.pre_release_tag:
            return f"{self.major_minor_patch}-{self.pre_release_tag}"
        return self.major_minor_patch

    @property
    def full_sem_ver(self) -> str:
        if self.commits_since_version_source > 0:
            return f"{self.sem_ver}+{self.commits_since_version_source}"
        return self.sem_ver

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["major_minor_patch"] = self.major_minor_patch
        data["sem_ver"] = self.sem_ver
        data["full_sem_ver"] = self.full_sem_ver
        return data


class NextVersionCalculator:
    """
    Calculate the version of the current (or a given) branch.

    Args:
        repository_store: Repository snapshot
        configuration: Loaded configuration
        engine: Strategy engine, built from the registry when omitted
    """

    def __init__(
        self,
        repository_store: RepositoryStore,
        configuration: Configuration,
        engine: Optional[VersionStrategyEngine] = None,
    ):
        self.repository_store = repository_store
        self.configuration = configuration
        self.engine = engine or VersionStrategyEngine(repository_store)

    def create_context(self, target_branch: Optional[str] = None) -> VersionContext:
        return create_context(self.repository_store, self.configuration, target_branch)

    def calculate(self, target_branch: Optional[str] = None) -> VersionVariables:
        """
        Calculate the version variables.

        Raises:
            ConfigurationError: If the context cannot be built
            NoBaseVersionError: If no strategy found a base version and no
                fallback-version is configured
        """
        context = self.create_context(target_branch)
        result = self.engine.calculate(context)

        if isinstance(result, Some):
            selected = result.unwrap()
        else:
            selected = self._fallback(context)

        version = self._with_prerelease(context, selected)
        return VersionVariables(
            major=version.major,
            minor=version.minor,
            patch=version.patch,
            pre_release_tag=version.prerelease,
            commits_since_version_source=selected.commits_since_source,
            version_source_sha=(
                selected.base_version_source.sha
                if selected.base_version_source is not None
                else None
            ),
            branch_name=context.current_branch.friendly_name,
            sha=context.current_commit.sha,
            source=selected.source,
            increment_applied=selected.increment_applied,
        )

    def _fallback(self, context: VersionContext) -> SelectedVersion:
        fallback = self.configuration.get_fallback_version()
        if fallback is None:
            raise NoBaseVersionError(context.current_branch.friendly_name)

        logger.warning(
            f"No base version found for '{context.current_branch.friendly_name}', "
            f"using fallback version {fallback}"
        )
        commits = self.repository_store.count_commits_since(
            None, context.current_commit
        )
        return SelectedVersion(
            base_version=BaseVersion(FALLBACK_SOURCE, False, fallback),
            semantic_version=fallback,
            increment_applied=False,
            commits_since_source=commits,
        )

    def _with_prerelease(
        self, context: VersionContext, selected: SelectedVersion
    ) -> SemanticVersion:
        version = selected.semantic_version

        on_tagged_commit = (
            context.current_commit_tagged
            and selected.base_version_source == context.current_commit
            and not selected.increment_applied
        )
        if on_tagged_commit:
            return version

        tag = context.effective.tag
        if BRANCH_NAME_PLACEHOLDER in tag:
            branch_name = (
                selected.base_version.branch_name_override
                or context.current_branch.friendly_name
            )
            tag = tag.replace(BRANCH_NAME_PLACEHOLDER, branch_name)
        tag = sanitize_prerelease(tag)

        if not tag or version.prerelease_name == tag:
            return version
        return version.with_prerelease(tag)
