"""Base versions embedded in release branch names."""

import logging
import re
from typing import Iterator, Optional, Pattern, Tuple

from returns.result import Success

from gitsemver.git.refs import Branch
from gitsemver.model.configuration import StrategyName

from ..base_version import BaseVersion
from ..branch_config import find_source_branch
from ..context import VersionContext
from ..version import SemanticVersion
from .base import VersionStrategy

logger = logging.getLogger(__name__)

_SEGMENT_SEPARATOR = re.compile(r"[/-]")


def find_version_in_branch_name(
    branch_name: str, tag_prefix: Pattern[str]
) -> Optional[Tuple[str, SemanticVersion]]:
    """
    Find the first ``/`` or ``-`` separated segment of a branch name that is a version.

    Returns:
        (matched segment, version), or None when no segment parses
    """
    for segment in _SEGMENT_SEPARATOR.split(branch_name):
        if not segment:
            continue
        parsed = SemanticVersion.try_parse(segment, tag_prefix)
        if isinstance(parsed, Success):
            return segment, parsed.unwrap()
    return None


class VersionInBranchNameVersionStrategy(VersionStrategy):
    """
    Version is extracted from the name of the branch.

    Only active on release branches. BaseVersionSource is the commit where the
    branch was created (when it can be found). Never increments; the rest of
    the branch name becomes the branch name override for the pre-release tag.
    """

    name = StrategyName.version_in_branch_name

    def is_enabled(self, context: VersionContext) -> bool:
        return context.effective.is_release_branch

    def get_versions(self, context: VersionContext) -> Iterator[BaseVersion]:
        return self.get_versions_for_branch(
            context, context.tag_prefix, context.current_branch
        )

    def get_versions_for_branch(
        self, context: VersionContext, tag_prefix: Pattern[str], branch: Branch
    ) -> Iterator[BaseVersion]:
        """
        Yield the version embedded in ``branch``'s name, if any.

        Args:
            context: Version context (configuration for source branch lookup)
            tag_prefix: Compiled tag prefix pattern
            branch: Branch to inspect, not necessarily the current one
        """
        base_version = self.version_from_branch_name(branch, tag_prefix)
        if base_version is None:
            return

        _, branch_config = context.configuration.find_branch_config(
            branch.friendly_name
        )
        source = find_source_branch(
            self.repository_store,
            context.configuration,
            branch,
            list(branch_config.source_branches or []),
        )
        if source is not None:
            base_version = base_version.anchored_at(source[1])
        logger.debug(f"Found {base_version}")
        yield base_version

    @staticmethod
    def version_from_branch_name(
        branch: Branch, tag_prefix: Pattern[str]
    ) -> Optional[BaseVersion]:
        """Unanchored candidate for the version in ``branch``'s name."""
        branch_name = branch.friendly_name
        found = find_version_in_branch_name(branch_name, tag_prefix)
        if found is None:
            logger.debug(f"No version in branch name '{branch_name}'")
            return None

        segment, version = found
        return BaseVersion(
            source="Version in branch name",
            should_increment=False,
            semantic_version=version,
            base_version_source=None,
            branch_name_override=re.sub(
                f"[-/]{re.escape(segment)}", "", branch_name, count=1
            ),
        )
