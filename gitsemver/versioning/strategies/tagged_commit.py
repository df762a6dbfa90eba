"""Base versions taken from tags reachable on a branch."""

import logging
from typing import Iterator, Optional

from returns.result import Failure, Success

from gitsemver.git.refs import Branch
from gitsemver.model.configuration import StrategyName

from ..base_version import BaseVersion
from ..context import VersionContext
from ..version import SemanticVersion
from .base import VersionStrategy

logger = logging.getLogger(__name__)


class TaggedCommitVersionStrategy(VersionStrategy):
    """
    Version is extracted from every valid tag reachable from the branch.

    BaseVersionSource is the tagged commit. Increments unless the tag is on
    the current commit. Tags that are not semantic versions are ignored.
    """

    name = StrategyName.tagged_commit

    def get_versions(self, context: VersionContext) -> Iterator[BaseVersion]:
        return self.get_tagged_versions(context, context.current_branch, None)

    def get_tagged_versions(
        self,
        context: VersionContext,
        branch: Branch,
        branch_name_override: Optional[str],
    ) -> Iterator[BaseVersion]:
        """
        Yield a candidate for every valid version tag reachable on ``branch``.

        Args:
            context: Version context (tag prefix and current commit)
            branch: Branch whose tags are scanned, not necessarily the current one
            branch_name_override: Passed through to each candidate
        """
        for tag in self.repository_store.get_tags_on_branch(branch):
            parsed = SemanticVersion.try_parse(tag.name, context.tag_prefix)

            if isinstance(parsed, Failure):
                logger.debug(f"Ignoring tag '{tag.name}': {parsed.failure()}")
                continue

            if isinstance(parsed, Success):
                base_version = BaseVersion(
                    source=f"Git tag '{tag.name}'",
                    should_increment=tag.commit != context.current_commit,
                    semantic_version=parsed.unwrap(),
                    base_version_source=tag.commit,
                    branch_name_override=branch_name_override,
                )
                logger.debug(f"Found {base_version}")
                yield base_version
