"""Base versions for branches that track release branches (develop)."""

import logging
from itertools import chain
from typing import Iterator, Optional

from gitsemver.git.refs import Branch
from gitsemver.model.configuration import StrategyName

from ..base_version import BaseVersion
from ..context import VersionContext
from .base import VersionStrategy
from .tagged_commit import TaggedCommitVersionStrategy
from .version_in_branch_name import VersionInBranchNameVersionStrategy

logger = logging.getLogger(__name__)

RELEASE_BRANCH_SOURCE_PREFIX = "Release branch exists -> "


class TrackReleaseBranchesVersionStrategy(VersionStrategy):
    """
    Active only when the branch is configured with ``tracks-release-branches``.

    Two sets of candidates are merged without deduplication:

    * the version in the name of every release branch that has commits of its
      own. BaseVersionSource is the commit the release branch was created
      from, and the candidate always increments.
    * every valid tag on the main branch, as the tagged commit strategy
      reports them for that branch.
    """

    name = StrategyName.track_release_branches

    def __init__(self, repository_store):
        super().__init__(repository_store)
        self.release_version_strategy = VersionInBranchNameVersionStrategy(
            repository_store
        )
        self.tagged_commit_strategy = TaggedCommitVersionStrategy(repository_store)

    def get_versions(self, context: VersionContext) -> Iterator[BaseVersion]:
        if not context.effective.tracks_release_branches:
            return iter(())
        return chain(
            self._release_branch_versions(context), self._main_tag_versions(context)
        )

    def _find_main_branch(self, context: VersionContext) -> Optional[Branch]:
        configuration = context.configuration
        main = self.repository_store.find_branch(configuration.main_branch_key)
        if main is not None:
            return main

        main_config = configuration.get_main_branch_config()
        if main_config is None:
            return None
        for branch in self.repository_store.get_branches():
            if main_config.matches(branch.friendly_name):
                return branch
        return None

    def _main_tag_versions(self, context: VersionContext) -> Iterator[BaseVersion]:
        main = self._find_main_branch(context)
        if main is None:
            logger.debug("No main branch found, skipping main branch tags")
            return iter(())
        return self.tagged_commit_strategy.get_tagged_versions(context, main, None)

    def _release_branch_versions(
        self, context: VersionContext
    ) -> Iterator[BaseVersion]:
        release_configs = context.configuration.get_release_branch_configs()
        if not release_configs:
            return

        for release_branch in self.repository_store.get_release_branches(
            release_configs
        ):
            yield from self._release_version(context, release_branch)

    def _release_version(
        self, context: VersionContext, release_branch: Branch
    ) -> Iterator[BaseVersion]:
        # commit the release branch was created from
        merge_base = self.repository_store.find_merge_base(
            release_branch, context.current_branch
        )
        if merge_base == context.current_commit:
            logger.debug(
                f"Ignoring release branch '{release_branch.friendly_name}': "
                "no commits since it was created"
            )
            return

        base_version = self.release_version_strategy.version_from_branch_name(
            release_branch, context.tag_prefix
        )
        if base_version is None:
            return

        rewritten = (
            base_version.with_source_prefix(RELEASE_BRANCH_SOURCE_PREFIX)
            .incrementing()
            .anchored_at(merge_base)
            .without_branch_name_override()
        )
        logger.debug(f"Found {rewritten}")
        yield rewritten
