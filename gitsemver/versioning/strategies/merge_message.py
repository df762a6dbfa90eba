"""Base versions from merge commits of release branches."""

import logging
import re
from dataclasses import dataclass
from typing import Iterator, Optional

from gitsemver.git.refs import Commit, trim_remote
from gitsemver.model.configuration import StrategyName

from ..base_version import BaseVersion
from ..context import VersionContext
from .base import VersionStrategy
from .version_in_branch_name import find_version_in_branch_name

logger = logging.getLogger(__name__)

# Message formats written by git, GitHub, Bitbucket and git-flow, in match order
MERGE_MESSAGE_FORMATS = [
    (
        "Default",
        re.compile(
            r"^Merge (branch|tag) '(?P<source>[^']*)'(?: into (?P<target>[^\s]*))*"
        ),
    ),
    (
        "SmartGit",
        re.compile(r"^Finish (?P<source>[^\s]*)(?: into (?P<target>[^\s]*))*"),
    ),
    (
        "BitBucketPull",
        re.compile(
            r"^Merge pull request #(?P<number>\d+) (from|in) (?P<repo>.*) "
            r"from (?P<source>[^\s]*) to (?P<target>[^\s]*)"
        ),
    ),
    (
        "GitHubPull",
        re.compile(
            r"^Merge pull request #(?P<number>\d+) (from|in) "
            r"(?:[^\s/]+/)?(?P<source>[^\s]*)(?: into (?P<target>[^\s]*))*"
        ),
    ),
    (
        "RemoteTracking",
        re.compile(
            r"^Merge remote-tracking branch '(?P<source>[^\s]*)'"
            r"(?: into (?P<target>[^\s]*))*"
        ),
    ),
]


@dataclass(frozen=True)
class MergeMessage:
    """Parsed merge commit message."""

    format_name: str
    merged_branch: str
    target_branch: Optional[str] = None
    pull_request_number: Optional[int] = None

    @classmethod
    def parse(cls, message: str) -> Optional["MergeMessage"]:
        """Parse the first line of a commit message, None for unknown formats."""
        summary = message.strip().splitlines()[0] if message.strip() else ""
        for format_name, pattern in MERGE_MESSAGE_FORMATS:
            match = pattern.match(summary)
            if not match:
                continue
            groups = match.groupdict()
            number = groups.get("number")
            return cls(
                format_name=format_name,
                merged_branch=trim_remote(groups["source"]),
                target_branch=groups.get("target"),
                pull_request_number=int(number) if number else None,
            )
        return None


class MergeMessageVersionStrategy(VersionStrategy):
    """
    Version is extracted from the names of release branches merged into this one.

    BaseVersionSource is the merge commit. Increments unless the branch is
    configured with ``prevent-increment-of-merged-branch-version``.
    """

    name = StrategyName.merge_message

    def get_versions(self, context: VersionContext) -> Iterator[BaseVersion]:
        should_increment = (
            not context.effective.prevent_increment_of_merged_branch_version
        )
        for commit in self.repository_store.get_merge_commits(context.current_branch):
            base_version = self._version_from_merge(context, commit, should_increment)
            if base_version is not None:
                logger.debug(f"Found {base_version}")
                yield base_version

    def _version_from_merge(
        self, context: VersionContext, commit: Commit, should_increment: bool
    ) -> Optional[BaseVersion]:
        if not commit.is_merge:
            return None
        merge_message = MergeMessage.parse(commit.message)
        if merge_message is None:
            return None

        if not context.configuration.is_release_branch(merge_message.merged_branch):
            return None

        found = find_version_in_branch_name(
            merge_message.merged_branch, context.tag_prefix
        )
        if found is None:
            return None

        _, version = found
        return BaseVersion(
            source=f"Merge message '{commit.summary}'",
            should_increment=should_increment,
            semantic_version=version,
            base_version_source=commit,
        )
