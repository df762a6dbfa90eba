"""
Version strategies.

Each strategy proposes base versions for the current context. They run in the
order of ``STRATEGY_REGISTRY``; that order is also the tie-break order when
two candidates resolve to the same version.
"""

from typing import Dict, List, Type

from gitsemver.model.configuration import StrategyName

from .base import VersionStrategy
from .configured_next_version import ConfiguredNextVersionVersionStrategy
from .merge_message import MergeMessage, MergeMessageVersionStrategy
from .tagged_commit import TaggedCommitVersionStrategy
from .track_release_branches import (
    RELEASE_BRANCH_SOURCE_PREFIX,
    TrackReleaseBranchesVersionStrategy,
)
from .version_in_branch_name import (
    VersionInBranchNameVersionStrategy,
    find_version_in_branch_name,
)

STRATEGY_REGISTRY: List[Type[VersionStrategy]] = [
    ConfiguredNextVersionVersionStrategy,
    MergeMessageVersionStrategy,
    TaggedCommitVersionStrategy,
    TrackReleaseBranchesVersionStrategy,
    VersionInBranchNameVersionStrategy,
]

STRATEGIES_BY_NAME: Dict[StrategyName, Type[VersionStrategy]] = {
    strategy.name: strategy for strategy in STRATEGY_REGISTRY
}

__all__ = [
    "VersionStrategy",
    "ConfiguredNextVersionVersionStrategy",
    "MergeMessage",
    "MergeMessageVersionStrategy",
    "TaggedCommitVersionStrategy",
    "TrackReleaseBranchesVersionStrategy",
    "VersionInBranchNameVersionStrategy",
    "find_version_in_branch_name",
    "RELEASE_BRANCH_SOURCE_PREFIX",
    "STRATEGY_REGISTRY",
    "STRATEGIES_BY_NAME",
]
