"""
Effective per-branch configuration.

Turns the configuration entry matching a branch into the flat set of values
the strategies read, resolving ``inherit`` increments against the branch the
current one was created from.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from gitsemver.core.interfaces import RepositoryStore
from gitsemver.git.refs import Branch, Commit
from gitsemver.model.configuration import BranchConfig, Configuration

from .version import VersionField

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EffectiveConfiguration:
    """Configuration values that apply to one branch for one calculation."""

    branch_key: str
    tag: str
    increment: VersionField
    is_release_branch: bool = False
    is_develop: bool = False
    is_mainline: bool = False
    tracks_release_branches: bool = False
    prevent_increment_of_merged_branch_version: bool = False


def find_source_branch(
    store: RepositoryStore,
    configuration: Configuration,
    branch: Branch,
    source_keys: List[str],
) -> Optional[Tuple[Branch, Commit]]:
    """
    Find the branch ``branch`` was most likely created from.

    Candidates are the other branches whose configuration key is listed in
    ``source_keys``. The one whose merge base is the fewest commits behind
    ``branch`` wins; ties go to the earlier key in ``source_keys``.

    Returns:
        (source branch, branch point commit) or None when no candidate shares history
    """
    best: Optional[Tuple[int, int, Branch, Commit]] = None

    for candidate in store.get_branches():
        if candidate.friendly_name == branch.friendly_name:
            continue
        key, _ = configuration.find_branch_config(candidate.friendly_name)
        if key not in source_keys:
            continue

        merge_base = store.find_merge_base(branch, candidate)
        if merge_base is None:
            continue

        distance = store.count_commits_since(merge_base, branch.tip)
        rank = (distance, source_keys.index(key))
        if best is None or rank < best[:2]:
            best = (distance, source_keys.index(key), candidate, merge_base)

    if best is None:
        return None
    return best[2], best[3]


def _resolve_increment(
    store: RepositoryStore,
    configuration: Configuration,
    branch: Branch,
    branch_config: BranchConfig,
) -> VersionField:
    increment = branch_config.increment or VersionField.inherit
    if increment != VersionField.inherit:
        return increment

    found = find_source_branch(
        store, configuration, branch, list(branch_config.source_branches or [])
    )
    if found is None:
        logger.debug(
            f"No source branch found for '{branch.friendly_name}', "
            f"using global increment '{configuration.increment.value}'"
        )
        return configuration.increment

    parent, _ = found
    _, parent_config = configuration.find_branch_config(parent.friendly_name)
    inherited = parent_config.increment
    if inherited is None or inherited == VersionField.inherit:
        inherited = configuration.increment
    logger.debug(
        f"Branch '{branch.friendly_name}' inherits increment '{inherited.value}' "
        f"from '{parent.friendly_name}'"
    )
    return inherited


def resolve_effective_configuration(
    store: RepositoryStore, configuration: Configuration, branch: Branch
) -> EffectiveConfiguration:
    """Build the effective configuration for ``branch``."""
    key, branch_config = configuration.find_branch_config(branch.friendly_name)

    return EffectiveConfiguration(
        branch_key=key,
        tag=branch_config.tag or "",
        increment=_resolve_increment(store, configuration, branch, branch_config),
        is_release_branch=bool(branch_config.is_release_branch),
        is_develop=bool(branch_config.is_develop),
        is_mainline=bool(branch_config.is_mainline),
        tracks_release_branches=bool(branch_config.tracks_release_branches),
        prevent_increment_of_merged_branch_version=bool(
            branch_config.prevent_increment_of_merged_branch_version
        ),
    )
