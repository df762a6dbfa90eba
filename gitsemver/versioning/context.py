"""
Per-run version context.

The context is built once at the start of a calculation and handed to every
strategy. It is a frozen snapshot: strategies read it, never change it.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional, Pattern

from returns.result import Success

from gitsemver.core.interfaces import RepositoryStore
from gitsemver.git.refs import Branch, Commit
from gitsemver.model.configuration import Configuration

from .branch_config import EffectiveConfiguration, resolve_effective_configuration
from .exceptions import ConfigurationError
from .version import SemanticVersion, compile_tag_prefix

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VersionContext:
    """Read-only inputs shared by all strategies of one calculation run."""

    current_branch: Branch
    current_commit: Commit
    configuration: Configuration
    effective: EffectiveConfiguration
    tag_prefix: Pattern[str]
    current_commit_tagged: bool = False


def _is_commit_tagged(
    store: RepositoryStore, branch: Branch, commit: Commit, tag_prefix: Pattern[str]
) -> bool:
    for tag in store.get_tags_on_branch(branch):
        if tag.commit == commit and isinstance(
            SemanticVersion.try_parse(tag.name, tag_prefix), Success
        ):
            return True
    return False


def create_context(
    store: RepositoryStore,
    configuration: Configuration,
    target_branch: Optional[str] = None,
) -> VersionContext:
    """
    Build the version context for the current (or the given) branch.

    Args:
        store: Repository store snapshot
        configuration: Loaded configuration
        target_branch: Branch to calculate for instead of the checked out one

    Raises:
        ConfigurationError: On an unusable tag prefix, an unknown target branch
            or a detached HEAD without a target branch
    """
    try:
        tag_prefix = compile_tag_prefix(configuration.tag_prefix)
    except re.error as e:
        raise ConfigurationError(
            f"invalid tag-prefix '{configuration.tag_prefix}': {e}"
        ) from e

    if target_branch:
        branch = store.find_branch(target_branch)
        if branch is None:
            raise ConfigurationError(f"branch '{target_branch}' does not exist")
        commit = branch.tip
    else:
        branch = store.current_branch
        if branch is None:
            raise ConfigurationError(
                "HEAD is detached; pass the branch to calculate the version for"
            )
        commit = store.current_commit

    effective = resolve_effective_configuration(store, configuration, branch)
    logger.debug(
        f"Branch '{branch.friendly_name}' uses configuration '{effective.branch_key}' "
        f"(increment: {effective.increment.value}, tag: '{effective.tag}')"
    )

    return VersionContext(
        current_branch=branch,
        current_commit=commit,
        configuration=configuration,
        effective=effective,
        tag_prefix=tag_prefix,
        current_commit_tagged=_is_commit_tagged(store, branch, commit, tag_prefix),
    )
