"""
Version strategy engine.

Runs the enabled strategies in registry order for one context and resolves
their candidates into a single base version.
"""

import logging
from dataclasses import replace
from itertools import chain
from typing import Iterator, List, Optional, Sequence, Type

from returns.maybe import Maybe

from gitsemver.core.interfaces import RepositoryStore

from .base_version import BaseVersion
from .context import VersionContext
from .selection import SelectedVersion, select_base_version
from .strategies import STRATEGY_REGISTRY, VersionStrategy

logger = logging.getLogger(__name__)


class VersionStrategyEngine:
    """
    Orchestrates the version strategies for a repository store.

    Args:
        repository_store: Store every strategy queries
        strategies: Strategy classes in priority order (defaults to the registry)
    """

    def __init__(
        self,
        repository_store: RepositoryStore,
        strategies: Optional[Sequence[Type[VersionStrategy]]] = None,
    ):
        self.repository_store = repository_store
        self.strategies: List[VersionStrategy] = [
            strategy(repository_store)
            for strategy in (STRATEGY_REGISTRY if strategies is None else strategies)
        ]

    def enabled_strategies(self, context: VersionContext) -> List[VersionStrategy]:
        """Strategies named in the configuration whose own predicate holds."""
        configured = set(context.configuration.strategies)
        enabled = [
            strategy
            for strategy in self.strategies
            if strategy.name in configured and strategy.is_enabled(context)
        ]
        logger.debug(
            f"Enabled strategies: {', '.join(s.name.value for s in enabled) or 'none'}"
        )
        return enabled

    def candidates(self, context: VersionContext) -> Iterator[BaseVersion]:
        """All candidates of the enabled strategies, in strategy order."""
        return chain.from_iterable(
            strategy.get_versions(context)
            for strategy in self.enabled_strategies(context)
        )

    def calculate(self, context: VersionContext) -> Maybe[SelectedVersion]:
        """
        Select the base version for the context.

        Returns:
            Some(SelectedVersion) with the commit count since its anchor filled
            in, or Nothing when no strategy produced a candidate
        """
        selected = select_base_version(
            self.candidates(context), context.effective.increment
        )
        return selected.map(lambda chosen: self._with_commit_count(context, chosen))

    def _with_commit_count(
        self, context: VersionContext, selected: SelectedVersion
    ) -> SelectedVersion:
        commits = self.repository_store.count_commits_since(
            selected.base_version_source, context.current_commit
        )
        logger.info(
            f"Base version: {selected.base_version} -> {selected.semantic_version} "
            f"({commits} commits since source)"
        )
        return replace(selected, commits_since_source=commits)
