"""Base class for version strategies."""

from abc import ABC, abstractmethod
from typing import ClassVar, Iterator

from gitsemver.core.interfaces import RepositoryStore
from gitsemver.model.configuration import StrategyName

from ..base_version import BaseVersion
from ..context import VersionContext


class VersionStrategy(ABC):
    """
    Proposes base versions for the current context.

    Implementations must be side-effect free: they read the context and the
    repository store and yield candidates lazily. Whether a strategy runs at
    all is decided by the engine through ``is_enabled``.
    """

    name: ClassVar[StrategyName]

    def __init__(self, repository_store: RepositoryStore):
        if repository_store is None:
            raise ValueError("repository_store is required")
        self.repository_store = repository_store

    def is_enabled(self, context: VersionContext) -> bool:
        """Configuration predicate evaluated before ``get_versions``."""
        return True

    @abstractmethod
    def get_versions(self, context: VersionContext) -> Iterator[BaseVersion]:
        """Yield candidate base versions for the context."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
