"""Base version from ``next-version`` in the configuration file."""

import logging
from typing import Iterator

from gitsemver.model.configuration import StrategyName

from ..base_version import BaseVersion
from ..context import VersionContext
from .base import VersionStrategy

logger = logging.getLogger(__name__)


class ConfiguredNextVersionVersionStrategy(VersionStrategy):
    """
    Version is the configured ``next-version``.

    Has no BaseVersionSource and never increments. Skipped when the current
    commit carries a version tag, since the tag is then authoritative.
    """

    name = StrategyName.configured_next_version

    def is_enabled(self, context: VersionContext) -> bool:
        return context.configuration.next_version is not None

    def get_versions(self, context: VersionContext) -> Iterator[BaseVersion]:
        next_version = context.configuration.get_next_version()
        if next_version is None or context.current_commit_tagged:
            return

        base_version = BaseVersion(
            source="NextVersion in configuration file",
            should_increment=False,
            semantic_version=next_version,
        )
        logger.debug(f"Found {base_version}")
        yield base_version
