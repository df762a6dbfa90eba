"""Pydantic models for gitsemver configuration."""

from gitsemver.model.configuration import (
    BRANCH_NAME_PLACEHOLDER,
    MAIN_BRANCH_KEY,
    UNKNOWN_BRANCH_KEY,
    BranchConfig,
    Configuration,
    StrategyName,
    default_branch_configs,
)

__all__ = [
    "BRANCH_NAME_PLACEHOLDER",
    "MAIN_BRANCH_KEY",
    "UNKNOWN_BRANCH_KEY",
    "BranchConfig",
    "Configuration",
    "StrategyName",
    "default_branch_configs",
]
