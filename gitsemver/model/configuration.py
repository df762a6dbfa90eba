"""Pydantic models for the gitsemver configuration file."""

import re
from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from gitsemver.versioning.exceptions import VersionFormatError
from gitsemver.versioning.version import (
    DEFAULT_TAG_PREFIX,
    SemanticVersion,
    VersionField,
    compile_tag_prefix,
)

MAIN_BRANCH_KEY = "main"
DEVELOP_BRANCH_KEY = "develop"
RELEASE_BRANCH_KEY = "release"
FEATURE_BRANCH_KEY = "feature"
PULL_REQUEST_BRANCH_KEY = "pull-request"
HOTFIX_BRANCH_KEY = "hotfix"
SUPPORT_BRANCH_KEY = "support"
UNKNOWN_BRANCH_KEY = "unknown"

BRANCH_NAME_PLACEHOLDER = "{BranchName}"


def _kebab(name: str) -> str:
    return name.replace("_", "-")


class StrategyName(str, Enum):
    """Version strategies that can be switched on in the configuration."""

    configured_next_version = "ConfiguredNextVersion"
    merge_message = "MergeMessage"
    tagged_commit = "TaggedCommit"
    track_release_branches = "TrackReleaseBranches"
    version_in_branch_name = "VersionInBranchName"


class BranchConfig(BaseModel):
    """Versioning policy for branches whose name matches ``regex``."""

    model_config = ConfigDict(
        alias_generator=_kebab, populate_by_name=True, extra="forbid"
    )

    regex: Optional[str] = Field(
        None, description="Pattern matched against branch names"
    )
    tag: Optional[str] = Field(
        None, description=f"Pre-release tag, may contain {BRANCH_NAME_PLACEHOLDER}"
    )
    increment: Optional[VersionField] = None
    is_release_branch: Optional[bool] = None
    is_develop: Optional[bool] = None
    is_mainline: Optional[bool] = None
    tracks_release_branches: Optional[bool] = None
    prevent_increment_of_merged_branch_version: Optional[bool] = None
    source_branches: Optional[List[str]] = None

    @field_validator("regex")
    @classmethod
    def validate_regex(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"invalid branch regex '{v}': {e}")
        return v

    def matches(self, branch_name: str) -> bool:
        return bool(self.regex) and re.search(self.regex, branch_name) is not None

    def merged_with(self, override: "BranchConfig") -> "BranchConfig":
        """Return a copy where every field set in ``override`` replaces ours."""
        return self.model_copy(update=override.model_dump(exclude_none=True))


def default_branch_configs() -> Dict[str, BranchConfig]:
    """Branch configurations for a gitflow/GitHub flow repository, in match order."""
    not_pull_requests = [k for k in _DEFAULT_KEYS if k != PULL_REQUEST_BRANCH_KEY]

    return {
        MAIN_BRANCH_KEY: BranchConfig(
            regex=r"^master$|^main$",
            tag="",
            increment=VersionField.patch,
            is_mainline=True,
            prevent_increment_of_merged_branch_version=True,
            source_branches=[DEVELOP_BRANCH_KEY, RELEASE_BRANCH_KEY],
        ),
        DEVELOP_BRANCH_KEY: BranchConfig(
            regex=r"^dev(elop)?(ment)?$",
            tag="alpha",
            increment=VersionField.minor,
            is_develop=True,
            tracks_release_branches=True,
            source_branches=[],
        ),
        RELEASE_BRANCH_KEY: BranchConfig(
            regex=r"^releases?[/-]",
            tag="beta",
            increment=VersionField.none,
            is_release_branch=True,
            prevent_increment_of_merged_branch_version=True,
            source_branches=[DEVELOP_BRANCH_KEY, MAIN_BRANCH_KEY, SUPPORT_BRANCH_KEY],
        ),
        FEATURE_BRANCH_KEY: BranchConfig(
            regex=r"^features?[/-]",
            tag=BRANCH_NAME_PLACEHOLDER,
            increment=VersionField.inherit,
            source_branches=list(not_pull_requests),
        ),
        PULL_REQUEST_BRANCH_KEY: BranchConfig(
            regex=r"^(pull|pull\-requests|pr)[/-]",
            tag="PullRequest",
            increment=VersionField.inherit,
            source_branches=list(not_pull_requests),
        ),
        HOTFIX_BRANCH_KEY: BranchConfig(
            regex=r"^hotfix(es)?[/-]",
            tag="beta",
            increment=VersionField.patch,
            source_branches=[DEVELOP_BRANCH_KEY, MAIN_BRANCH_KEY, SUPPORT_BRANCH_KEY],
        ),
        SUPPORT_BRANCH_KEY: BranchConfig(
            regex=r"^support[/-]",
            tag="",
            increment=VersionField.patch,
            is_mainline=True,
            source_branches=[MAIN_BRANCH_KEY],
        ),
    }


_DEFAULT_KEYS = [
    MAIN_BRANCH_KEY,
    DEVELOP_BRANCH_KEY,
    RELEASE_BRANCH_KEY,
    FEATURE_BRANCH_KEY,
    PULL_REQUEST_BRANCH_KEY,
    HOTFIX_BRANCH_KEY,
    SUPPORT_BRANCH_KEY,
]


class Configuration(BaseModel):
    """Repository-wide versioning configuration."""

    model_config = ConfigDict(
        alias_generator=_kebab, populate_by_name=True, extra="forbid"
    )

    tag_prefix: str = Field(DEFAULT_TAG_PREFIX, description="Regex stripped from tags")
    next_version: Optional[str] = Field(
        None, description="Minimum next version, used until a tag supersedes it"
    )
    increment: VersionField = VersionField.patch
    main_branch_key: str = MAIN_BRANCH_KEY
    strategies: List[StrategyName] = Field(default_factory=lambda: list(StrategyName))
    fallback_version: Optional[str] = "0.1.0"
    branches: Dict[str, BranchConfig] = Field(default_factory=default_branch_configs)

    @field_validator("tag_prefix")
    @classmethod
    def validate_tag_prefix(cls, v: Optional[str]) -> str:
        v = v or ""
        try:
            compile_tag_prefix(v)
        except re.error as e:
            raise ValueError(f"invalid tag-prefix '{v}': {e}")
        return v

    @field_validator("next_version", "fallback_version", mode="before")
    @classmethod
    def validate_version_string(cls, v):
        if v is None:
            return v
        # YAML reads 1.2 as a float
        v = str(v)
        try:
            SemanticVersion.parse(v)
        except VersionFormatError as e:
            raise ValueError(str(e))
        return v

    @field_validator("increment")
    @classmethod
    def validate_global_increment(cls, v: VersionField) -> VersionField:
        if v == VersionField.inherit:
            raise ValueError("the global increment cannot be 'inherit'")
        return v

    @field_validator("branches", mode="before")
    @classmethod
    def merge_with_defaults(cls, v):
        if v is None:
            return default_branch_configs()
        if not isinstance(v, dict):
            raise ValueError("branches must be a mapping of branch keys")

        merged = default_branch_configs()
        for key, override in v.items():
            override_model = (
                override
                if isinstance(override, BranchConfig)
                else BranchConfig.model_validate(override or {})
            )
            if key in merged:
                merged[key] = merged[key].merged_with(override_model)
            else:
                merged[key] = override_model
        return merged

    @model_validator(mode="after")
    def validate_branches(self) -> "Configuration":
        for key, branch in self.branches.items():
            if not branch.regex:
                raise ValueError(f"branch configuration '{key}' has no regex")
            for source in branch.source_branches or []:
                if source not in self.branches:
                    raise ValueError(
                        f"branch configuration '{key}' lists unknown "
                        f"source branch '{source}'"
                    )
        return self

    def get_next_version(self) -> Optional[SemanticVersion]:
        return SemanticVersion.parse(self.next_version) if self.next_version else None

    def get_fallback_version(self) -> Optional[SemanticVersion]:
        return (
            SemanticVersion.parse(self.fallback_version)
            if self.fallback_version
            else None
        )

    def get_main_branch_config(self) -> Optional[BranchConfig]:
        return self.branches.get(self.main_branch_key)

    def get_release_branch_configs(self) -> List[BranchConfig]:
        """Branch configurations flagged as release branches."""
        return [branch for branch in self.branches.values() if branch.is_release_branch]

    def is_release_branch(self, branch_name: str) -> bool:
        return any(
            branch.matches(branch_name)
            for branch in self.get_release_branch_configs()
        )

    def find_branch_config(self, branch_name: str) -> Tuple[str, BranchConfig]:
        """
        Configuration for a branch name: first matching entry in declaration order.

        Branches that match nothing get the ``unknown`` configuration, which
        inherits its increment from whatever branch it was created from.
        """
        for key, branch in self.branches.items():
            if branch.matches(branch_name):
                return key, branch

        return UNKNOWN_BRANCH_KEY, BranchConfig(
            regex=".*",
            tag=BRANCH_NAME_PLACEHOLDER,
            increment=VersionField.inherit,
            source_branches=list(self.branches),
        )

    def to_yaml_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
