"""
Semantic version representation used by every version strategy.

This module wraps ``semver.Version`` to add tag-prefix aware parsing, the
increment rules applied to base versions, and rendering with a commit count.
"""

import re
from enum import Enum
from typing import Optional, Pattern, Union

import semver
from returns.result import Failure, Result, Success

from .exceptions import VersionFormatError

DEFAULT_TAG_PREFIX = "[vV]"


class VersionField(str, Enum):
    """Which part of a version an increment raises."""

    major = "major"
    minor = "minor"
    patch = "patch"
    none = "none"
    inherit = "inherit"


def compile_tag_prefix(prefix: Optional[str]) -> Pattern[str]:
    """
    Build the regex that splits a tag or branch segment into prefix and version.

    The prefix itself is optional in the matched text, so ``1.0.0`` still parses
    with the default ``[vV]`` prefix.

    Raises:
        re.error: If the prefix is not a valid regular expression
    """
    prefix = prefix or ""
    return re.compile(rf"^(?:{prefix})?(?P<version>.+)$")


TagPrefix = Union[str, Pattern[str], None]


def _prefix_pattern(tag_prefix: TagPrefix) -> Pattern[str]:
    if tag_prefix is None or isinstance(tag_prefix, str):
        return compile_tag_prefix(tag_prefix)
    return tag_prefix


class SemanticVersion:
    """
    A semantic version (major.minor.patch with optional pre-release and build).

    Instances are immutable; every operation returns a new object.
    """

    __slots__ = ("_version",)

    def __init__(
        self,
        major: int = 0,
        minor: int = 0,
        patch: int = 0,
        prerelease: Optional[str] = None,
        build: Optional[str] = None,
    ):
        self._version = semver.Version(major, minor, patch, prerelease, build)

    @classmethod
    def _wrap(cls, version: semver.Version) -> "SemanticVersion":
        return cls(
            version.major,
            version.minor,
            version.patch,
            version.prerelease,
            version.build,
        )

    @classmethod
    def parse(cls, text: str, tag_prefix: TagPrefix = None) -> "SemanticVersion":
        """
        Parse a version string, optionally preceded by a tag prefix.

        Args:
            text: Tag name, branch segment or plain version ("v1.2", "1.2.3-beta.1")
            tag_prefix: Prefix regex (string) or a pattern from ``compile_tag_prefix``

        Returns:
            SemanticVersion

        Raises:
            VersionFormatError: If the text does not contain a semantic version
        """
        text = str(text).strip()
        match = _prefix_pattern(tag_prefix).match(text)
        if not match:
            raise VersionFormatError(text)

        try:
            parsed = semver.Version.parse(
                match.group("version"), optional_minor_and_patch=True
            )
        except (ValueError, TypeError) as e:
            raise VersionFormatError(text) from e

        return cls._wrap(parsed)

    @classmethod
    def try_parse(
        cls, text: str, tag_prefix: TagPrefix = None
    ) -> Result["SemanticVersion", VersionFormatError]:
        """Like ``parse`` but returns a Result instead of raising."""
        try:
            return Success(cls.parse(text, tag_prefix))
        except VersionFormatError as e:
            return Failure(e)

    @property
    def major(self) -> int:
        return self._version.major

    @property
    def minor(self) -> int:
        return self._version.minor

    @property
    def patch(self) -> int:
        return self._version.patch

    @property
    def prerelease(self) -> Optional[str]:
        return self._version.prerelease

    @property
    def build(self) -> Optional[str]:
        return self._version.build

    @property
    def prerelease_name(self) -> Optional[str]:
        """Pre-release without its trailing numeric identifier ("beta.3" -> "beta")."""
        if self.prerelease is None:
            return None
        parts = self.prerelease.split(".")
        if len(parts) > 1 and parts[-1].isdigit():
            parts = parts[:-1]
        return ".".join(parts)

    @property
    def prerelease_number(self) -> Optional[int]:
        if self.prerelease is None:
            return None
        last = self.prerelease.split(".")[-1]
        return int(last) if last.isdigit() else None

    def increment(self, field: VersionField) -> "SemanticVersion":
        """
        Return the version raised by one unit of ``field``.

        A version with a numbered pre-release ("1.0.0-beta.1") bumps the
        pre-release number instead, since the release it points at has not
        shipped yet.
        """
        if field in (VersionField.none, VersionField.inherit):
            return self

        number = self.prerelease_number
        if number is not None:
            parts = self.prerelease.split(".")[:-1] + [str(number + 1)]
            return SemanticVersion(
                self.major, self.minor, self.patch, ".".join(parts)
            )

        if field == VersionField.major:
            return self._wrap(self._version.bump_major())
        if field == VersionField.minor:
            return self._wrap(self._version.bump_minor())
        return self._wrap(self._version.bump_patch())

    def with_prerelease(self, prerelease: Optional[str]) -> "SemanticVersion":
        return SemanticVersion(self.major, self.minor, self.patch, prerelease or None)

    def major_minor_patch(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def full_semver(self, commits_since_source: int = 0) -> str:
        """Render ``MAJOR.MINOR.PATCH[-PRERELEASE][+COMMITS]``."""
        text = self.major_minor_patch()
        if self.prerelease:
            text += f"-{self.prerelease}"
        if commits_since_source > 0:
            text += f"+{commits_since_source}"
        return text

    def __str__(self) -> str:
        return str(self._version)

    def __repr__(self) -> str:
        return f"SemanticVersion('{self}')"

    def __eq__(self, other) -> bool:
        if not isinstance(other, SemanticVersion):
            return False
        return self._version.compare(other._version) == 0

    def __lt__(self, other) -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self._version.compare(other._version) < 0

    def __le__(self, other) -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self._version.compare(other._version) <= 0

    def __gt__(self, other) -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self._version.compare(other._version) > 0

    def __ge__(self, other) -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self._version.compare(other._version) >= 0

    def __hash__(self) -> int:
        return hash((self.major, self.minor, self.patch, self.prerelease))


def parse_version(text: str, tag_prefix: TagPrefix = None) -> SemanticVersion:
    """
    Parse a version string into a SemanticVersion object.

    Raises:
        VersionFormatError: If the string is not a semantic version
    """
    return SemanticVersion.parse(text, tag_prefix)


def increment_version(version: str, field: str = "patch") -> str:
    """
    Increment a version string.

    Args:
        version: Current version string
        field: Which component to increment ("major", "minor", "patch" or "none")

    Raises:
        VersionFormatError: If the version string is invalid
        ValueError: If the field is unknown
    """
    return str(SemanticVersion.parse(version).increment(VersionField(field)))
