import dataclasses

import pytest

from gitsemver.git.refs import Commit
from gitsemver.versioning.base_version import BaseVersion
from gitsemver.versioning.version import SemanticVersion

pytestmark = pytest.mark.short


@pytest.fixture
def tag_version():
    return BaseVersion(
        source="Git tag '1.0.0'",
        should_increment=False,
        semantic_version=SemanticVersion(1),
        base_version_source=Commit("a" * 40),
        branch_name_override="release",
    )


def test_base_version_is_immutable(tag_version):
    with pytest.raises(dataclasses.FrozenInstanceError):
        tag_version.should_increment = True


def test_rewrites_return_new_values(tag_version):
    anchor = Commit("b" * 40)
    rewritten = (
        tag_version.with_source_prefix("Prefix -> ")
        .incrementing()
        .anchored_at(anchor)
        .without_branch_name_override()
    )

    assert rewritten.source == "Prefix -> Git tag '1.0.0'"
    assert rewritten.should_increment is True
    assert rewritten.base_version_source == anchor
    assert rewritten.branch_name_override is None
    assert rewritten.semantic_version == tag_version.semantic_version

    # original untouched
    assert tag_version.source == "Git tag '1.0.0'"
    assert tag_version.should_increment is False
    assert tag_version.branch_name_override == "release"


def test_str_shows_anchor_and_increment(tag_version):
    assert str(tag_version) == (
        "Git tag '1.0.0': 1.0.0 with commit source 'aaaaaaa' (no increment)"
    )
    external = BaseVersion("Configured", True, SemanticVersion(2))
    assert str(external) == (
        "Configured: 2.0.0 with commit source 'external'"
    )


def test_commits_compare_by_sha():
    assert Commit("a" * 40, message="one") == Commit("a" * 40, message="two")
