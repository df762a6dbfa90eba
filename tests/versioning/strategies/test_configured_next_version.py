import pytest

from gitsemver.model.configuration import Configuration
from gitsemver.versioning.strategies import ConfiguredNextVersionVersionStrategy
from gitsemver.versioning.version import SemanticVersion

pytestmark = pytest.mark.short


def test_disabled_without_next_version(store, make_context):
    strategy = ConfiguredNextVersionVersionStrategy(store)
    assert strategy.is_enabled(make_context()) is False


def test_next_version(store, make_context):
    context = make_context(config=Configuration(next_version="2.1"))

    (version,) = ConfiguredNextVersionVersionStrategy(store).get_versions(context)
    assert version.semantic_version == SemanticVersion(2, 1)
    assert version.source == "NextVersion in configuration file"
    assert version.should_increment is False
    assert version.base_version_source is None


def test_tagged_commit_wins(store, make_context):
    store.tag("1.0.0")
    context = make_context(config=Configuration(next_version="2.0.0"))

    assert list(ConfiguredNextVersionVersionStrategy(store).get_versions(context)) == []
