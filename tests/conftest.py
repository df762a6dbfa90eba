import io
import logging

import pytest

from gitsemver.model.configuration import Configuration
from gitsemver.versioning.context import create_context

from .fixtures import InMemoryRepositoryStore
from .git_repo import GitRepoBuilder


@pytest.fixture
def capture_logs():
    """Fixture to capture log output during tests."""
    log_stream = io.StringIO()
    handler = logging.StreamHandler(log_stream)
    logger = logging.getLogger("gitsemver")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)

    yield log_stream

    logger.removeHandler(handler)
    log_stream.close()


@pytest.fixture(autouse=True)
def isolated_user_config(tmp_path_factory, monkeypatch):
    """Keep a user's own gitsemver.yml out of the tests."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path_factory.mktemp("xdg")))
    monkeypatch.delenv("GITSEMVER_CONFIG", raising=False)


@pytest.fixture
def store() -> InMemoryRepositoryStore:
    """Repository with a single commit on main."""
    return InMemoryRepositoryStore()


@pytest.fixture
def configuration() -> Configuration:
    return Configuration()


@pytest.fixture
def make_context(store, configuration):
    """Build a context for the store's current branch (or a given one)."""

    def _make(target_branch=None, config=None):
        return create_context(store, config or configuration, target_branch)

    return _make


@pytest.fixture
def git_repo(tmp_path) -> GitRepoBuilder:
    """Empty git repository on branch main."""
    return GitRepoBuilder(tmp_path / "repo")
