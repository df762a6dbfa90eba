"""
Integration tests for the GitPython repository store.

These tests create real repositories in a temporary directory and need the
git executable.
"""

from unittest.mock import patch

import pytest
from git import Repo

from gitsemver.git.refs import Branch, Commit, trim_remote
from gitsemver.git.repository import GitRepositoryStore
from gitsemver.model.configuration import Configuration
from gitsemver.versioning.calculator import NextVersionCalculator
from gitsemver.versioning.exceptions import RepositoryError

pytestmark = pytest.mark.integration


def test_not_a_repository(tmp_path):
    with pytest.raises(RepositoryError, match="not a git repository"):
        GitRepositoryStore(tmp_path)


def test_repository_without_commits(git_repo):
    with pytest.raises(RepositoryError, match="repository has no commits"):
        GitRepositoryStore(git_repo.path)


def test_store_closes_repository_on_exit(git_repo):
    git_repo.commit()

    store = GitRepositoryStore(git_repo.path)
    with patch.object(store.repo, "close") as close:
        with store as entered:
            assert entered is store
            assert entered.current_branch.name == "main"
            close.assert_not_called()
        close.assert_called_once_with()
    store.close()


def test_failed_open_closes_repository(git_repo):
    git_repo.commit()

    with patch.object(Repo, "close", autospec=True) as close:
        with pytest.raises(RepositoryError, match="does not exist"):
            GitRepositoryStore(git_repo.path, target_branch="missing")
    close.assert_called_once()


def test_current_branch_and_commit(git_repo):
    git_repo.commit()
    head = git_repo.commit()

    store = GitRepositoryStore(git_repo.path)
    assert store.root.resolve() == git_repo.path.resolve()
    assert store.current_branch.name == "main"
    assert store.current_commit.sha == head.hexsha
    assert store.current_commit.parents == (head.parents[0].hexsha,)


def test_opens_from_subdirectory(git_repo):
    git_repo.commit()
    subdir = git_repo.path / "sub" / "dir"
    subdir.mkdir(parents=True)

    assert GitRepositoryStore(subdir).root.resolve() == git_repo.path.resolve()


def test_detached_head(git_repo):
    first = git_repo.commit()
    git_repo.commit()
    git_repo.repo.git.checkout(first.hexsha)

    store = GitRepositoryStore(git_repo.path)
    assert store.current_branch is None
    assert store.current_commit.sha == first.hexsha


def test_target_branch(git_repo):
    git_repo.commit()
    git_repo.branch("develop", checkout=False)
    git_repo.checkout("develop")
    develop_tip = git_repo.commit()
    git_repo.checkout("main")

    store = GitRepositoryStore(git_repo.path, target_branch="develop")
    assert store.current_branch.name == "develop"
    assert store.current_commit.sha == develop_tip.hexsha


def test_unknown_target_branch(git_repo):
    git_repo.commit()
    with pytest.raises(RepositoryError, match="branch 'nope' does not exist"):
        GitRepositoryStore(git_repo.path, target_branch="nope")


def test_branches_and_merge_base(git_repo):
    base = git_repo.commit()
    git_repo.branch("release/2.0.0")
    git_repo.commit()
    git_repo.checkout("main")
    git_repo.commit()

    store = GitRepositoryStore(git_repo.path)
    names = sorted(b.name for b in store.get_branches())
    assert names == ["main", "release/2.0.0"]

    main = store.find_branch("main")
    release = store.find_branch("release/2.0.0")
    assert store.find_merge_base(release, main).sha == base.hexsha
    assert store.find_branch("missing") is None

    release_branches = store.get_release_branches(
        Configuration().get_release_branch_configs()
    )
    assert [b.name for b in release_branches] == ["release/2.0.0"]


def test_tags_on_branch(git_repo):
    git_repo.commit()
    git_repo.tag("1.0.0")
    git_repo.branch("feature/other")
    git_repo.commit()
    git_repo.tag("2.0.0", message="annotated")
    git_repo.checkout("main")
    git_repo.commit()

    store = GitRepositoryStore(git_repo.path)
    main_tags = store.get_tags_on_branch(store.find_branch("main"))
    feature_tags = store.get_tags_on_branch(store.find_branch("feature/other"))

    assert [t.name for t in main_tags] == ["1.0.0"]
    assert sorted(t.name for t in feature_tags) == ["1.0.0", "2.0.0"]
    annotated = next(t for t in feature_tags if t.name == "2.0.0")
    assert annotated.commit == store.find_branch("feature/other").tip


def test_merge_commits_and_counts(git_repo):
    git_repo.commit()
    git_repo.branch("release/2.0.0")
    git_repo.commit()
    git_repo.checkout("main")
    merge = git_repo.merge("release/2.0.0")

    store = GitRepositoryStore(git_repo.path)
    main = store.find_branch("main")

    merges = store.get_merge_commits(main)
    assert [c.sha for c in merges] == [merge.hexsha]
    assert merges[0].is_merge
    assert merges[0].summary == "Merge branch 'release/2.0.0' into main"

    assert store.count_commits_since(None, main.tip) == 3
    assert store.count_commits_since(store.current_commit, main.tip) == 0
    assert store.count_commits_since(
        store.find_merge_base(main, store.find_branch("release/2.0.0")), main.tip
    ) == 1


def test_remote_branches(git_repo, tmp_path):
    git_repo.commit()
    git_repo.branch("release/3.0.0")
    git_repo.commit()
    git_repo.checkout("main")

    clone = Repo.clone_from(git_repo.path, tmp_path / "clone")
    store = GitRepositoryStore(clone.working_tree_dir)

    names = [b.name for b in store.get_branches()]
    assert "main" in names
    assert "origin/release/3.0.0" in names
    # the local main hides origin/main
    assert "origin/main" not in names

    release = store.find_branch("release/3.0.0")
    assert release.is_remote
    assert release.friendly_name == "release/3.0.0"


@pytest.mark.short
def test_friendly_names():
    tip = Commit("a" * 40)
    remote = Branch("origin/release/1.0", tip, is_remote=True)
    assert remote.friendly_name == "release/1.0"
    assert Branch("release/1.0", tip).friendly_name == "release/1.0"
    assert trim_remote("refs/remotes/origin/develop") == "develop"
    assert trim_remote("origin/develop") == "develop"
    assert trim_remote("feature/x") == "feature/x"


def test_feature_branch_scenario(git_repo):
    git_repo.commit()
    git_repo.tag("1.0.0")
    git_repo.branch("feature/JIRA-123")
    git_repo.commits(5)

    store = GitRepositoryStore(git_repo.path)
    variables = NextVersionCalculator(store, Configuration()).calculate()
    assert variables.full_sem_ver == "1.0.1-feature.JIRA.123+5"


def test_develop_scenario(git_repo):
    git_repo.commit()
    git_repo.tag("v1.0.0")
    git_repo.branch("develop")
    git_repo.commit()
    git_repo.branch("release/2.0.0", checkout=False)
    git_repo.commits(2)

    store = GitRepositoryStore(git_repo.path)
    variables = NextVersionCalculator(store, Configuration()).calculate()
    assert variables.full_sem_ver == "2.1.0-alpha+2"
