"""Shared fixtures for app-level tests."""
from pathlib import Path

import pytest
from dependency_injector import providers
from git import Repo

from easy_git.app.config import AppConfig, DirectoryConfig, GitHubConfig, WorkspaceConfig
from easy_git.app.container import Container

from fakes import (
    FakeBrowser,
    FakeCredentials,
    FakeGitHubAPI,
    FakeListener,
    FakeRunner,
    FakeTokenExchange,
    FixedState,
    ok,
)


@pytest.fixture
def git_identity(monkeypatch):
    for prefix in ("GIT_AUTHOR", "GIT_COMMITTER"):
        monkeypatch.setenv(f"{prefix}_NAME", "Test User")
        monkeypatch.setenv(f"{prefix}_EMAIL", "test@example.com")


@pytest.fixture
def test_repo(tmp_path, git_identity) -> tuple[Path, str, str]:
    """A git repo with two commits."""
    repo_dir = tmp_path / "repo"
    repo = Repo.init(repo_dir)

    (repo_dir / "notes.txt").write_text("v1\n", encoding="utf-8")
    repo.index.add(["notes.txt"])
    c1 = repo.index.commit("first commit").hexsha

    (repo_dir / "notes.txt").write_text("v2\n", encoding="utf-8")
    repo.index.add(["notes.txt"])
    c2 = repo.index.commit("second commit").hexsha

    repo.close()
    return repo_dir, c1, c2


@pytest.fixture
def test_config(tmp_path):
    """Create test configuration with explicit values."""
    return AppConfig(
        directories=DirectoryConfig(home=tmp_path / "home"),
        workspace=WorkspaceConfig(scratch_dir=tmp_path / "scratch"),
        github=GitHubConfig(token="gho_config_token"),
    )


@pytest.fixture
def fake_runner():
    return FakeRunner({"push": ok(stderr="To https://github.com/octo/hello-world.git\n   abc..def  main -> main")})


@pytest.fixture
def fake_github():
    return FakeGitHubAPI()


@pytest.fixture
def fake_oauth():
    """Fakes for a login whose callback echoes the generated state."""
    listener = FakeListener()
    listener.target = "/callback?code=the-code&state=fixed-state"
    return {
        "listener": listener,
        "browser": FakeBrowser(listener),
        "exchange": FakeTokenExchange(token="gho_from_login"),
        "state": FixedState("fixed-state"),
        "credentials": FakeCredentials(),
    }


def _override(container: Container, fake_runner, fake_github, fake_oauth) -> Container:
    container.runner.override(providers.Object(fake_runner))
    container.github_api.override(providers.Object(fake_github))
    container.listener.override(providers.Object(fake_oauth["listener"]))
    container.browser.override(providers.Object(fake_oauth["browser"]))
    container.token_exchange.override(providers.Object(fake_oauth["exchange"]))
    container.state_gen.override(providers.Object(fake_oauth["state"]))
    container.credentials.override(providers.Object(fake_oauth["credentials"]))
    return container


@pytest.fixture
def mock_container(monkeypatch, fake_runner, fake_github, fake_oauth):
    """Patch Container in both entry modules to return an instance wired with fakes."""

    def create_mock_container():
        return _override(Container(), fake_runner, fake_github, fake_oauth)

    monkeypatch.setattr("easy_git.app.cli.Container", create_mock_container)
    monkeypatch.setattr("easy_git.app.main.Container", create_mock_container)
    return create_mock_container
