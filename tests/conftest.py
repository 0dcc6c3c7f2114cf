import sys
from pathlib import Path
import pytest
from helpers import mark_by_dir


@pytest.fixture(autouse=True)
def _ensure_src_on_syspath():
    # Add project src/ to sys.path for src-layout imports
    root = Path(__file__).resolve().parents[1]
    src_path = root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))
    yield


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path):
    # Keep developer settings and logs out of the test run
    for name in (
        "GITHUB_OAUTH_CLIENT_ID",
        "GITHUB_OAUTH_CLIENT_SECRET",
        "GITHUB_CLIENT_ID",
        "GITHUB_CLIENT_SECRET",
        "EASY_GIT_GITHUB__TOKEN",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("EASY_GIT_DIRECTORIES__HOME", str(tmp_path / "home"))
    monkeypatch.setenv("EASY_GIT_WORKSPACE__SCRATCH_DIR", str(tmp_path / "scratch"))


TESTS = Path(__file__).parent

def pytest_collection_modifyitems(config, items):
    # Mark tests by directory structure
    mark_by_dir(items, TESTS / "easy_git" / "core", pytest.mark.unit)
    mark_by_dir(items, TESTS / "easy_git" / "shared", pytest.mark.unit)
    mark_by_dir(items, TESTS / "easy_git" / "infra", pytest.mark.integration)
    mark_by_dir(items, TESTS / "easy_git" / "app", pytest.mark.e2e)
