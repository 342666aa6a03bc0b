"""
Diff resolution against a throwaway repository built with the real git binary.
"""

import shutil
import subprocess
from pathlib import Path

import pytest

from threadline.core.errors import NotAGitRepositoryError
from threadline.core.models import EnvironmentKind
from threadline.git.client import GitClient
from threadline.git.environment import Environment
from threadline.git.resolver import DiffResolver

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed"),
]


def git(repo: Path, *args: str) -> str:
    return subprocess.run(["git", *args], cwd=repo, check=True, capture_output=True, text=True).stdout


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    git(tmp_path, "init", "-q")
    git(tmp_path, "config", "user.email", "dev@example.com")
    git(tmp_path, "config", "user.name", "Dev")
    git(tmp_path, "config", "commit.gpgsign", "false")
    (tmp_path / "app.py").write_text("print('hello')\n")
    git(tmp_path, "add", "app.py")
    git(tmp_path, "commit", "-q", "-m", "initial")
    return tmp_path


def resolve(repo: Path):
    return DiffResolver(GitClient(repo), Environment.local()).resolve()


def test_clean_tree_resolves_to_empty_diff(repo: Path) -> None:
    diff = resolve(repo)
    assert diff.is_empty
    assert diff.environment == EnvironmentKind.LOCAL


def test_unstaged_changes(repo: Path) -> None:
    (repo / "app.py").write_text("print('bye')\n")

    diff = resolve(repo)

    assert diff.changed_files == ["app.py"]
    assert "-print('hello')" in diff.diff_text
    assert "+print('bye')" in diff.diff_text


def test_staged_changes_take_precedence(repo: Path) -> None:
    (repo / "db.sql").write_text("select 1;\n")
    git(repo, "add", "db.sql")
    (repo / "app.py").write_text("print('bye')\n")

    diff = resolve(repo)

    assert diff.changed_files == ["db.sql"]
    assert "app.py" not in diff.diff_text


def test_directory_outside_a_repository(tmp_path: Path, monkeypatch) -> None:
    outside = tmp_path / "plain"
    outside.mkdir()
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))

    with pytest.raises(NotAGitRepositoryError):
        resolve(outside)
