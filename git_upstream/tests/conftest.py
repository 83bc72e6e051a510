"""Shared fixtures for git-upstream tests."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Set, Tuple

import pytest

from git_upstream.data_types import PushFlags
from git_upstream.git_ops import CollaboratorError, NoRemotesConfigured


@dataclass
class FakeGit:
    """In-memory collaborator that records push attempts."""

    remotes: Set[str] = field(default_factory=set)
    branch: str = "main"
    failing: Set[str] = field(default_factory=set)
    interrupting: Set[str] = field(default_factory=set)
    branch_error: Optional[str] = None
    pushes: List[Tuple[str, str, PushFlags, Tuple[str, ...]]] = field(default_factory=list)
    branch_queries: int = 0

    def current_branch(self) -> str:
        self.branch_queries += 1
        if self.branch_error:
            raise CollaboratorError(self.branch_error, args=("rev-parse", "--abbrev-ref", "HEAD"))
        return self.branch

    def list_remotes(self) -> Set[str]:
        if not self.remotes:
            raise NoRemotesConfigured()
        return set(self.remotes)

    def push(self, branch: str, remote: str, flags: PushFlags, extra_args: Sequence[str]) -> None:
        self.pushes.append((branch, remote, flags, tuple(extra_args)))
        if remote in self.interrupting:
            raise KeyboardInterrupt
        if remote in self.failing:
            raise CollaboratorError(
                f"git push --set-upstream {remote} {branch} failed with exit status 1",
                args=("push", "--set-upstream", remote, branch),
                stderr="! [rejected]",
            )

    @property
    def pushed_remotes(self) -> List[str]:
        return [remote for _, remote, _, _ in self.pushes]


@pytest.fixture
def fake_git() -> Callable[..., FakeGit]:
    """Factory for FakeGit collaborators."""

    def _make(*remotes: str, **kwargs) -> FakeGit:
        return FakeGit(remotes=set(remotes), **kwargs)

    return _make


@pytest.fixture
def logger(caplog: pytest.LogCaptureFixture) -> logging.Logger:
    caplog.set_level(logging.DEBUG)
    return logging.getLogger("git_upstream.tests")


def git(*args: str, cwd: Path) -> str:
    result = subprocess.run(["git", *args], cwd=cwd, check=True, capture_output=True, text=True)
    return result.stdout.strip()


@pytest.fixture
def run_git() -> Callable[..., str]:
    return git


@pytest.fixture
def test_repo(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a git repository with one commit on ``main`` and no remotes.

    Returns:
        Path to the test repository
    """
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    repo = tmp_path / "test_repo"
    repo.mkdir()

    git("init", cwd=repo)
    git("config", "user.name", "Test User", cwd=repo)
    git("config", "user.email", "test@example.com", cwd=repo)
    git("config", "commit.gpgsign", "false", cwd=repo)

    (repo / "README.md").write_text("# Test Repository\n")
    git("add", ".", cwd=repo)
    git("commit", "-m", "Initial commit", cwd=repo)
    git("branch", "-M", "main", cwd=repo)

    return repo


@pytest.fixture
def bare_remote(tmp_path: Path) -> Callable[[str], Path]:
    """Factory creating bare repositories to use as push targets."""

    def _make(name: str) -> Path:
        path = tmp_path / f"{name}.git"
        subprocess.run(["git", "init", "--bare", str(path)], check=True, capture_output=True)
        return path

    return _make
