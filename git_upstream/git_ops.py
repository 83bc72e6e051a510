"""Git command helpers: the only place git-upstream talks to the ``git`` binary."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Protocol, Sequence, Set, Tuple

from .data_types import PushFlags

logger = logging.getLogger(__name__)


class CollaboratorError(RuntimeError):
    """Raised when git cannot be run or a git command fails."""

    def __init__(self, message: str, args: Sequence[str] = (), stderr: str = "") -> None:
        detail = f"{message}: {stderr}" if stderr else message
        super().__init__(detail)
        self.git_args = tuple(args)
        self.stderr = stderr


class NoRemotesConfigured(CollaboratorError):
    """Raised when the repository has no remotes at all."""

    def __init__(self, args: Sequence[str] = ("remote",)) -> None:
        super().__init__("No Git remotes found", args=args)


@dataclass(frozen=True)
class GitCommandResult:
    """Typed container for git command output."""

    args: Sequence[str]
    stdout: str
    stderr: str
    returncode: int

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def _run_git(
    args: Iterable[str],
    cwd: Path | None = None,
    check: bool = True,
    capture: bool = True,
) -> GitCommandResult:
    """Execute a git command and optionally raise on failure.

    With ``capture=False`` git inherits this process's stdout and stderr, so
    its progress output reaches the terminal directly.
    """

    args = tuple(args)
    cmd = ["git", *args]
    logger.debug("Running git command: %s", " ".join(cmd))
    try:
        result = subprocess.run(cmd, capture_output=capture, text=True, cwd=cwd)
    except OSError as exc:
        raise CollaboratorError(f"failed to execute git: {exc}", args=args) from exc

    git_result = GitCommandResult(
        args=args,
        stdout=(result.stdout or "").strip(),
        stderr=(result.stderr or "").strip(),
        returncode=result.returncode,
    )

    if check and result.returncode != 0:
        raise CollaboratorError(
            f"git {' '.join(args)} failed with exit status {result.returncode}",
            args=args,
            stderr=git_result.stderr,
        )
    return git_result


def push_command(
    branch: str,
    remote: str,
    flags: PushFlags = PushFlags(),
    extra_args: Sequence[str] = (),
) -> list[str]:
    """Build the full ``git push --set-upstream`` argument vector.

    Pass-through options precede the remote; pass-through refspecs follow
    the branch so git never reads one as the repository.

    Examples:
        >>> push_command("main", "origin", extra_args=["--tags", "HEAD:other"])
        ['git', 'push', '--set-upstream', '--tags', 'origin', 'main', 'HEAD:other']
    """

    options, refspecs = split_push_args(extra_args)
    return ["git", "push", "--set-upstream", *flags.as_args(), *options, remote, branch, *refspecs]


# git push options whose value is the following argument.
PUSH_VALUE_OPTIONS = frozenset({"-o", "--push-option", "--repo", "--receive-pack", "--exec"})


def split_push_args(extra_args: Iterable[str]) -> Tuple[List[str], List[str]]:
    """Separate pass-through ``git push`` options from refspecs.

    Examples:
        >>> split_push_args(["--tags", "-o", "ci.skip", "HEAD:other"])
        (['--tags', '-o', 'ci.skip'], ['HEAD:other'])
    """

    options: List[str] = []
    refspecs: List[str] = []
    takes_value = False
    for arg in extra_args:
        if takes_value or arg.startswith("-"):
            options.append(arg)
            takes_value = not takes_value and arg in PUSH_VALUE_OPTIONS
        else:
            refspecs.append(arg)
    return options, refspecs


class GitCollaborator(Protocol):
    """The three repository operations the push core depends on."""

    def current_branch(self) -> str:
        ...

    def list_remotes(self) -> Set[str]:
        ...

    def push(
        self,
        branch: str,
        remote: str,
        flags: PushFlags,
        extra_args: Sequence[str],
    ) -> None:
        ...


class GitCli:
    """``GitCollaborator`` backed by the git command line."""

    def __init__(self, cwd: Path | None = None) -> None:
        self.cwd = cwd

    def current_branch(self) -> str:
        """Return the checked-out branch name."""

        result = _run_git(["rev-parse", "--abbrev-ref", "HEAD"], cwd=self.cwd)
        return result.stdout

    def list_remotes(self) -> Set[str]:
        result = _run_git(["remote"], cwd=self.cwd)
        remotes = {line.strip() for line in result.stdout.splitlines() if line.strip()}
        if not remotes:
            raise NoRemotesConfigured()
        return remotes

    def push(
        self,
        branch: str,
        remote: str,
        flags: PushFlags = PushFlags(),
        extra_args: Sequence[str] = (),
    ) -> None:
        """Run ``git push --set-upstream`` with output streamed to the terminal."""

        args = push_command(branch, remote, flags, extra_args)[1:]
        _run_git(args, cwd=self.cwd, capture=False)


def repo_root(cwd: Path | None = None) -> Optional[Path]:
    """Return the top level of the enclosing work tree, or None outside a repository."""

    try:
        result = _run_git(["rev-parse", "--show-toplevel"], cwd=cwd, check=False)
    except CollaboratorError:
        return None
    if not result.ok or not result.stdout:
        return None
    return Path(result.stdout)


__all__ = [
    "CollaboratorError",
    "GitCli",
    "GitCollaborator",
    "GitCommandResult",
    "NoRemotesConfigured",
    "PUSH_VALUE_OPTIONS",
    "push_command",
    "repo_root",
    "split_push_args",
]
