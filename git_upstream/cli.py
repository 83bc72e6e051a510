"""Command-line entry point for git-upstream.

Usage:
    # Push the current branch to origin (or the first remote that accepts it)
    git-upstream

    # Prefer a specific remote, stop at the first failure
    git-upstream --fail-fast upstream

    # Pass extra arguments through to every `git push`
    git-upstream fork -- --tags
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import NoReturn, Optional, Sequence, Tuple, Type

import click

from .branch import resolve_branch
from .config import ConfigError, find_config, load_config, load_upstream_env
from .data_types import PushFlags, PushOutcome, RunPolicy, UpstreamConfig
from .exit_codes import (
    EXIT_BLOCKER_GIT_ERROR,
    EXIT_BLOCKER_INVALID_ARGS,
    EXIT_BLOCKER_INVALID_CONFIG,
    EXIT_BLOCKER_MISSING_REMOTE,
    EXIT_BLOCKER_NO_REMOTES,
    EXIT_INTERRUPTED,
    EXIT_PUSH_ALL_REMOTES_FAILED,
    EXIT_PUSH_FAILED,
    get_exit_code_description,
    is_blocker,
    is_push_failure,
)
from .git_ops import CollaboratorError, GitCli, GitCollaborator, NoRemotesConfigured
from .push import AllRemotesFailed, PushFailed, push_upstream
from .remotes import MissingPreferredRemote, resolve_attempt_order
from .utils import LOG_LEVELS, PROJECT_NAME, setup_logger

# Subclasses before their bases.
ERROR_EXIT_CODES: Tuple[Tuple[Type[Exception], int], ...] = (
    (NoRemotesConfigured, EXIT_BLOCKER_NO_REMOTES),
    (CollaboratorError, EXIT_BLOCKER_GIT_ERROR),
    (MissingPreferredRemote, EXIT_BLOCKER_MISSING_REMOTE),
    (ConfigError, EXIT_BLOCKER_INVALID_CONFIG),
    (PushFailed, EXIT_PUSH_FAILED),
    (AllRemotesFailed, EXIT_PUSH_ALL_REMOTES_FAILED),
)
FATAL_ERRORS = tuple(error for error, _ in ERROR_EXIT_CODES)


class ConflictingOptions(click.UsageError):
    exit_code = EXIT_BLOCKER_INVALID_ARGS


def exit_code_for(exc: BaseException) -> int:
    for error_type, code in ERROR_EXIT_CODES:
        if isinstance(exc, error_type):
            return code
    raise TypeError(f"no exit code for {type(exc).__name__}")


def exit_with(code: int, logger: logging.Logger) -> NoReturn:
    """Log what ``code`` means at debug level, then exit with it."""

    description = get_exit_code_description(code)
    if is_blocker(code):
        logger.debug(f"Exit {code} ({description}); nothing was pushed")
    elif is_push_failure(code):
        logger.debug(f"Exit {code} ({description}); no upstream was set")
    else:
        logger.debug(f"Exit {code} ({description})")
    sys.exit(code)


def split_remote_and_push_args(
    remote: Optional[str],
    push_args: Sequence[str],
) -> Tuple[Optional[str], Tuple[str, ...]]:
    """Separate the remote from pass-through push arguments.

    Git refuses remote names starting with ``-``, so such a positional is
    the first pass-through argument (``git-upstream -- --tags``) and the
    remote falls back to ``GIT_UPSTREAM_REMOTE``.
    """

    if remote and remote.startswith("-"):
        return os.environ.get("GIT_UPSTREAM_REMOTE") or None, (remote, *push_args)
    return remote or None, tuple(push_args)


def build_policy(
    *,
    remote: Optional[str],
    branch: Optional[str],
    fail_fast: bool,
    flags: PushFlags,
    push_args: Sequence[str],
    config: UpstreamConfig,
) -> RunPolicy:
    return RunPolicy(
        fail_fast=fail_fast or config.fail_fast,
        flags=flags,
        extra_args=tuple(push_args),
        branch=branch,
        remote=remote,
        config_remotes=tuple(config.remotes),
    )


def run_upstream(git: GitCollaborator, policy: RunPolicy, logger: logging.Logger) -> PushOutcome:
    """Resolve the branch, order the remotes, and push until one succeeds."""

    branch = resolve_branch(git, policy.branch, logger)
    order = resolve_attempt_order(git, policy, logger)
    return push_upstream(git, branch, order, policy, logger)


@click.command(context_settings={"help_option_names": ["-h", "--help"], "max_content_width": 100})
@click.version_option(package_name=PROJECT_NAME, prog_name=PROJECT_NAME)
@click.option(
    "--log",
    default="info",
    show_default=True,
    envvar="GIT_UPSTREAM_LOG",
    type=click.Choice(list(LOG_LEVELS), case_sensitive=False),
    help="Console log level. Try `debug` or `trace`.",
)
@click.option(
    "--log-file",
    envvar="GIT_UPSTREAM_LOG_FILE",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also write a debug log to this file.",
)
@click.option(
    "--fail-fast",
    is_flag=True,
    help="Abort on the first failed push instead of trying the next remote.",
)
@click.option("--branch", help="The branch to push. Defaults to the current branch.")
@click.option(
    "--config",
    "config_path",
    envvar="GIT_UPSTREAM_CONFIG",
    type=click.Path(dir_okay=False, path_type=Path),
    help="JSON config file. Defaults to .git-upstream.json at the repository root.",
)
@click.option("--force-with-lease", is_flag=True, help="Pass --force-with-lease to git push.")
@click.option("--force", "-f", is_flag=True, help="Pass --force to git push.")
@click.option("--no-verify", "skip_hooks", is_flag=True, help="Skip the pre-push hook.")
@click.argument("remote", required=False, envvar="GIT_UPSTREAM_REMOTE")
@click.argument("push_args", nargs=-1, type=click.UNPROCESSED)
def cli(
    remote: Optional[str],
    push_args: Tuple[str, ...],
    log: str,
    log_file: Optional[Path],
    fail_fast: bool,
    branch: Optional[str],
    config_path: Optional[Path],
    force_with_lease: bool,
    force: bool,
    skip_hooks: bool,
) -> None:
    """A shortcut for `git push --set-upstream REMOTE BRANCH`.

    Tries REMOTE first (default: `origin`), then the remotes listed in the
    config file, then every other remote, until a push succeeds. Arguments
    after `--` are passed through to every `git push`.
    """
    if force and force_with_lease:
        raise ConflictingOptions("--force and --force-with-lease cannot be used together")

    remote, push_args = split_remote_and_push_args(remote, push_args)
    logger = setup_logger(log, log_file=log_file)

    try:
        config = load_config(find_config(config_path))
        policy = build_policy(
            remote=remote,
            branch=branch,
            fail_fast=fail_fast,
            flags=PushFlags(force=force, force_with_lease=force_with_lease, skip_hooks=skip_hooks),
            push_args=push_args,
            config=config,
        )
        outcome = run_upstream(GitCli(), policy, logger)
    except KeyboardInterrupt:
        exit_with(EXIT_INTERRUPTED, logger)
    except FATAL_ERRORS as exc:
        logger.error(str(exc))
        exit_with(exit_code_for(exc), logger)

    logger.debug(f"Upstream set to {outcome.remote}")


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Console script entry point; loads dotenv defaults before parsing options."""

    load_upstream_env()
    cli.main(args=list(argv) if argv is not None else None, prog_name=PROJECT_NAME)


if __name__ == "__main__":  # pragma: no cover - manual invocation
    main()
