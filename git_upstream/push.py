"""Push a branch to each candidate remote until one accepts it."""

from __future__ import annotations

import logging
from typing import Iterable, List

from .data_types import AttemptOrder, PushOutcome, PushState, RunPolicy
from .git_ops import CollaboratorError, GitCollaborator, push_command
from .utils import COMMAND_STYLE, format_bulleted_list, format_command


class PushFailed(RuntimeError):
    """Raised when a push fails and --fail-fast stops the run."""

    def __init__(self, remote: str, cause: CollaboratorError) -> None:
        super().__init__(f"Failed to push to {remote!r}: {cause}")
        self.remote = remote


class AllRemotesFailed(RuntimeError):
    """Raised when every remote in the attempt order rejected the push."""

    def __init__(self, attempted: Iterable[str]) -> None:
        self.attempted = tuple(attempted)
        super().__init__(f"Failed to push to all remotes:\n{format_bulleted_list(self.attempted)}")


def push_upstream(
    git: GitCollaborator,
    branch: str,
    order: AttemptOrder,
    policy: RunPolicy,
    logger: logging.Logger,
) -> PushOutcome:
    """Push ``branch`` with ``--set-upstream`` to each remote in ``order``.

    Stops at the first remote that accepts the push. A failure moves on to the
    next remote, unless ``policy.fail_fast`` is set.

    Raises:
        PushFailed: On the first failure when ``policy.fail_fast`` is set
        AllRemotesFailed: If no remote accepted the push
    """
    attempted: List[str] = []
    state = PushState.PENDING
    logger.debug(f"Push {state.value}: {len(order)} remote(s) to try")

    for remote in order:
        state = PushState.ATTEMPTING
        attempted.append(remote)
        logger.debug(f"Push {state.value} ({len(attempted)}/{len(order)}): {remote}")
        command = push_command(branch, remote, policy.flags, policy.extra_args)
        logger.info(f"$ {format_command(command)}", extra={"style": COMMAND_STYLE})

        try:
            git.push(branch, remote, policy.flags, policy.extra_args)
        except CollaboratorError as exc:
            if policy.fail_fast:
                state = PushState.FAILED_FAST
                logger.debug(f"Push to {remote} failed ({state.value}): {exc}")
                raise PushFailed(remote, exc) from exc
            logger.debug(f"Push to {remote} failed, trying next remote: {exc}")
            continue

        state = PushState.SUCCEEDED
        logger.debug(f"Pushed {branch} to {remote}; upstream set")
        return PushOutcome(state=state, remote=remote, attempted=tuple(attempted))

    state = PushState.EXHAUSTED
    logger.debug(f"Push {state.value} after {len(attempted)} attempt(s)")
    raise AllRemotesFailed(attempted)


__all__ = ["AllRemotesFailed", "PushFailed", "push_upstream"]
