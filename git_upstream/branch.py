"""Resolve which branch to push."""

from __future__ import annotations

import logging
from typing import Optional

from .git_ops import CollaboratorError, GitCollaborator


def resolve_branch(
    git: GitCollaborator,
    override: Optional[str],
    logger: logging.Logger,
) -> str:
    """Return the branch to push.

    An explicit override is returned unchanged without checking that the
    branch exists. Otherwise the checked-out branch is asked for; a detached
    HEAD (reported by git as ``HEAD``) has no branch name to push.

    Raises:
        CollaboratorError: If the current branch cannot be determined
    """
    if override is not None:
        logger.debug(f"Using branch from --branch: {override}")
        return override

    branch = git.current_branch().strip()
    if not branch or branch == "HEAD":
        raise CollaboratorError(
            "Cannot determine the current branch (detached HEAD?); pass --branch",
            args=("rev-parse", "--abbrev-ref", "HEAD"),
        )
    logger.debug(f"Current branch: {branch}")
    return branch


__all__ = ["resolve_branch"]
