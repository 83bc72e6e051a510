"""Exit code constants for git-upstream.

Exit Code Ranges:
    0: Success
    1-9: Blockers (git unusable, bad arguments, nothing to push to)
    30-39: Push failures (a push failed under --fail-fast, every remote failed)
    130: Interrupted (Ctrl+C)
"""

from __future__ import annotations

# Success
EXIT_SUCCESS = 0

# Blockers (1-9): preconditions that prevent any push
EXIT_BLOCKER_GIT_ERROR = 1  # git could not be run or a query failed
EXIT_BLOCKER_INVALID_ARGS = 2  # Invalid command-line arguments (click usage errors)
EXIT_BLOCKER_NO_REMOTES = 3  # Repository has no remotes
EXIT_BLOCKER_MISSING_REMOTE = 4  # Requested remote does not exist (--fail-fast)
EXIT_BLOCKER_INVALID_CONFIG = 5  # Config file unreadable or invalid

# Push failures (30-39)
EXIT_PUSH_FAILED = 30  # A push failed and --fail-fast stopped the run
EXIT_PUSH_ALL_REMOTES_FAILED = 31  # Every candidate remote failed

EXIT_INTERRUPTED = 130


def get_exit_code_description(code: int) -> str:
    """Get human-readable description for an exit code.

    Examples:
        >>> get_exit_code_description(EXIT_BLOCKER_NO_REMOTES)
        'Blocker: Repository has no remotes'
        >>> get_exit_code_description(99)
        'Unknown exit code: 99'
    """
    descriptions = {
        EXIT_SUCCESS: "Success",
        EXIT_BLOCKER_GIT_ERROR: "Blocker: Git command failed",
        EXIT_BLOCKER_INVALID_ARGS: "Blocker: Invalid command-line arguments",
        EXIT_BLOCKER_NO_REMOTES: "Blocker: Repository has no remotes",
        EXIT_BLOCKER_MISSING_REMOTE: "Blocker: Requested remote not found",
        EXIT_BLOCKER_INVALID_CONFIG: "Blocker: Invalid configuration file",
        EXIT_PUSH_FAILED: "Push Failure: Push failed with --fail-fast",
        EXIT_PUSH_ALL_REMOTES_FAILED: "Push Failure: Failed to push to all remotes",
        EXIT_INTERRUPTED: "Interrupted",
    }
    return descriptions.get(code, f"Unknown exit code: {code}")


def is_blocker(code: int) -> bool:
    """Check if exit code represents a blocker (nothing was pushed).

    Examples:
        >>> is_blocker(EXIT_BLOCKER_NO_REMOTES)
        True
        >>> is_blocker(EXIT_PUSH_FAILED)
        False
    """
    return 1 <= code <= 9


def is_push_failure(code: int) -> bool:
    """Check if exit code represents a failed push attempt.

    Examples:
        >>> is_push_failure(EXIT_PUSH_ALL_REMOTES_FAILED)
        True
        >>> is_push_failure(EXIT_BLOCKER_GIT_ERROR)
        False
    """
    return 30 <= code <= 39


__all__ = [
    "EXIT_BLOCKER_GIT_ERROR",
    "EXIT_BLOCKER_INVALID_ARGS",
    "EXIT_BLOCKER_INVALID_CONFIG",
    "EXIT_BLOCKER_MISSING_REMOTE",
    "EXIT_BLOCKER_NO_REMOTES",
    "EXIT_INTERRUPTED",
    "EXIT_PUSH_ALL_REMOTES_FAILED",
    "EXIT_PUSH_FAILED",
    "EXIT_SUCCESS",
    "get_exit_code_description",
    "is_blocker",
    "is_push_failure",
]
