"""Work out which remotes to push to, and in what order.

Preferred remotes (the command-line remote first, then the config file list,
defaulting to ``origin``) come first in the order given, skipping any the
repository does not have. Every other known remote follows in lexicographic
order, so each remote is eventually tried even if nobody listed it.
"""

from __future__ import annotations

import logging
from typing import AbstractSet, Iterable, List, Optional, Sequence

from .data_types import DEFAULT_REMOTE, AttemptOrder, RunPolicy
from .git_ops import GitCollaborator, NoRemotesConfigured
from .utils import format_bulleted_list


class MissingPreferredRemote(LookupError):
    """Raised when the remote named on the command line does not exist under --fail-fast."""

    def __init__(self, remote: str, available: Iterable[str]) -> None:
        self.remote = remote
        self.available = tuple(sorted(available))
        super().__init__(missing_remote_message(remote, self.available))


def missing_remote_message(remote: str, available: Iterable[str]) -> str:
    return f"Remote {remote!r} not found. Available Git remotes:\n{format_bulleted_list(sorted(available))}"


def build_preference_list(cli_remote: Optional[str], config_remotes: Sequence[str] = ()) -> List[str]:
    """Combine the command-line remote and the config list into one ordered list.

    Examples:
        >>> build_preference_list("fork", ["upstream", "fork"])
        ['fork', 'upstream']
        >>> build_preference_list(None, [])
        ['origin']
    """

    preferences: List[str] = []
    if cli_remote:
        preferences.append(cli_remote)
    preferences.extend(config_remotes)
    if not preferences:
        return [DEFAULT_REMOTE]
    return list(dict.fromkeys(preferences))


def order_remotes(
    known: AbstractSet[str],
    preferences: Sequence[str],
    logger: logging.Logger,
    strict: Optional[str] = None,
    warn_missing: bool = True,
) -> AttemptOrder:
    """Build the attempt order from the known remotes and the preference list.

    Args:
        known: Remotes the repository has
        preferences: Remotes to try first, in order
        logger: Receives a warning for each preferred remote that is missing
        strict: A preferred remote whose absence is fatal rather than a warning
        warn_missing: When False, missing preferred remotes are only logged at debug level

    Raises:
        NoRemotesConfigured: If ``known`` is empty
        MissingPreferredRemote: If ``strict`` is not a known remote
    """
    if not known:
        raise NoRemotesConfigured()

    pool = set(known)
    ordered: List[str] = []
    skipped: List[str] = []

    for name in dict.fromkeys(preferences):
        if name in pool:
            ordered.append(name)
            pool.discard(name)
            continue
        if strict is not None and name == strict:
            raise MissingPreferredRemote(name, known)
        skipped.append(name)
        if warn_missing:
            logger.warning(missing_remote_message(name, known))
        else:
            logger.debug(f"Default remote {name!r} not found; trying the remaining remotes")

    ordered.extend(sorted(pool))
    return AttemptOrder(remotes=tuple(ordered), skipped=tuple(skipped))


def resolve_attempt_order(
    git: GitCollaborator,
    policy: RunPolicy,
    logger: logging.Logger,
) -> AttemptOrder:
    """Query the repository's remotes and order them according to ``policy``."""

    known = git.list_remotes()
    preferences = build_preference_list(policy.remote, policy.config_remotes)
    explicit = bool(policy.remote or policy.config_remotes)
    order = order_remotes(
        known,
        preferences,
        logger,
        strict=policy.remote if policy.fail_fast else None,
        warn_missing=explicit,
    )
    logger.debug(f"Attempt order: {', '.join(order.remotes)}")
    return order


__all__ = [
    "MissingPreferredRemote",
    "NoRemotesConfigured",
    "build_preference_list",
    "missing_remote_message",
    "order_remotes",
    "resolve_attempt_order",
]
