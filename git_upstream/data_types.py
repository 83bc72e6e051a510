"""Data models for git-upstream runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_REMOTE = "origin"


class PushState(str, Enum):
    """States of the push orchestrator."""
    PENDING = "pending"
    ATTEMPTING = "attempting"
    SUCCEEDED = "succeeded"
    FAILED_FAST = "failed_fast"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class PushFlags:
    """Policy-driven toggles applied to every push attempt."""

    force: bool = False
    force_with_lease: bool = False
    skip_hooks: bool = False

    def as_args(self) -> Tuple[str, ...]:
        args: List[str] = []
        if self.force_with_lease:
            args.append("--force-with-lease")
        if self.force:
            args.append("--force")
        if self.skip_hooks:
            args.append("--no-verify")
        return tuple(args)


@dataclass(frozen=True)
class RunPolicy:
    """Immutable per-run configuration built from the CLI and the config file."""

    fail_fast: bool = False
    flags: PushFlags = field(default_factory=PushFlags)
    extra_args: Tuple[str, ...] = ()
    branch: Optional[str] = None
    remote: Optional[str] = None
    config_remotes: Tuple[str, ...] = ()


@dataclass(frozen=True)
class AttemptOrder:
    """Deduplicated, ordered remotes to try.

    ``skipped`` holds preferred names that were dropped because the
    repository does not have them.
    """

    remotes: Tuple[str, ...]
    skipped: Tuple[str, ...] = ()

    def __iter__(self) -> Iterator[str]:
        return iter(self.remotes)

    def __len__(self) -> int:
        return len(self.remotes)


@dataclass(frozen=True)
class PushOutcome:
    state: PushState
    remote: Optional[str]
    attempted: Tuple[str, ...]

    @property
    def ok(self) -> bool:
        return self.state is PushState.SUCCEEDED


class UpstreamConfig(BaseModel):
    """Contents of a ``.git-upstream.json`` file."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    remotes: List[str] = Field(default_factory=list)
    fail_fast: bool = False

    @field_validator("remotes")
    @classmethod
    def _strip_remote_names(cls, value: List[str]) -> List[str]:
        names = [name.strip() for name in value]
        if any(not name for name in names):
            raise ValueError("remote names must not be empty")
        return names


__all__ = [
    "DEFAULT_REMOTE",
    "AttemptOrder",
    "PushFlags",
    "PushOutcome",
    "PushState",
    "RunPolicy",
    "UpstreamConfig",
]
