"""git-upstream: push the current branch and set its upstream, falling back across remotes."""

from . import branch, config, data_types, exit_codes, git_ops, push, remotes, utils

__all__ = [
    "branch",
    "config",
    "data_types",
    "exit_codes",
    "git_ops",
    "push",
    "remotes",
    "utils",
]
