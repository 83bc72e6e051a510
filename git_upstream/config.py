"""Configuration loading for git-upstream.

Two optional inputs feed a run besides the command line:

- a JSON config file (``.git-upstream.json`` at the repository top level, or
  the path given by ``--config`` / ``GIT_UPSTREAM_CONFIG``) listing preferred
  remotes, validated by ``UpstreamConfig``;
- dotenv files providing ``GIT_UPSTREAM_*`` defaults, which never override
  variables already set in the environment.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from .data_types import UpstreamConfig
from .git_ops import repo_root

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".git-upstream.json"
ENV_FILENAME = ".git-upstream.env"


class ConfigError(ValueError):
    """Raised when a config file cannot be read or fails validation."""


def _env_file_candidates(cwd: Path) -> List[Path]:
    override = os.getenv("GIT_UPSTREAM_ENV_FILE", "").strip()
    if override:
        candidates = []
        for entry in override.split(os.pathsep):
            if not entry.strip():
                continue
            path = Path(entry.strip()).expanduser()
            candidates.append(path if path.is_absolute() else cwd / path)
        return candidates
    return [cwd / ENV_FILENAME]


def load_upstream_env(cwd: Path | None = None) -> List[Path]:
    """Load dotenv files without overriding the real environment.

    Returns:
        The env files that were found and loaded
    """
    base = cwd or Path.cwd()
    loaded = []
    for env_path in _env_file_candidates(base):
        if env_path.is_file():
            load_dotenv(env_path, override=False)
            loaded.append(env_path)
    return loaded


def find_config(explicit: Path | None = None, cwd: Path | None = None) -> Optional[Path]:
    """Locate the config file to use, or None when there is none.

    An explicit path must exist. Otherwise ``.git-upstream.json`` is looked
    up at the repository top level, falling back to the working directory.
    """

    if explicit is not None:
        if not explicit.is_file():
            raise ConfigError(f"Config file not found: {explicit}")
        return explicit

    base = repo_root(cwd) or cwd or Path.cwd()
    candidate = base / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def load_config(path: Path | None) -> UpstreamConfig:
    """Parse and validate a config file; ``None`` yields the default config."""

    if path is None:
        return UpstreamConfig()

    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = json.load(handle)
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise ConfigError(f"Config file {path} is not valid UTF-8: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Config file {path} is not valid JSON: {exc}") from exc

    try:
        config = UpstreamConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config file {path}:\n{exc}") from exc

    logger.debug("Loaded config from %s: %s", path, config.model_dump())
    return config


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "ENV_FILENAME",
    "find_config",
    "load_config",
    "load_upstream_env",
]
