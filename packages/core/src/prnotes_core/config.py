from pathlib import Path
from typing import Optional

import yaml

from prnotes_core.errors import ConfigError
from prnotes_core.models import NotesConfig

DEFAULT_CONFIG: dict = {
    "org": None,
    "repo": None,
    "github_token": None,  # GITHUB_TOKEN and the gh CLI are consulted by prnotes_cli.auth
    "stop_at": None,  # PR number to stop at; None = walk every closed PR
    "include_commits": False,
    "since_latest_release": False,
    "include_author": False,
}

_FLAGS = ("include_commits", "since_latest_release", "include_author")


def load_config(config_path: str = ".prnotes.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .prnotes.yml in the current directory
      3. CLI argument overrides
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        if not isinstance(file_config, dict):
            raise ConfigError(f"{config_path}: expected a mapping at the top level")
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    return config


def _name(config: dict, key: str) -> str:
    # YAML reads all-digit names such as `repo: 2048` as integers.
    value = config.get(key)
    if value is None:
        raise ConfigError(f"{key} is required")
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ConfigError(f"{key} must be a name, got {value!r}")
    name = str(value).strip()
    if not name:
        raise ConfigError(f"{key} is required")
    return name


def _flag(config: dict, key: str) -> bool:
    value = config.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ConfigError(f"{key} must be true or false, got {value!r}")
    return value


def build_notes_config(config: dict) -> NotesConfig:
    """Turn a merged config dict into a validated NotesConfig.

    Raises ConfigError for a missing org or repo, a non-integer stop_at, or a
    flag that is not a YAML boolean (``'false'`` in quotes is a string).
    """
    org = _name(config, "org")
    repo = _name(config, "repo")

    stop_at = config.get("stop_at")
    if stop_at is not None:
        try:
            stop_at = int(stop_at)
        except (TypeError, ValueError):
            raise ConfigError(f"stop_at must be a PR number, got {stop_at!r}")

    flags = {key: _flag(config, key) for key in _FLAGS}

    return NotesConfig(
        org=org,
        repo=repo,
        github_token=config.get("github_token") or None,
        stop_at=stop_at,
        **flags,
    )
