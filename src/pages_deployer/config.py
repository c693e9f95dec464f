"""Configuration loading utilities for pages-deployer."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from dotenv import load_dotenv

from .paths import DEFAULT_CONFIG_PATH

# Load .env file if it exists
load_dotenv()

_DEFAULT_NAME = "GitHub Pages Deploy Action"
_DEFAULT_EMAIL = "nobody@github.com"

# Environment variable -> config field, string valued
_ENV_STRINGS = {
    "INPUT_FOLDER": "folder",
    "INPUT_BRANCH": "branch",
    "INPUT_BASE_BRANCH": "base_branch",
    "INPUT_COMMIT_MESSAGE": "commit_message",
    "INPUT_CLEAN_EXCLUDE": "clean_exclude",
    "INPUT_TARGET_FOLDER": "target_folder",
    "INPUT_ACCESS_TOKEN": "access_token",
    "INPUT_GITHUB_TOKEN": "github_token",
    "GITHUB_WORKSPACE": "workspace",
    "GITHUB_SHA": "commit_sha",
}

# Environment variable -> config field, boolean valued
_ENV_FLAGS = {
    "INPUT_CLEAN": "clean",
    "INPUT_SSH": "ssh",
    "INPUT_IS_TEST": "is_test",
    "INPUT_DEBUG": "debug",
}


def str_to_bool(value: Union[str, bool, None]) -> bool:
    """Interpret action inputs such as "true", "1" or "yes"."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return value.strip().lower() in ("true", "1", "yes", "on", "debug")


@dataclass
class DeploymentConfig:
    """Settings for a single deployment run."""

    folder: Optional[str] = None
    branch: Optional[str] = None
    base_branch: Optional[str] = None
    default_branch: str = "master"
    repository_name: Optional[str] = None
    # Remote URL with credentials already embedded
    repository_path: Optional[str] = None
    commit_message: Optional[str] = None
    clean: bool = False
    clean_exclude: Union[List[str], str, None] = None
    target_folder: Optional[str] = None
    workspace: str = "."
    root: str = "."
    is_test: bool = False
    name: str = _DEFAULT_NAME
    email: str = _DEFAULT_EMAIL
    access_token: Optional[str] = None
    github_token: Optional[str] = None
    ssh: bool = False
    debug: bool = False
    # Triggering commit, appended to generated commit messages
    commit_sha: Optional[str] = None
    github_server: str = "github.com"
    token_type: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "DeploymentConfig":
        known = {f.name for f in fields(cls)}
        # Keys starting with an underscore are comments
        cleaned = {k: v for k, v in payload.items() if not k.startswith("_")}
        unknown = sorted(set(cleaned) - known)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**{**cls().__dict__, **cleaned})

    @property
    def secrets(self) -> List[str]:
        """Values that must never appear in logs or reported errors."""
        return [value for value in (self.access_token, self.github_token) if value]


@dataclass
class _Pusher:
    name: Optional[str] = None
    email: Optional[str] = None


def _read_pusher(event_path: Optional[str]) -> _Pusher:
    """Read the pusher identity from the workflow event payload, if any."""
    if not event_path:
        return _Pusher()
    candidate = Path(event_path)
    if not candidate.is_file():
        return _Pusher()
    try:
        with candidate.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except (OSError, ValueError):
        return _Pusher()
    pusher = payload.get("pusher") or {}
    return _Pusher(name=pusher.get("name"), email=pusher.get("email"))


def apply_environment(config: DeploymentConfig, environ: Mapping[str, str]) -> DeploymentConfig:
    """Overlay GitHub Actions style environment variables onto ``config``."""
    for env_name, attr in _ENV_STRINGS.items():
        value = environ.get(env_name)
        if value:
            setattr(config, attr, value)

    for env_name, attr in _ENV_FLAGS.items():
        value = environ.get(env_name)
        if value is not None and value != "":
            setattr(config, attr, str_to_bool(value))

    # The triggering commit doubles as the branch to restore
    if environ.get("GITHUB_SHA"):
        config.default_branch = environ["GITHUB_SHA"]

    repository = environ.get("INPUT_REPOSITORY_NAME") or environ.get("GITHUB_REPOSITORY")
    if repository:
        config.repository_name = repository

    server_url = environ.get("GITHUB_SERVER_URL")
    if server_url:
        config.github_server = server_url.split("://", 1)[-1].rstrip("/")

    pusher = _read_pusher(environ.get("GITHUB_EVENT_PATH"))
    actor = environ.get("GITHUB_ACTOR")
    name = environ.get("INPUT_GIT_CONFIG_NAME") or pusher.name or actor
    if name:
        config.name = name
    email = (
        environ.get("INPUT_GIT_CONFIG_EMAIL")
        or pusher.email
        or (f"{actor}@users.noreply.github.com" if actor else None)
    )
    if email:
        config.email = email

    return config


def load_config(
    path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> DeploymentConfig:
    """Load configuration from defaults, an optional JSON file and the environment.

    Precedence (lowest first):
    - dataclass defaults
    - JSON file at ``path`` (must exist) or ``.pages-deployer.json`` (optional)
    - environment variables (``INPUT_*`` action inputs and ``GITHUB_*`` context)
    """
    if environ is None:
        environ = os.environ

    config = DeploymentConfig()
    candidate: Optional[Path] = None
    if path:
        candidate = Path(path)
        if not candidate.is_file():
            raise FileNotFoundError(f"Could not find configuration file: {candidate}")
    elif Path(DEFAULT_CONFIG_PATH).is_file():
        candidate = Path(DEFAULT_CONFIG_PATH)

    if candidate is not None:
        with candidate.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
        config = DeploymentConfig.from_dict(data)

    return apply_environment(config, environ)
