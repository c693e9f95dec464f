"""Remote URL and token helpers."""

from __future__ import annotations

from ..config import DeploymentConfig


def generate_repository_path(config: DeploymentConfig) -> str:
    """Build the push/fetch URL for ``config.repository_name``.

    SSH deployments use the scp-like form and rely on an already loaded deploy
    key; token deployments embed the token in an HTTPS URL.
    """
    server = config.github_server
    repository = config.repository_name
    if config.ssh:
        return f"git@{server}:{repository}"
    token = config.access_token or f"x-access-token:{config.github_token}"
    return f"https://{token}@{server}/{repository}.git"


def generate_token_type(config: DeploymentConfig) -> str:
    if config.ssh:
        return "SSH Deploy Key"
    if config.access_token:
        return "Deploy Token"
    if config.github_token:
        return "GitHub Token"
    return "..."


def has_credentials(config: DeploymentConfig) -> bool:
    return bool(config.access_token or config.github_token or config.ssh)
