"""Configuration - settings loading and token lookup."""

from gh_installer.config.settings import (
    ServerConfig,
    default_config_dir,
    load_config,
)
from gh_installer.config.token import (
    KeyringTokenStore,
    resolve_token,
    validate_github_token,
)

__all__ = [
    "KeyringTokenStore",
    "ServerConfig",
    "default_config_dir",
    "load_config",
    "resolve_token",
    "validate_github_token",
]
