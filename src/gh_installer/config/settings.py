"""Server configuration loading.

Settings are resolved in layers, later layers winning:

1. built-in defaults
2. ``settings.conf`` (INI) in the config directory
3. environment variables
4. explicit overrides (command line flags)

The result is a frozen ServerConfig passed to the query builder and the
request handler; nothing reads configuration from module globals.
"""

import configparser
import os
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from gh_installer.constants import (
    CONFIG_DIR_ENV,
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_HOST,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PORT,
    DEFAULT_USER,
    GITHUB_API_URL,
    SEARCH_URL,
)

SETTINGS_FILENAME = "settings.conf"
SECTION_SERVER = "server"
SECTION_GITHUB = "github"

# INI key -> ServerConfig field, per section
_INI_KEYS = {
    configparser.DEFAULTSECT: {
        "log_level": "log_level",
        "console_log_level": "console_log_level",
        "log_file": "log_file",
    },
    SECTION_SERVER: {
        "host": "host",
        "port": "port",
    },
    SECTION_GITHUB: {
        "user": "user",
        "token": "token",
        "force_user": "force_user",
        "force_repo": "force_repo",
        "api_url": "api_url",
        "search_url": "search_url",
    },
}

_ENV_KEYS = {
    "HTTP_HOST": "host",
    "PORT": "port",
    "DEFAULT_USER": "user",
    "GITHUB_TOKEN": "token",
    "FORCE_USER": "force_user",
    "FORCE_REPO": "force_repo",
}


@dataclass(frozen=True, slots=True)
class ServerConfig:
    """Read-only server settings.

    Attributes:
        host: Interface to listen on
        port: Port to listen on
        user: Default repository owner when the path has none
        token: GitHub API token (empty for anonymous access)
        force_user: Owner that overrides every request when set
        force_repo: Repository that overrides every request when set
        api_url: Base URL of the GitHub API
        search_url: Search endpoint used to guess unknown owners
        log_level: File log level
        console_log_level: Console log level
        log_file: Optional rotating log file path

    """

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    user: str = DEFAULT_USER
    token: str = ""
    force_user: str = ""
    force_repo: str = ""
    api_url: str = GITHUB_API_URL
    search_url: str = SEARCH_URL
    log_level: str = DEFAULT_LOG_LEVEL
    console_log_level: str = DEFAULT_CONSOLE_LOG_LEVEL
    log_file: Path | None = None


def default_config_dir() -> Path:
    """Return the configuration directory.

    ``INSTALLER_CONFIG_DIR`` overrides the default
    ``~/.config/gh-installer``.
    """
    env_dir = os.getenv(CONFIG_DIR_ENV)
    if env_dir:
        return Path(env_dir).expanduser()
    return Path.home() / ".config" / "gh-installer"


def _coerce(name: str, value: Any) -> Any:
    """Convert a raw string setting to the ServerConfig field type."""
    if name == "port":
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            msg = f"Invalid port: {value!r}"
            raise ValueError(msg) from e
    if name == "log_file":
        return Path(value).expanduser() if value else None
    if name in ("log_level", "console_log_level"):
        return str(value).upper()
    return str(value).strip()


def read_settings_file(settings_file: Path) -> dict[str, Any]:
    """Read recognised keys from an INI settings file.

    Missing files yield no settings. Unknown keys and sections are ignored.
    """
    if not settings_file.exists():
        return {}

    parser = configparser.ConfigParser(
        inline_comment_prefixes=("#", ";"),
        interpolation=None,
    )
    parser.read(settings_file, encoding="utf-8")

    values: dict[str, Any] = {}
    for key, name in _INI_KEYS[configparser.DEFAULTSECT].items():
        if key in parser.defaults():
            values[name] = parser.defaults()[key]
    for section in (SECTION_SERVER, SECTION_GITHUB):
        if not parser.has_section(section):
            continue
        for key, name in _INI_KEYS[section].items():
            if parser.has_option(section, key):
                values[name] = parser.get(section, key)
    return values


def read_environment(environ: Mapping[str, str]) -> dict[str, Any]:
    """Collect settings from environment variables that are set."""
    return {
        name: environ[key]
        for key, name in _ENV_KEYS.items()
        if environ.get(key)
    }


def load_config(
    config_dir: Path | None = None,
    environ: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> ServerConfig:
    """Build a ServerConfig from file, environment and overrides.

    Args:
        config_dir: Directory holding settings.conf
            (defaults to default_config_dir())
        environ: Environment mapping (defaults to os.environ)
        overrides: Explicit values, typically parsed CLI flags; None values
            are ignored

    Returns:
        Resolved configuration

    Raises:
        ValueError: If a setting cannot be converted

    """
    config_dir = config_dir or default_config_dir()
    environ = os.environ if environ is None else environ

    values: dict[str, Any] = {}
    values.update(read_settings_file(config_dir / SETTINGS_FILENAME))
    values.update(read_environment(environ))
    if overrides:
        values.update({k: v for k, v in overrides.items() if v is not None})

    known = {f.name for f in fields(ServerConfig)}
    coerced = {
        name: _coerce(name, value)
        for name, value in values.items()
        if name in known
    }
    return replace(ServerConfig(), **coerced)
