"""HTTP surface - aiohttp application and request handling."""

from gh_installer.web.app import create_app
from gh_installer.web.handler import InstallHandler

__all__ = ["InstallHandler", "create_app"]
