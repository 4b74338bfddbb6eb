"""Command-line entry point for the gh-installer server.

Parses flags, loads configuration, sets up logging and runs the aiohttp
application on a uvloop event loop.
"""

import argparse
import sys
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path

import uvloop
from aiohttp import web

from gh_installer import __version__
from gh_installer.config import ServerConfig, load_config, resolve_token
from gh_installer.logger import configure_logging, get_logger
from gh_installer.web import create_app

logger = get_logger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the command-line parser.

    Flags default to None so unset flags do not override settings.conf
    or environment values.
    """
    parser = argparse.ArgumentParser(
        prog="gh-installer",
        description="Serve install scripts for GitHub release binaries",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --port 8080
  %(prog)s --user myorg            # default owner for /<program> paths
  %(prog)s --force-user me --force-repo tool

  curl -fsSL http://localhost:3000/zyedidia/micro | sh
  curl -fsSL http://localhost:3000/micro@v2.0.10! | sh
        """,
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument("--host", help="interface to listen on")
    parser.add_argument("--port", type=int, help="port to listen on")
    parser.add_argument(
        "--user", help="default user when not provided in the URL"
    )
    parser.add_argument(
        "--force-user", dest="force_user", help="lock the installer to a user"
    )
    parser.add_argument(
        "--force-repo", dest="force_repo", help="lock the installer to a repo"
    )
    parser.add_argument(
        "--config-dir",
        dest="config_dir",
        type=Path,
        help="directory containing settings.conf",
    )
    parser.add_argument(
        "--log-level",
        dest="console_log_level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="console log level",
    )
    parser.add_argument(
        "--log-file", dest="log_file", type=Path, help="rotating log file"
    )
    return parser


def build_config(argv: Sequence[str] | None = None) -> ServerConfig:
    """Parse arguments and resolve the full server configuration."""
    args = vars(create_parser().parse_args(argv))
    config_dir = args.pop("config_dir")
    config = load_config(config_dir=config_dir, overrides=args)
    return replace(config, token=resolve_token(config.token))


def main(argv: Sequence[str] | None = None) -> None:
    """Run the installer server until interrupted."""
    try:
        config = build_config(argv)
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        sys.exit(2)

    configure_logging(
        config.console_log_level, config.log_level, config.log_file
    )
    logger.info(
        "Default user is '%s', GitHub token %s",
        config.user,
        "set" if config.token else "not set",
    )
    if config.force_user or config.force_repo:
        logger.info(
            "Forcing %s/%s",
            config.force_user or "*",
            config.force_repo or "*",
        )

    logger.info("Listening on http://%s:%d", config.host, config.port)
    web.run_app(
        create_app(config),
        host=config.host,
        port=config.port,
        loop=uvloop.new_event_loop(),
        print=None,
    )
    logger.info("Server stopped")


if __name__ == "__main__":
    main()
