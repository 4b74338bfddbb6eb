"""Pytest configuration and fixtures for gh-installer tests."""

import logging

import pytest

from gh_installer.config import ServerConfig
from tests.factories import API_URL, FakeClock


@pytest.fixture(autouse=True)
def enable_log_propagation():
    """Enable log propagation so caplog sees gh_installer records.

    The root gh_installer logger is a terminal node in production.
    """
    original_propagation = {}
    for name in list(logging.Logger.manager.loggerDict.keys()):
        if name.startswith("gh_installer"):
            logger = logging.getLogger(name)
            original_propagation[name] = logger.propagate
            logger.propagate = True

    yield

    for name, propagate_value in original_propagation.items():
        logging.getLogger(name).propagate = propagate_value


@pytest.fixture
def clock() -> FakeClock:
    """Clock frozen at T0."""
    return FakeClock()


@pytest.fixture
def config() -> ServerConfig:
    """Server config with an explicit default user and no token."""
    return ServerConfig(user="jpillora", token="", api_url=API_URL)
