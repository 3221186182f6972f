"""
Pytest configuration and shared fixtures for importmock tests.
"""

import pytest

import importmock.pytest_plugin
from importmock.core import colors
from importmock.core.config import clear_config_cache

# Import test fixtures to make them available to all tests
# ruff: noqa: F401
from tests.fixtures.packages import (
    package_factory,
    greeting_package,
    private_interceptor,
)


def pytest_configure(config):
    """Register the importmock plugin when it isn't installed as an entry point."""
    if not config.pluginmanager.is_registered(importmock.pytest_plugin):
        config.pluginmanager.register(importmock.pytest_plugin, "importmock.pytest_plugin")


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep environment toggles and colour state from leaking between tests."""
    for var in (
        "IMPORTMOCK_DEBUG",
        "IMPORTMOCK_COLOR",
        "IMPORTMOCK_STACK",
        "IMPORTMOCK_CONFIG",
        "NO_COLOR",
        "FORCE_COLOR",
        "TTY_COMPATIBLE",
    ):
        monkeypatch.delenv(var, raising=False)
    clear_config_cache()
    was_enabled = colors.is_enabled()
    colors.set_enabled(False)
    yield
    colors.set_enabled(was_enabled)
    clear_config_cache()
