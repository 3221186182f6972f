"""
pytest integration for importmock.

Registered through the ``pytest11`` entry point, so the fixtures are
available in any project that installs importmock:

    def test_report(mock_load, stub_factory):
        now = stub_factory("now").returns(42)
        report = mock_load("myapp.report", {"myapp.clock": SimpleNamespace(now=now)})
        assert report.timestamp() == 42

Every test is also checked for substitutions left pending in the
process-wide registry; leftovers fail the test and are cleared so they
can't leak into the next one.
"""

import logging
from typing import Callable, List

import pytest

from importmock.core.registry import get_registry
from importmock.core.orchestrator import mock_load as _mock_load
from importmock.doubles.stub import Stub, stub

logger = logging.getLogger(__name__)


@pytest.fixture
def mock_load() -> Callable:
    """The ``importmock.mock_load`` entry point."""
    return _mock_load


@pytest.fixture
def stub_factory():
    """Factory creating stubs that are cleared when the test ends."""
    created: List[Stub] = []

    def _create(name=None) -> Stub:
        new_stub = stub(name)
        created.append(new_stub)
        return new_stub

    yield _create

    for created_stub in created:
        created_stub.clear()


@pytest.fixture(autouse=True)
def _importmock_registry_guard():
    """Fail a test that leaves pending substitutions behind."""
    yield
    registry = get_registry()
    if not registry.is_empty():
        leftovers = registry.pending_specifiers()
        registry.clear()
        pytest.fail(
            f"importmock substitutions left pending after test: {', '.join(leftovers)}",
            pytrace=False,
        )
