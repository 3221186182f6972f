"""
importmock: scoped import substitution and call-recording stubs for tests.

    from importmock import mock_load, stub

    fetch = stub("fetch").returns({"status": "ok"})
    client = mock_load("myapp.client", {"myapp.http": SimpleNamespace(fetch=fetch)})
"""

__version__ = "0.1.0"

from importmock.core import (  # noqa: E402
    ImportMockError,
    ResolutionError,
    StaleMockError,
    UnexpectedArgumentsError,
    mock_load,
)
from importmock.doubles import Call, Stub, stub  # noqa: E402

__all__ = [
    "__version__",
    "mock_load",
    "stub",
    "Stub",
    "Call",
    "ImportMockError",
    "ResolutionError",
    "StaleMockError",
    "UnexpectedArgumentsError",
]
