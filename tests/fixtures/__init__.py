"""Test fixtures for importmock tests.

- packages: throw-away Python packages written to ``tmp_path`` and put on
  ``sys.path``, plus a private interceptor that is removed after the test

Import fixtures in your tests using:
    from tests.fixtures.packages import package_factory
"""

__all__ = [
    "packages",
]
