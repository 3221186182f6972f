"""
Centralized exception hierarchy for importmock.

Every failure raised by importmock indicates a test-authoring defect (wrong
specifier, unused replacement, mismatched expectation). None of them are
caught internally; they are meant to fail the test run loudly.
"""

from typing import Any, List, Optional


# ============================================================================
# Base Exceptions
# ============================================================================


class ImportMockError(Exception):
    """Base exception for all importmock errors."""

    pass


class ConfigurationError(ImportMockError):
    """Raised when the importmock configuration file is invalid."""

    pass


# ============================================================================
# Substitution Exceptions
# ============================================================================


class ResolutionError(ImportMockError, ImportError):
    """Raised when a specifier cannot be mapped to an existing module."""

    def __init__(self, specifier: str, reason: str, package: Optional[str] = None):
        self.specifier = specifier
        self.package = package
        self.reason = reason
        msg = f"Cannot resolve '{specifier}'"
        if package:
            msg += f" relative to '{package}'"
        super().__init__(f"{msg}: {reason}", name=specifier)


class StaleMockError(ImportMockError):
    """Raised when declared replacements were never imported by the target."""

    def __init__(self, target: str, specifiers: List[str]):
        self.target = target
        self.specifiers = list(specifiers)
        super().__init__(
            f"The following imports were not found in {target}: "
            f"{', '.join(self.specifiers)}"
        )


# ============================================================================
# Stub Exceptions
# ============================================================================


class UnexpectedArgumentsError(ImportMockError, AssertionError):
    """Raised when a stub is called with arguments that fail its expectation."""

    def __init__(self, name: Optional[str], expected: Any, received: Any):
        self.name = name
        self.expected = expected
        self.received = received
        label = f'Stub "{name}"' if name else "Stub"
        super().__init__(
            f"{label} called with unexpected arguments.\n"
            f"Expected: {expected!r}\n"
            f"Received: {received!r}"
        )


__all__ = [
    "ImportMockError",
    "ConfigurationError",
    "ResolutionError",
    "StaleMockError",
    "UnexpectedArgumentsError",
]
