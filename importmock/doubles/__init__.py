"""
Stand-in callables for tests.
"""

from .equality import deep_equal
from .stub import Call, Stub, stub

__all__ = ["Call", "Stub", "stub", "deep_equal"]
