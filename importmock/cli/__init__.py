"""
Command-line interface for importmock.

Provides developer tooling around the import interceptor:
- ``resolve``: show how a specifier maps to a canonical module
- ``trace``: import a module and print every import it performs
"""

from importmock.cli.parser import CLI, main

__all__ = ["CLI", "main"]
