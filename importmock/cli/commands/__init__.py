"""
CLI command implementations.

Each module exposes a ``run(args) -> int`` function returning the exit code.
"""
