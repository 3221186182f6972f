"""
Diagnostic trace of intercepted imports.

When enabled (``IMPORTMOCK_DEBUG=1`` or ``debug: true`` in the config file)
every import seen by the interceptor and every substitution decision is
logged to the ``importmock.trace`` logger, optionally followed by the call
sites that triggered it.
"""

import logging
import sys
import traceback
from pathlib import Path
from typing import IO, List, Optional

from importmock.core import colors
from importmock.core.config import ImportMockConfig, load_config

TRACE_LOGGER_NAME = "importmock.trace"
TRACE_PREFIX = "IMPORTMOCK_DEBUG: "

logger = logging.getLogger(TRACE_LOGGER_NAME)

_PACKAGE_DIR = str(Path(__file__).resolve().parent.parent)


def _is_user_frame(filename: str) -> bool:
    if not filename or filename.startswith("<"):
        return False
    parts = Path(filename).parts
    if "site-packages" in parts or "importlib" in parts:
        return False
    return not str(Path(filename).resolve()).startswith(_PACKAGE_DIR)


def format_call_sites(limit: int = 10) -> str:
    """
    Render the user-code call sites of the current stack.

    Frames from importlib's bootstrap, installed packages and importmock
    itself are hidden.

    Args:
        limit: Maximum number of frames to render

    Returns:
        Newline-prefixed listing, or an empty string if no user frame is left
    """
    frames = [
        frame for frame in reversed(traceback.extract_stack()) if _is_user_frame(frame.filename)
    ][:limit]
    lines = [
        colors.grey(f"  at {frame.filename}:{frame.lineno} in {frame.name}")
        for frame in frames
    ]
    return "\n" + "\n".join(lines) if lines else ""


class ImportTracer:
    """
    Reporter for the import diagnostic trace.

    The tracer is cheap to call when disabled: ``report`` returns before
    formatting anything, and callers can check ``enabled`` to skip building
    messages altogether.
    """

    def __init__(self, enabled: bool = False, stack: bool = True):
        self._enabled = enabled
        self.stack = stack
        self._handler: Optional[logging.Handler] = None
        self._propagate = logger.propagate
        if enabled:
            self._attach_handler(sys.stderr)

    @classmethod
    def from_config(cls, config: Optional[ImportMockConfig] = None) -> "ImportTracer":
        """Create a tracer configured from ``load_config()``."""
        if config is None:
            config = load_config()
        colors.configure(config.color, sys.stderr)
        return cls(enabled=config.debug, stack=config.stack)

    @property
    def enabled(self) -> bool:
        return self._enabled

    def enable(self, stack: Optional[bool] = None, stream: Optional[IO[str]] = None) -> None:
        """
        Turn the trace on.

        Args:
            stack: Override whether call sites are appended
            stream: Stream the trace handler writes to (default: stderr)
        """
        if stack is not None:
            self.stack = stack
        self._enabled = True
        self._attach_handler(stream or sys.stderr)

    def disable(self) -> None:
        """Turn the trace off and detach its handler."""
        self._enabled = False
        if self._handler is not None:
            logger.removeHandler(self._handler)
            logger.propagate = self._propagate
            self._handler = None

    def _attach_handler(self, stream: IO[str]) -> None:
        if self._handler is not None:
            logger.removeHandler(self._handler)
        else:
            self._propagate = logger.propagate
        # The handler is the only output, even when the root logger is configured
        logger.propagate = False
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(TRACE_PREFIX + "%(message)s"))
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)
        self._handler = handler

    def report(self, message: str) -> None:
        """Log one trace message if the trace is enabled."""
        if not self._enabled:
            return
        if self.stack:
            message += format_call_sites()
        logger.debug(message)

    def import_seen(self, specifier: str, name: str) -> None:
        self.report(f"import: {colors.bold(specifier)} [{name}]")

    def substituted(self, specifier: str, name: str, requester: str) -> None:
        self.report(
            f"import: {colors.green('REPLACING WITH MOCK')} {colors.bold(specifier)} "
            f"[{name}] in {requester}"
        )

    def registered(self, specifier: str, name: str, owner: str) -> None:
        self.report(f"will replace: {specifier} [{name}] for {owner}")

    def mocking(self, target: str, name: str) -> None:
        self.report(f"mocking: {colors.bold(target)} [{name}]")

    def stale(self, target: str, specifiers: List[str]) -> None:
        self.report(
            f"{colors.red('UNUSED MOCKS')} in {colors.bold(target)}: {', '.join(specifiers)}"
        )


__all__ = [
    "ImportTracer",
    "format_call_sites",
    "TRACE_LOGGER_NAME",
    "TRACE_PREFIX",
]
