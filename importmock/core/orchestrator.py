"""
Loading a module under test with some of its imports replaced.

Usage:
    from types import SimpleNamespace
    from importmock import mock_load

    def test_report_uses_clock():
        clock = SimpleNamespace(now=lambda: 42)
        report = mock_load("myapp.report", {"myapp.clock": clock})
        assert report.timestamp() == 42

Only the imports executed by ``myapp.report`` itself are replaced; any other
module importing ``myapp.clock`` keeps getting the real one. Each call
imports a fresh instance of the target, and that instance is never left
behind in ``sys.modules``.
"""

import importlib
import inspect
import logging
import sys
from typing import Any, List, Mapping, Optional, Tuple

from importmock.core.exceptions import StaleMockError
from importmock.core.interceptor import ImportInterceptor, get_interceptor
from importmock.core.registry import SubstitutionEntry
from importmock.core.resolver import ModuleResolver, package_from_globals, requester_of

logger = logging.getLogger(__name__)

_MISSING = object()


class CacheSnapshot:
    """
    The import system's cache entry for one module.

    Covers both ``sys.modules[name]`` and the attribute binding the module
    has on its parent package, which is how ``from pkg import mod`` finds an
    already imported submodule.
    """

    def __init__(self, name: str):
        self.name = name
        self.parent_name, _, self.child = name.rpartition(".")
        self.module = sys.modules.get(name, _MISSING)
        parent = sys.modules.get(self.parent_name) if self.parent_name else None
        self.binding = getattr(parent, self.child, _MISSING) if parent is not None else _MISSING

    def evict(self) -> None:
        """Remove the module from ``sys.modules`` so the next import re-executes it."""
        sys.modules.pop(self.name, None)

    def restore(self, loaded: Any = _MISSING) -> None:
        """
        Put the cache back the way it was when the snapshot was taken.

        Args:
            loaded: Module instance created while substitutions were active;
                any parent binding pointing at it is removed or reverted
        """
        if self.module is _MISSING:
            sys.modules.pop(self.name, None)
        else:
            sys.modules[self.name] = self.module

        parent = sys.modules.get(self.parent_name) if self.parent_name else None
        if parent is None:
            return
        if self.binding is not _MISSING:
            setattr(parent, self.child, self.binding)
        elif loaded is not _MISSING and getattr(parent, self.child, _MISSING) is loaded:
            delattr(parent, self.child)


class MockOrchestrator:
    """
    Import a module while replacing some of its direct imports.

    The orchestrator depends on one ``ImportInterceptor`` and uses its
    registry, resolver and tracer. Calls must not overlap: the registry has
    to be empty between two ``load`` calls.
    """

    def __init__(self, interceptor: Optional[ImportInterceptor] = None):
        self.interceptor = interceptor or get_interceptor()

    @property
    def registry(self):
        return self.interceptor.registry

    @property
    def resolver(self) -> ModuleResolver:
        return self.interceptor.resolver

    @property
    def tracer(self):
        return self.interceptor.tracer

    def load(
        self,
        target: str,
        replacements: Optional[Mapping[str, Any]] = None,
        package: Optional[str] = None,
    ) -> Any:
        """
        Import ``target`` with its imports of ``replacements`` keys replaced.

        Process:
        1. Identify the calling module (anchor for a relative ``target``)
        2. Resolve ``target`` and every replacement specifier; replacement
           specifiers are relative to the target's own package
        3. Register one substitution per replacement, owned by the target
        4. Evict the target from the import cache and import it afresh
        5. Fail if any replacement was never imported by the target
        6. Restore the import cache so the fresh instance doesn't leak

        Args:
            target: Module to load (``pkg.mod`` or relative to the caller, ``.mod``)
            replacements: Mapping of dependency specifier to replacement value
            package: Anchor for a relative ``target`` (default: caller's package)

        Returns:
            The freshly imported target module

        Raises:
            ResolutionError: If ``target`` or a replacement specifier doesn't
                name an existing module
            StaleMockError: If a replacement was never imported by the target
        """
        if package is None:
            caller, package = self._calling_module()
            logger.debug(f"mock_load called from {caller}")

        name = self.resolver.resolve(target, package=package)
        anchor = self.resolver.package_of(name)
        self.tracer.mocking(target, name)

        resolved: List[Tuple[str, str, Any]] = [
            (self.resolver.resolve(specifier, package=anchor), specifier, value)
            for specifier, value in (replacements or {}).items()
        ]

        registered = []
        for dependency, specifier, value in resolved:
            self.registry.register(
                dependency, SubstitutionEntry(specifier=specifier, replacement=value, owner=name)
            )
            registered.append(dependency)
            self.tracer.registered(specifier, dependency, name)

        self.interceptor.install()
        snapshot = CacheSnapshot(name)
        snapshot.evict()
        loaded = _MISSING
        try:
            loaded = importlib.import_module(name)

            if not self.registry.is_empty():
                unused = self.registry.pending_specifiers()
                self.tracer.stale(target, unused)
                raise StaleMockError(target, unused)

            return loaded
        finally:
            self.registry.discard(registered)
            snapshot.restore(loaded)

    def _calling_module(self) -> Tuple[Optional[str], Optional[str]]:
        """Return (name, package anchor) of the first caller outside importmock."""
        frame = inspect.currentframe()
        try:
            while frame is not None:
                module_name = frame.f_globals.get("__name__") or ""
                if module_name != "importmock" and not module_name.startswith("importmock."):
                    break
                frame = frame.f_back
            if frame is None:
                return None, None
            return requester_of(frame.f_globals), package_from_globals(frame.f_globals)
        finally:
            del frame


_orchestrator: Optional[MockOrchestrator] = None


def get_orchestrator() -> MockOrchestrator:
    """Return the process-wide orchestrator bound to the shared interceptor."""
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = MockOrchestrator(get_interceptor())
    return _orchestrator


def mock_load(target: str, replacements: Optional[Mapping[str, Any]] = None) -> Any:
    """
    Import ``target`` afresh, replacing its direct imports of the given modules.

    Args:
        target: Module to load; a relative name (``.mod``) is resolved
            against the calling module's package
        replacements: Mapping of dependency specifier (as written in the
            target, relative specifiers resolved against the target's
            package) to the value the target should receive instead

    Returns:
        The freshly imported target module

    Raises:
        ResolutionError: If a specifier doesn't name an existing module
        StaleMockError: If a replacement was never imported by the target
    """
    return get_orchestrator().load(target, replacements)


__all__ = ["MockOrchestrator", "CacheSnapshot", "get_orchestrator", "mock_load"]
