"""
Process-wide import interception.

``ImportInterceptor`` wraps ``builtins.__import__`` and
``importlib.import_module`` so that every ``import`` statement,
``from ... import`` statement and dynamic ``import_module`` call in the
process passes through it. A request is answered with a replacement only
when the substitution registry holds an entry for the requested module whose
owner is exactly the module making the request; every other import is
delegated to the real import machinery and returned unchanged.

Registry lookups use the canonical name of the requested module, so aliased
spellings (``os.path`` and ``posixpath``) find the same entry.

Replacements are never stored in ``sys.modules`` and never bound onto real
packages. When a replacement has to be reachable through a real package
(``import a.b`` or ``from a import b``) the statement receives a
``ModuleView`` of that package instead.

Code that bound ``import_module`` to a local name before the interceptor was
installed (``from importlib import import_module`` at import time) keeps the
unwrapped function.
"""

import builtins
import importlib
import logging
import sys
import types
from typing import Any, Dict, Mapping, Optional, Sequence

from importmock.core.exceptions import ResolutionError
from importmock.core.registry import SubstitutionRegistry, get_registry
from importmock.core.resolver import ModuleResolver, requester_of
from importmock.core.trace import ImportTracer

logger = logging.getLogger(__name__)

_VIEW_BASE = "_importmock_view_base"


class ModuleView(types.ModuleType):
    """
    Read-through view of a module (or any object) with some attributes overridden.

    The view starts as a copy of the base's namespace with ``overrides``
    applied, so ``from view import *`` sees both. Attributes the base gains
    later are still reachable through ``__getattr__``. The base itself is
    never modified.
    """

    def __init__(self, base: Any, overrides: Mapping[str, Any]):
        name = getattr(base, "__name__", None)
        if not isinstance(name, str):
            name = type(base).__name__
        super().__init__(name)
        namespace = getattr(base, "__dict__", None)
        if isinstance(namespace, Mapping):
            self.__dict__.update(namespace)
        self.__dict__.update(overrides)
        self.__dict__[_VIEW_BASE] = base

    def __getattr__(self, name: str) -> Any:
        namespace = vars(self)
        if _VIEW_BASE not in namespace:
            raise AttributeError(name)
        return getattr(namespace[_VIEW_BASE], name)

    def __repr__(self) -> str:
        return f"<module {self.__name__!r} (importmock view)>"


def _spelling(name: str, fromlist: Optional[Sequence[str]], level: int) -> str:
    spelled = "." * level + name
    if fromlist:
        return f"{spelled or '.'} ({', '.join(fromlist)})"
    return spelled


class ImportInterceptor:
    """
    Hook around the import entry points that applies owner-scoped substitutions.

    ``install()`` is idempotent. Only one interceptor should be installed per
    process; ``get_interceptor()`` returns the shared one used by ``mock_load``.
    """

    def __init__(
        self,
        registry: Optional[SubstitutionRegistry] = None,
        resolver: Optional[ModuleResolver] = None,
        tracer: Optional[ImportTracer] = None,
    ):
        self.registry = registry if registry is not None else get_registry()
        self.resolver = resolver or ModuleResolver()
        self.tracer = tracer or ImportTracer()
        self._original = None
        self._original_import_module = None
        self._active = False
        self._hook = self._import
        self._module_hook = self._import_module

    @property
    def installed(self) -> bool:
        return self._original is not None and self._active

    def install(self) -> None:
        """Wrap the import entry points. Installing twice is a no-op."""
        if self._original is not None:
            self._active = True
            return
        self._original = builtins.__import__
        self._original_import_module = importlib.import_module
        builtins.__import__ = self._hook
        importlib.import_module = self._module_hook
        self._active = True
        logger.debug("Import interceptor installed")

    def uninstall(self) -> None:
        """
        Restore the entry points that were active at install time.

        If another hook has been installed on top of this one since, it is
        left in place and this interceptor only stops substituting.
        """
        if self._original is None or not self._active:
            return
        self._active = False
        if builtins.__import__ is not self._hook or importlib.import_module is not self._module_hook:
            logger.warning(
                "Import entry points were wrapped again after importmock; "
                "leaving the interceptor in place as a pass-through"
            )
            return
        builtins.__import__ = self._original
        importlib.import_module = self._original_import_module
        self._original = None
        self._original_import_module = None
        logger.debug("Import interceptor removed")

    def _consume(self, name: str, requester: str):
        return self.registry.try_consume(self.resolver.canonical(name), requester)

    def _import(self, name, globals=None, locals=None, fromlist=(), level=0):
        original = self._original
        if not self._active or (self.registry.is_empty() and not self.tracer.enabled):
            return original(name, globals, locals, fromlist, level)

        try:
            target = self.resolver.resolve_import(name, globals, level)
        except ResolutionError:
            # Let the real import system raise its usual error
            return original(name, globals, locals, fromlist, level)

        if self.tracer.enabled:
            self.tracer.import_seen(_spelling(name, fromlist, level), target)

        requester = requester_of(globals)
        if requester is None or self.registry.is_empty():
            return original(name, globals, locals, fromlist, level)

        found, replacement = self._consume(target, requester)
        if found:
            self.tracer.substituted(_spelling(name, None, level), target, requester)

        overrides: Dict[str, Any] = {}
        for item in fromlist or ():
            if item == "*":
                continue
            submodule = f"{target}.{item}"
            consumed, value = self._consume(submodule, requester)
            if consumed:
                self.tracer.substituted(f"{_spelling(name, None, level)}.{item}", submodule, requester)
                overrides[item] = value

        if not found and not overrides:
            return original(name, globals, locals, fromlist, level)

        if found:
            if not fromlist:
                if level == 0 and "." in target:
                    return self._bind_to_package(target, replacement, globals, locals)
                return replacement
            return ModuleView(replacement, overrides) if overrides else replacement

        remaining = tuple(item for item in fromlist if item not in overrides)
        if remaining:
            base = original(name, globals, locals, remaining, level)
        else:
            original(name, globals, locals, (), level)
            base = sys.modules[target]
        return ModuleView(base, overrides)

    def _import_module(self, name, package=None):
        original = self._original_import_module
        if not self._active or (self.registry.is_empty() and not self.tracer.enabled):
            return original(name, package)

        try:
            target = self.resolver.resolve(name, package=package, check=False)
        except ResolutionError:
            return original(name, package)

        if self.tracer.enabled:
            self.tracer.import_seen(name, target)

        requester = requester_of(sys._getframe(1).f_globals)
        if requester is None or self.registry.is_empty():
            return original(name, package)

        found, replacement = self._consume(target, requester)
        if not found:
            return original(name, package)
        self.tracer.substituted(name, target, requester)
        return replacement

    def _bind_to_package(self, target: str, replacement: Any, globals, locals) -> ModuleView:
        """
        Answer ``import a.b.c`` with a view of ``a`` where ``a.b.c`` is the
        replacement. The real parents are imported, the real ``a.b.c`` is not.
        """
        parts = target.split(".")
        self._original(".".join(parts[:-1]), globals, locals, (), 0)
        value = replacement
        for index in range(len(parts) - 1, 0, -1):
            package = sys.modules[".".join(parts[:index])]
            value = ModuleView(package, {parts[index]: value})
        return value


_interceptor: Optional[ImportInterceptor] = None


def get_interceptor() -> ImportInterceptor:
    """
    Return the process-wide interceptor, creating it on first use.

    The trace settings are read from ``load_config()`` at creation time;
    later changes to ``IMPORTMOCK_DEBUG`` don't affect the shared interceptor.
    """
    global _interceptor
    if _interceptor is None:
        _interceptor = ImportInterceptor(
            registry=get_registry(),
            resolver=ModuleResolver(),
            tracer=ImportTracer.from_config(),
        )
    return _interceptor


__all__ = ["ImportInterceptor", "ModuleView", "get_interceptor"]
