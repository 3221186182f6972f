"""
Module specifier resolution.

Maps the specifier written in an import statement (or passed to
``mock_load``) to the canonical identity of the module it refers to: its
absolute dotted name, which is also the key the import system caches it under
in ``sys.modules``. Two spellings of the same module (``.b`` from package
``pkg`` and ``pkg.b``) resolve to the same name.
"""

import importlib.util
import logging
import sys
from typing import Any, Mapping, Optional

from importmock.core.exceptions import ResolutionError

logger = logging.getLogger(__name__)


def package_from_globals(module_globals: Mapping[str, Any]) -> Optional[str]:
    """
    Compute the package anchor for relative imports made by a module.

    Follows the same precedence as the import system: ``__package__``, then
    ``__spec__.parent``, then ``__name__`` (stripped to its parent unless the
    module is itself a package).

    Args:
        module_globals: The module's global namespace

    Returns:
        Package name, '' for top-level modules, or None if unknown
    """
    package = module_globals.get("__package__")
    if package is not None:
        return package
    spec = module_globals.get("__spec__")
    if spec is not None:
        return spec.parent
    name = module_globals.get("__name__")
    if name is None:
        return None
    if "__path__" not in module_globals:
        name = name.rpartition(".")[0]
    return name


def requester_of(module_globals: Optional[Mapping[str, Any]]) -> Optional[str]:
    """
    Return the canonical name of the module owning a global namespace.

    Args:
        module_globals: Globals mapping passed to ``__import__``

    Returns:
        Module name, or None when the namespace doesn't belong to a module
    """
    if not module_globals:
        return None
    spec = module_globals.get("__spec__")
    name = getattr(spec, "name", None)
    if name:
        return name
    return module_globals.get("__name__")


class ModuleResolver:
    """
    Resolve module specifiers to canonical dotted names.

    Resolution is referentially transparent: the same specifier and package
    anchor always produce the same name, and aliased spellings of an imported
    module produce its canonical name. Existence checks follow the standard
    import rules (``sys.modules`` first, then ``importlib.util.find_spec``).
    """

    def resolve(self, specifier: str, package: Optional[str] = None, check: bool = True) -> str:
        """
        Resolve a specifier to a canonical module name.

        Args:
            specifier: Absolute (``pkg.mod``) or relative (``.mod``, ``..mod``) name
            package: Package anchor for relative specifiers
            check: Require the module to exist

        Returns:
            Absolute dotted module name; with ``check`` the canonical name of
            an already imported module (see ``canonical``)

        Raises:
            ResolutionError: If the specifier is malformed, relative without an
                anchor, or (with ``check``) names no existing module

        Example:
            >>> ModuleResolver().resolve(".b", package="json", check=False)
            'json.b'
        """
        if not isinstance(specifier, str) or not specifier:
            raise ResolutionError(str(specifier), "specifier must be a non-empty string", package)

        if specifier.startswith("."):
            if not package:
                raise ResolutionError(
                    specifier, "relative specifier used outside of a package", package
                )
            try:
                name = importlib.util.resolve_name(specifier, package)
            except (ImportError, ValueError) as e:
                raise ResolutionError(specifier, str(e), package)
        else:
            name = specifier

        if any(not part for part in name.split(".")):
            raise ResolutionError(specifier, f"'{name}' is not a valid module name", package)

        if check:
            if not self.exists(name):
                raise ResolutionError(specifier, f"no module named '{name}'", package)
            return self.canonical(name)

        return name

    def resolve_import(
        self, name: str, module_globals: Optional[Mapping[str, Any]], level: int
    ) -> str:
        """
        Resolve the arguments of an ``__import__`` call without touching the
        import system.

        Args:
            name: Module name as passed to ``__import__``
            module_globals: Globals of the importing module
            level: Number of leading dots of the import statement

        Returns:
            Absolute dotted module name as spelled by the statement (not
            canonicalized, so it can be used to walk the package chain)

        Raises:
            ResolutionError: If a relative import has no package anchor
        """
        if level == 0:
            return self.resolve(name, check=False)
        package = package_from_globals(module_globals or {})
        return self.resolve("." * level + name, package=package, check=False)

    def canonical(self, name: str) -> str:
        """
        Return the name a module is actually cached under.

        Some modules are registered in ``sys.modules`` under an alias
        (``os.path`` is ``posixpath`` or ``ntpath``). For an imported module
        this returns the name from its ``__spec__``; any other name is
        returned unchanged.

        Example:
            >>> import os
            >>> ModuleResolver().canonical("os.path") == os.path.__name__
            True
        """
        spec = getattr(sys.modules.get(name), "__spec__", None)
        canonical = getattr(spec, "name", None)
        if isinstance(canonical, str) and canonical and canonical != name:
            logger.debug(f"{name} is an alias of {canonical}")
            return canonical
        return name

    def exists(self, name: str) -> bool:
        """Check whether ``name`` is importable under the standard rules."""
        if name in sys.modules:
            return sys.modules[name] is not None
        try:
            return importlib.util.find_spec(name) is not None
        except (ImportError, ValueError) as e:
            logger.debug(f"find_spec({name!r}) failed: {e}")
            return False

    def is_package(self, name: str) -> bool:
        """Check whether ``name`` is a package (has submodule search locations)."""
        module = sys.modules.get(name)
        if module is not None:
            return hasattr(module, "__path__")
        try:
            spec = importlib.util.find_spec(name)
        except (ImportError, ValueError):
            return False
        return spec is not None and spec.submodule_search_locations is not None

    def package_of(self, name: str) -> str:
        """
        Return the anchor a module uses for its own relative imports.

        Args:
            name: Canonical module name

        Returns:
            The module itself for packages, otherwise its parent package
            ('' for top-level modules)
        """
        if self.is_package(name):
            return name
        return name.rpartition(".")[0]

    def origin_of(self, name: str) -> Optional[str]:
        """Return the file a module is (or would be) loaded from, if any."""
        module = sys.modules.get(name)
        spec = getattr(module, "__spec__", None) if module is not None else None
        if spec is None:
            try:
                spec = importlib.util.find_spec(name)
            except (ImportError, ValueError):
                return None
        return getattr(spec, "origin", None) if spec is not None else None


__all__ = [
    "ModuleResolver",
    "package_from_globals",
    "requester_of",
]
