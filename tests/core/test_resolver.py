"""
Tests for module specifier resolution.
"""

import os
import sys

import pytest

from importmock.core.exceptions import ResolutionError
from importmock.core.resolver import ModuleResolver, package_from_globals, requester_of


@pytest.fixture
def resolver():
    return ModuleResolver()


class TestResolveAbsolute:
    """Test resolution of absolute specifiers."""

    def test_existing_module(self, resolver):
        assert resolver.resolve("json") == "json"

    def test_existing_submodule(self, resolver):
        assert resolver.resolve("json.decoder") == "json.decoder"

    def test_missing_module_raises(self, resolver):
        with pytest.raises(ResolutionError) as exc_info:
            resolver.resolve("no_such_module_importmock")

        assert exc_info.value.specifier == "no_such_module_importmock"
        assert "no module named" in str(exc_info.value)

    def test_missing_submodule_of_plain_module_raises(self, resolver):
        """A 'submodule' of a non-package is not importable."""
        with pytest.raises(ResolutionError):
            resolver.resolve("textwrap.nothing")

    def test_unchecked_resolution_skips_existence(self, resolver):
        assert resolver.resolve("no_such_module_importmock", check=False) == "no_such_module_importmock"

    def test_resolution_error_is_import_error(self, resolver):
        with pytest.raises(ImportError):
            resolver.resolve("no_such_module_importmock")

    @pytest.mark.parametrize("specifier", ["", "a..b", "a."])
    def test_malformed_specifier_raises(self, resolver, specifier):
        with pytest.raises(ResolutionError):
            resolver.resolve(specifier, check=False)

    def test_non_string_specifier_raises(self, resolver):
        with pytest.raises(ResolutionError):
            resolver.resolve(None)


class TestCanonicalNames:
    """Test canonicalization of aliased module names."""

    def test_alias_resolves_to_canonical_name(self, resolver):
        assert resolver.resolve("os.path") == os.path.__name__

    def test_both_spellings_resolve_identically(self, resolver):
        assert resolver.resolve("os.path") == resolver.resolve(os.path.__name__)

    def test_canonical_of_unaliased_module(self, resolver):
        assert resolver.canonical("json.decoder") == "json.decoder"

    def test_canonical_of_module_not_imported(self, resolver):
        assert resolver.canonical("no_such_module_importmock") == "no_such_module_importmock"

    def test_canonical_of_object_without_spec(self, resolver, monkeypatch):
        monkeypatch.setitem(sys.modules, "importmock_plain_object", object())

        assert resolver.canonical("importmock_plain_object") == "importmock_plain_object"

    def test_unchecked_resolution_keeps_spelling(self, resolver):
        assert resolver.resolve("os.path", check=False) == "os.path"


class TestResolveRelative:
    """Test resolution of relative specifiers."""

    def test_sibling(self, resolver):
        assert resolver.resolve(".decoder", package="json") == "json.decoder"

    def test_dot_is_the_package_itself(self, resolver):
        assert resolver.resolve(".", package="json") == "json"

    def test_parent(self, resolver):
        assert resolver.resolve("..parse", package="urllib.request", check=False) == "urllib.parse"

    def test_same_module_different_spellings(self, resolver):
        """Relative and absolute spellings of one module resolve identically."""
        assert resolver.resolve(".decoder", package="json") == resolver.resolve("json.decoder")

    def test_without_package_raises(self, resolver):
        with pytest.raises(ResolutionError) as exc_info:
            resolver.resolve(".decoder")

        assert "outside of a package" in str(exc_info.value)

    def test_empty_package_raises(self, resolver):
        with pytest.raises(ResolutionError):
            resolver.resolve(".decoder", package="")

    def test_beyond_top_level_raises(self, resolver):
        with pytest.raises(ResolutionError):
            resolver.resolve("...x", package="json")

    def test_missing_relative_module_raises(self, resolver):
        with pytest.raises(ResolutionError) as exc_info:
            resolver.resolve(".nothing_here", package="json")

        assert exc_info.value.package == "json"
        assert "relative to 'json'" in str(exc_info.value)

    def test_is_deterministic(self, resolver):
        results = {resolver.resolve(".decoder", package="json") for _ in range(5)}
        assert results == {"json.decoder"}


class TestResolveImport:
    """Test resolution of __import__ arguments."""

    def test_absolute(self, resolver):
        assert resolver.resolve_import("os.path", {"__name__": "x"}, 0) == "os.path"

    def test_relative_uses_package(self, resolver):
        module_globals = {"__name__": "pkg.mod", "__package__": "pkg"}
        assert resolver.resolve_import("b", module_globals, 1) == "pkg.b"

    def test_relative_from_package_itself(self, resolver):
        module_globals = {"__name__": "pkg.mod", "__package__": "pkg"}
        assert resolver.resolve_import("", module_globals, 1) == "pkg"

    def test_relative_two_levels(self, resolver):
        module_globals = {"__name__": "pkg.sub.mod", "__package__": "pkg.sub"}
        assert resolver.resolve_import("b", module_globals, 2) == "pkg.b"

    def test_relative_without_package_raises(self, resolver):
        with pytest.raises(ResolutionError):
            resolver.resolve_import("b", {"__name__": "top"}, 1)

    def test_does_not_check_existence(self, resolver):
        module_globals = {"__name__": "pkg.mod", "__package__": "pkg"}
        assert resolver.resolve_import("missing", module_globals, 1) == "pkg.missing"


class TestModuleQueries:
    """Test existence, package and origin queries."""

    def test_exists(self, resolver):
        assert resolver.exists("json")
        assert not resolver.exists("no_such_module_importmock")

    def test_exists_respects_blocked_modules(self, resolver, monkeypatch):
        """A None entry in sys.modules blocks the import."""
        monkeypatch.setitem(sys.modules, "blocked_by_importmock_test", None)
        assert not resolver.exists("blocked_by_importmock_test")

    def test_package_of_package(self, resolver):
        assert resolver.package_of("json") == "json"

    def test_package_of_submodule(self, resolver):
        assert resolver.package_of("json.decoder") == "json"

    def test_package_of_top_level_module(self, resolver):
        assert resolver.package_of("textwrap") == ""

    def test_origin_of_file_module(self, resolver):
        origin = resolver.origin_of("json.decoder")
        assert origin is not None
        assert origin.endswith("decoder.py")

    def test_origin_of_missing_module(self, resolver):
        assert resolver.origin_of("no_such_module_importmock") is None


class TestGlobalsHelpers:
    """Test helpers reading an importing module's globals."""

    def test_package_prefers_dunder_package(self):
        assert package_from_globals({"__package__": "a.b", "__name__": "x"}) == "a.b"

    def test_package_from_spec(self):
        import json.decoder

        module_globals = {"__spec__": json.decoder.__spec__, "__name__": "json.decoder"}
        assert package_from_globals(module_globals) == "json"

    def test_package_from_name_of_module(self):
        assert package_from_globals({"__name__": "a.b.c"}) == "a.b"

    def test_package_from_name_of_package(self):
        assert package_from_globals({"__name__": "a.b", "__path__": []}) == "a.b"

    def test_package_unknown(self):
        assert package_from_globals({}) is None

    def test_requester_prefers_spec_name(self):
        import json.decoder

        module_globals = {"__spec__": json.decoder.__spec__, "__name__": "__main__"}
        assert requester_of(module_globals) == "json.decoder"

    def test_requester_falls_back_to_name(self):
        assert requester_of({"__name__": "some.module", "__spec__": None}) == "some.module"

    def test_requester_of_nothing(self):
        assert requester_of(None) is None
        assert requester_of({}) is None
