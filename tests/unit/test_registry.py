"""Unit tests for the generator catalog and namespace resolution."""

import sys
import types

import pytest

from genhooks.base import Generator
from genhooks.errors import GeneratorError
from genhooks.registry import GeneratorCatalog, catalog, load_generators


class TestLookups:
    """Tests for candidate namespace order."""

    def test_base_and_context(self) -> None:
        """Host implementation first, then scoped, then bare."""
        assert GeneratorCatalog.lookups("test_unit", "genhooks", "controller") == [
            "genhooks:generators:test_unit",
            "test_unit:generators:controller",
            "test_unit",
        ]

    def test_name_only_uses_host_base(self) -> None:
        """Without base or context the host framework is tried first."""
        assert GeneratorCatalog.lookups("controller") == [
            "genhooks:generators:controller",
            "controller",
        ]

    def test_context_only(self) -> None:
        """A context without a base skips the host candidate."""
        assert GeneratorCatalog.lookups("rspec", context="model") == [
            "rspec:generators:model",
            "rspec",
        ]


class TestFindByNamespace:
    """Tests for GeneratorCatalog.find_by_namespace()."""

    @pytest.fixture
    def empty_catalog(self) -> GeneratorCatalog:
        """A catalog with nothing registered."""
        return GeneratorCatalog()

    def test_host_wins_over_scoped(self, empty_catalog: GeneratorCatalog) -> None:
        """Priority 1 is returned when priorities 1 and 2 both exist."""

        class HostTestUnit(Generator, namespace="genhooks:generators:test_unit"):
            pass

        class ScopedTestUnit(Generator, namespace="test_unit:generators:controller"):
            pass

        empty_catalog.register(ScopedTestUnit)
        empty_catalog.register(HostTestUnit)

        found = empty_catalog.find_by_namespace("test_unit", "genhooks", "controller")
        assert found is HostTestUnit

    def test_scoped_wins_over_bare(self, empty_catalog: GeneratorCatalog) -> None:
        """Priority 2 is returned before the bare namespace."""

        class Scoped(Generator, namespace="rspec:generators:controller"):
            pass

        class Bare(Generator, namespace="rspec"):
            pass

        empty_catalog.register(Bare)
        empty_catalog.register(Scoped)

        assert empty_catalog.find_by_namespace("rspec", "genhooks", "controller") is Scoped

    def test_bare_namespace(self, empty_catalog: GeneratorCatalog) -> None:
        """A bare namespace is the last resort."""

        class Webrat(Generator, namespace="webrat"):
            pass

        empty_catalog.register(Webrat)

        assert empty_catalog.find_by_namespace("webrat", "genhooks", "controller") is Webrat

    def test_not_found_returns_none(self, empty_catalog: GeneratorCatalog) -> None:
        """Nothing matching gives None."""
        assert empty_catalog.find_by_namespace("missing", "genhooks", "controller") is None
        assert empty_catalog.find_by_namespace("missing") is None

    def test_lookup_does_not_change_catalog(self, empty_catalog: GeneratorCatalog) -> None:
        """Resolution is read-only and repeatable."""

        class Webrat(Generator, namespace="webrat"):
            pass

        empty_catalog.register(Webrat)
        before = empty_catalog.snapshot()

        first = empty_catalog.find_by_namespace("webrat", "genhooks", "controller")
        second = empty_catalog.find_by_namespace("webrat", "genhooks", "controller")
        empty_catalog.find_by_namespace("missing")

        assert first is second is Webrat
        assert empty_catalog.snapshot() == before


class TestRegistration:
    """Tests for automatic registration of generator classes."""

    def test_subclass_registers_itself(self) -> None:
        """Defining a generator adds it to the global catalog."""

        class Helper(Generator, namespace="genhooks:generators:helper"):
            pass

        assert "genhooks:generators:helper" in catalog
        assert catalog.get("genhooks:generators:helper") is Helper

    def test_unregister(self) -> None:
        """Unregistering removes the namespace; unknown names are ignored."""

        class Helper(Generator, namespace="genhooks:generators:helper"):
            pass

        catalog.unregister("genhooks:generators:helper")
        catalog.unregister("never:registered")
        assert "genhooks:generators:helper" not in catalog

    def test_namespaces_sorted(self) -> None:
        """Namespaces are listed in sorted order."""
        local = GeneratorCatalog()

        class Zeta(Generator, namespace="zeta"):
            pass

        class Alpha(Generator, namespace="alpha"):
            pass

        local.register(Zeta)
        local.register(Alpha)
        assert local.namespaces() == ["alpha", "zeta"]
        assert len(local) == 2


class TestLoadGenerators:
    """Tests for load_generators()."""

    def test_imports_module(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Loading returns the imported module names and skips blanks."""
        module = types.ModuleType("fake_generators")
        monkeypatch.setitem(sys.modules, "fake_generators", module)

        assert load_generators(["fake_generators", "", "  "]) == ["fake_generators"]

    def test_missing_module_raises(self) -> None:
        """Modules that cannot be imported raise GeneratorError."""
        with pytest.raises(GeneratorError) as exc_info:
            load_generators(["genhooks_no_such_module"])
        assert "genhooks_no_such_module" in str(exc_info.value)
