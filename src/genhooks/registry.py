"""Catalog of generator classes, keyed by namespace."""

from __future__ import annotations

import importlib
import logging
from importlib.metadata import entry_points
from typing import TYPE_CHECKING, Iterable

from genhooks.errors import GeneratorError

if TYPE_CHECKING:
    from genhooks.base import Generator

logger = logging.getLogger(__name__)

# Namespace prefix of generators shipped with the host framework
HOST_BASE = "genhooks"

ENTRY_POINT_GROUP = "genhooks.generators"


class GeneratorCatalog:
    """Process-wide mapping from namespace to generator class.

    Generator classes register themselves when they are defined. Lookups
    never change the catalog.
    """

    def __init__(self) -> None:
        self._generators: dict[str, type[Generator]] = {}

    def __contains__(self, namespace: str) -> bool:
        return namespace in self._generators

    def __len__(self) -> int:
        return len(self._generators)

    def register(self, klass: type[Generator]) -> None:
        """Add a generator class under its namespace."""
        namespace = klass.namespace()
        if namespace in self._generators and self._generators[namespace] is not klass:
            logger.debug("Replacing generator %s", namespace)
        self._generators[namespace] = klass

    def unregister(self, namespace: str) -> None:
        self._generators.pop(namespace, None)

    def clear(self) -> None:
        self._generators.clear()

    def get(self, namespace: str) -> type[Generator] | None:
        return self._generators.get(namespace)

    def namespaces(self) -> list[str]:
        """Registered namespaces, sorted."""
        return sorted(self._generators)

    def snapshot(self) -> dict[str, type[Generator]]:
        return dict(self._generators)

    def restore(self, snapshot: dict[str, type[Generator]]) -> None:
        self._generators = dict(snapshot)

    @staticmethod
    def lookups(
        name: str, base: str | None = None, context: str | None = None
    ) -> list[str]:
        """Candidate namespaces for a name, in priority order.

        Examples:
            >>> GeneratorCatalog.lookups("test_unit", "genhooks", "controller")
            ['genhooks:generators:test_unit', 'test_unit:generators:controller', 'test_unit']
        """
        if base is None and context is None:
            base = HOST_BASE

        candidates = []
        if base:
            candidates.append(f"{base}:generators:{name}")
        if context:
            candidates.append(f"{name}:generators:{context}")
        candidates.append(str(name))
        return candidates

    def find_by_namespace(
        self, name: str, base: str | None = None, context: str | None = None
    ) -> type[Generator] | None:
        """Return the first generator registered under a candidate namespace."""
        for namespace in self.lookups(name, base, context):
            klass = self._generators.get(namespace)
            if klass is not None:
                return klass

        logger.debug("No generator found for %s (base=%s, context=%s)", name, base, context)
        return None


catalog = GeneratorCatalog()


def load_generators(modules: Iterable[str]) -> list[str]:
    """Import generator modules so their classes register themselves.

    Returns:
        The names of the imported modules.

    Raises:
        GeneratorError: If a module cannot be imported.
    """
    loaded = []
    for module in modules:
        module = module.strip()
        if not module:
            continue
        try:
            importlib.import_module(module)
        except ImportError as e:
            raise GeneratorError(f"Could not load generators from '{module}': {e}") from e
        logger.debug("Loaded generators from %s", module)
        loaded.append(module)
    return loaded


def load_entry_points(group: str = ENTRY_POINT_GROUP) -> list[str]:
    """Import every module advertised under the generators entry point group."""
    return load_generators(ep.module for ep in entry_points(group=group))
