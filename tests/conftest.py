"""Shared fixtures: an isolated catalog and settings, and a recording shell."""

import io
from typing import Iterator

import pytest
from rich.console import Console

from genhooks import settings
from genhooks.registry import GeneratorCatalog, catalog
from genhooks.shell import Shell


@pytest.fixture(autouse=True)
def isolated_catalog() -> Iterator[GeneratorCatalog]:
    """Undo generator registrations and settings changes made by a test."""
    snapshot = catalog.snapshot()
    previous = settings.get_settings()
    yield catalog
    catalog.restore(snapshot)
    settings.configure(previous)


@pytest.fixture
def shell() -> Shell:
    """A shell writing plain text to memory."""
    console = Console(file=io.StringIO(), width=200, color_system=None)
    return Shell(console=console)


def shell_output(shell: Shell) -> str:
    """Text printed to a shell created by the ``shell`` fixture."""
    return shell.console.file.getvalue()
