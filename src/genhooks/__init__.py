"""Composable generators that hook into each other."""

from genhooks.base import Generator
from genhooks.errors import GeneratorError, MalformedHookError, NameCollisionError
from genhooks.models import HookDeclaration, OptionDescriptor
from genhooks.registry import catalog, load_generators
from genhooks.shell import Shell

__version__ = "0.1.0"

__all__ = [
    "Generator",
    "GeneratorError",
    "HookDeclaration",
    "MalformedHookError",
    "NameCollisionError",
    "OptionDescriptor",
    "Shell",
    "catalog",
    "load_generators",
]
