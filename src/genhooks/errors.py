"""Exceptions raised by generators."""


class GeneratorError(Exception):
    """Base class for errors that abort a generator run."""


class NameCollisionError(GeneratorError):
    """A name the generator would create is already defined."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"The name '{name}' is either already used in your application "
            "or reserved by genhooks. Please choose an alternative and run "
            "this generator again."
        )


class MalformedHookError(GeneratorError):
    """A hook was declared or removed in a way that cannot work."""
