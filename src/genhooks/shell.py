"""Status output for generator runs."""

from contextlib import contextmanager
from typing import Iterator

from rich.console import Console
from rich.markup import escape


class Shell:
    """Prints status lines, indented by the current padding.

    A shell is shared by a generator and every generator it invokes, so the
    padding reflects how deeply the current invocation is nested.
    """

    def __init__(self, console: Console | None = None, quiet: bool = False) -> None:
        self.console = console or Console(highlight=False)
        self.quiet = quiet
        self.padding = 0

    def say_status(self, status: str, message: str, color: str | bool = "white") -> None:
        """Print a status line such as ``      invoke  test_unit``.

        A ``color`` of False keeps the line silent.
        """
        if self.quiet or color is False:
            return

        indent = "  " * self.padding
        label = f"{status:>12}"
        if isinstance(color, str) and color:
            label = f"[bold {color}]{label}[/]"
        self.console.print(f"{label}  {indent}{escape(str(message))}", highlight=False)

    @contextmanager
    def padded(self) -> Iterator[int]:
        """Increase the padding for the duration of the block."""
        previous = self.padding
        self.padding += 1
        try:
            yield self.padding
        finally:
            self.padding = previous
