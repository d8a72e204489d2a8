"""Command line interface for running generators."""

import logging
import os
import sys

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from genhooks import __version__
from genhooks.base import Generator
from genhooks.errors import GeneratorError
from genhooks.models import OptionDescriptor, dasherize
from genhooks.parsing import parse_options
from genhooks.registry import catalog, load_entry_points, load_generators
from genhooks.settings import load_settings
from genhooks.shell import Shell

# Load environment variables from .env file
load_dotenv()

# Rich console for pretty output
console = Console()
error_console = Console(stderr=True)


def print_error(message: str) -> None:
    """Print an error message in red."""
    error_console.print(f"[bold red]Error:[/bold red] {message}")


def print_success(message: str) -> None:
    """Print a success message in green."""
    console.print(f"[bold green]✓[/bold green] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[bold blue]ℹ[/bold blue] {message}")


def format_flags(option: OptionDescriptor) -> str:
    """Flags of an option as shown in help, e.g. ``-t, --test-framework=NAME``."""
    flags = ", ".join([*option.aliases, f"--{dasherize(option.name)}"])
    if option.type == "boolean":
        return flags
    banner = option.banner if option.banner is not None else option.name.upper()
    return f"{flags}={banner}" if banner else flags


def print_options_help(klass: type[Generator]) -> None:
    """Print one table per option group, hooked generators included."""
    for label, options in klass.class_options_help().items():
        if not options:
            continue
        table = Table(title=f"[bold]{label}[/bold]", show_header=False, box=None)
        table.add_column("Flags", style="cyan", no_wrap=True)
        table.add_column("Description", style="white")
        table.add_column("Default", style="dim")
        for option in options:
            default = option.value
            table.add_row(
                format_flags(option),
                option.description,
                "" if default is None else f"Default: {default}",
            )
        console.print(table)


def find_generator(name: str) -> type[Generator]:
    """Resolve a generator from the command line, or exit with an error."""
    klass = catalog.find_by_namespace(name)
    if klass is None:
        print_error(f"Could not find generator {name}.")
        sys.exit(1)
    return klass


def run_generator(name: str, argv: list[str], behavior: str, quiet: bool) -> None:
    klass = find_generator(name)
    args, options = parse_options(klass, argv)
    generator = klass(args, options, shell=Shell(console=console, quiet=quiet), behavior=behavior)
    generator.invoke_all()


@click.group()
@click.version_option(version=__version__, prog_name="genhooks")
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, dir_okay=False),
    envvar="GENHOOKS_CONFIG",
    help="JSON file with option defaults and aliases",
)
@click.option(
    "--require", "-r",
    "modules",
    multiple=True,
    help="Module to import generators from (repeatable)",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Log generator loading and resolution",
)
def cli(config: str | None, modules: tuple[str, ...], verbose: bool) -> None:
    """Run generators that hook into each other.

    Use 'list' to see the available generators, 'help' to see the options of
    one, and 'generate' or 'destroy' to run it.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=error_console, show_path=False)],
        )

    try:
        # Option defaults are read when generators are declared
        if config:
            load_settings(config)

        env_modules = os.environ.get("GENHOOKS_GENERATORS", "").split(",")
        load_entry_points()
        load_generators([*env_modules, *modules])
    except GeneratorError as e:
        print_error(str(e))
        sys.exit(1)


@cli.command("list")
def list_cmd() -> None:
    """List the registered generators.

    Examples:

        genhooks -r myapp.generators list
    """
    namespaces = catalog.namespaces()
    if not namespaces:
        print_info("No generators registered")
        return

    table = Table(title="[bold]Generators[/bold]")
    table.add_column("Namespace", style="cyan", no_wrap=True)
    table.add_column("Hooks", style="green", no_wrap=True)
    table.add_column("Description", style="white")

    for namespace in namespaces:
        klass = catalog.get(namespace)
        hooks = ", ".join(f"--{dasherize(h.name)}" for h in klass.invocations()) or "-"
        summary = (klass.desc().strip().splitlines() or [""])[-1].strip()
        table.add_row(namespace, hooks, summary)

    console.print(table)


@cli.command("help")
@click.argument("name")
def help_cmd(name: str) -> None:
    """Show the description and options of a generator.

    NAME is a generator namespace, e.g. 'controller' or 'test_unit:generators:controller'.
    """
    klass = find_generator(name)
    console.print(Panel(
        klass.desc().strip(),
        title=f"[bold]{klass.namespace()}[/bold]",
        border_style="blue",
    ))
    print_options_help(klass)


@cli.command(
    "generate",
    context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
)
@click.argument("name")
@click.argument("argv", nargs=-1, type=click.UNPROCESSED)
@click.option("--quiet", "-q", is_flag=True, help="Suppress status output")
def generate_cmd(name: str, argv: tuple[str, ...], quiet: bool) -> None:
    """Run a generator and the generators it hooks.

    NAME is the generator to run. Remaining arguments and options are passed
    to it.

    Examples:

        genhooks generate controller Account --test-framework=test_unit

        genhooks generate controller Account --skip-test-framework
    """
    try:
        run_generator(name, list(argv), "invoke", quiet)
    except GeneratorError as e:
        print_error(str(e))
        sys.exit(1)

    if not quiet:
        print_success(f"Generated {name}")


@cli.command(
    "destroy",
    context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
)
@click.argument("name")
@click.argument("argv", nargs=-1, type=click.UNPROCESSED)
@click.option("--quiet", "-q", is_flag=True, help="Suppress status output")
def destroy_cmd(name: str, argv: tuple[str, ...], quiet: bool) -> None:
    """Undo what a generator and the generators it hooks created.

    Examples:

        genhooks destroy controller Account
    """
    try:
        run_generator(name, list(argv), "revoke", quiet)
    except GeneratorError as e:
        print_error(str(e))
        sys.exit(1)

    if not quiet:
        print_success(f"Destroyed {name}")


def main() -> None:
    """Entry point for the CLI."""
    try:
        cli()
    except KeyboardInterrupt:
        error_console.print("\n[yellow]Operation cancelled[/yellow]")
        sys.exit(130)
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
