"""Turn command-line arguments into generator options using Click."""

from typing import Any, Sequence

import click

from genhooks.base import Generator
from genhooks.models import OptionDescriptor, dasherize


def _skip_name(name: str) -> str:
    return f"skip_{name}"


def _no_name(name: str) -> str:
    return f"no_{name}"


def build_params(option: OptionDescriptor) -> list[click.Parameter]:
    """Click parameters for one option, including its hidden skip flags."""
    flag = dasherize(option.name)
    help_text = option.description or None

    if option.type == "boolean":
        params: list[click.Parameter] = [
            click.Option(
                [option.name, f"--{flag}/--no-{flag}", *option.aliases],
                default=bool(option.value),
                help=help_text,
                hidden=option.hide,
            )
        ]
    else:
        default = option.value if isinstance(option.value, str) else None
        params = [
            click.Option(
                [option.name, f"--{flag}", *option.aliases],
                type=str,
                default=default,
                metavar=option.banner or None,
                help=help_text,
                hidden=option.hide,
            ),
            click.Option(
                [_no_name(option.name), f"--no-{flag}"], is_flag=True, hidden=True
            ),
        ]

    params.append(
        click.Option([_skip_name(option.name), f"--skip-{flag}"], is_flag=True, hidden=True)
    )
    return params


def parsed_options(klass: type[Generator]) -> list[OptionDescriptor]:
    """The class's own options followed by those of the generators it hooks."""
    options = list(klass.class_options().values())
    grouped = klass.options_from_invocations({}, klass.class_options())
    for group in grouped.values():
        options.extend(group)
    return options


def build_command(klass: type[Generator]) -> click.Command:
    """A Click command that accepts every option a run of ``klass`` understands."""
    params: list[click.Parameter] = [click.Argument(["args"], nargs=-1)]
    for option in parsed_options(klass):
        params.extend(build_params(option))

    return click.Command(
        klass.generator_name() or klass.namespace(),
        params=params,
        help=klass.desc(),
        add_help_option=False,
    )


def parse_options(
    klass: type[Generator], argv: Sequence[str]
) -> tuple[list[str], dict[str, Any]]:
    """Parse ``argv`` for ``klass``.

    Returns:
        The positional arguments and the option values. ``--skip-NAME`` and
        ``--no-NAME`` make an option's value False.

    Raises:
        click.UsageError: If ``argv`` contains unknown options or bad values.
    """
    command = build_command(klass)
    ctx = command.make_context(command.name, list(argv), resilient_parsing=False)

    params = dict(ctx.params)
    args = list(params.pop("args", ()))
    values: dict[str, Any] = {}
    for option in parsed_options(klass):
        if params.pop(_skip_name(option.name), False) or params.pop(
            _no_name(option.name), False
        ):
            values[option.name] = False
        else:
            values[option.name] = params.get(option.name)

    return args, values
