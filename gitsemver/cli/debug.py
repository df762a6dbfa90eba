import click
from click.core import ParameterSource

from .utils.logging import configure_logging


def add_debug_option(cmd):
    """Decorator to add the --debug/--no-debug option to a command or group"""
    if isinstance(cmd, click.Command):
        if not any(param.name == "debug" for param in cmd.params):
            cmd.params.insert(0, _debug_option())
        return cmd

    return click.option(
        "--debug/--no-debug",
        is_eager=True,
        expose_value=False,
        callback=_set_debug,
        help="Show strategy diagnostics on stderr.",
    )(cmd)


def _debug_option() -> click.Option:
    return click.Option(
        ["--debug/--no-debug"],
        is_eager=True,
        expose_value=False,
        callback=_set_debug,
        help="Show strategy diagnostics on stderr.",
    )


def _set_debug(ctx, param, value: bool):
    """Callback for the debug flag.

    A flag left at its default never overrides a value given explicitly on a
    parent command (``gitsemver --debug calculate``).
    """
    root_ctx = ctx.find_root()
    root_ctx.ensure_object(dict)

    explicit = ctx.get_parameter_source(param.name) != ParameterSource.DEFAULT
    if explicit or "DEBUG" not in root_ctx.obj:
        root_ctx.obj["DEBUG"] = value

    configure_logging(root_ctx.obj["DEBUG"])
    return root_ctx.obj["DEBUG"]
