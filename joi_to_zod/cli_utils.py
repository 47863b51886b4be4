"""
Rebuilds the joi_to_zod invocation for the generation comment of rendered modules.
"""

from pathlib import Path

import click
from click.core import ParameterSource

PROGRAM_NAME = "joi_to_zod"


def reconstruct_command_line(click_command: click.Command) -> str:
    """
    Rebuild the invocation that is currently running.

    Only parameters the user actually supplied are shown. Positional
    arguments come first, then options in declaration order.

    Args:
        click_command: The running joi_to_zod command

    Returns:
        Command line string, or just the program name outside a click context
    """
    ctx = click.get_current_context(silent=True)
    if ctx is None or not ctx.params:
        return PROGRAM_NAME

    arguments = []
    options = []
    for param in click_command.params:
        value = ctx.params.get(param.name)
        if value is None or ctx.get_parameter_source(param.name) in (ParameterSource.DEFAULT, None):
            continue

        if isinstance(param, click.Argument):
            arguments.append(_display_value(value))
        elif isinstance(param, click.Option):
            options.append(param.opts[0])
            if not param.is_flag:
                options.append(_display_value(value))

    return " ".join([PROGRAM_NAME] + arguments + options)


def _display_value(value) -> str:
    """Existing files are shown by name only."""
    path = Path(str(value))
    if isinstance(value, (str, Path)) and path.exists():
        return path.name
    return str(value)
