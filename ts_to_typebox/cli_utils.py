"""
CLI utilities for command line reconstruction and introspection.
"""

from pathlib import Path

import click

PROGRAM_NAME = "ts2typebox"


def reconstruct_command_line(click_command: click.Command) -> str:
    """
    Reconstruct command line from current Click context using introspection.

    Args:
        click_command: Click command object for introspection

    Returns:
        Reconstructed command line string
    """
    try:
        ctx = click.get_current_context()
        cli_args = ctx.params
    except RuntimeError:
        # No active context, return basic command
        return PROGRAM_NAME

    if not cli_args:
        return PROGRAM_NAME

    cmd_parts = [PROGRAM_NAME]

    for param in click_command.params:
        if not isinstance(param, click.Option) or param.name not in cli_args:
            continue

        value = cli_args[param.name]
        # Skip if it's the default value
        if value == param.default:
            continue

        if param.is_flag:
            # Boolean flag pairs (--format/--no-format) use the matching spelling
            if value:
                cmd_parts.append(param.opts[0])
            elif param.secondary_opts:
                cmd_parts.append(param.secondary_opts[0])
            continue

        if value is None:
            continue

        # File paths are shown by name only
        if isinstance(value, (str, Path)):
            path_obj = Path(str(value))
            formatted_value = path_obj.name if path_obj.exists() else str(value)
        else:
            formatted_value = str(value)

        flag = param.opts[0] if param.opts else f"--{param.name}"
        cmd_parts.extend([flag, formatted_value])

    return " ".join(cmd_parts)
