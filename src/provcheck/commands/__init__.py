"""Subcommands of the ``provcheck`` CLI."""

from __future__ import annotations

import click


def register_commands(cli: click.Group) -> None:
    from provcheck.commands.inspect_cmd import inspect_cmd
    from provcheck.commands.rules import rules
    from provcheck.commands.validate import validate

    for command in (validate, inspect_cmd, rules):
        cli.add_command(command)
