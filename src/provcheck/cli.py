"""``provcheck`` entry point: global flags, then the subcommands."""

from __future__ import annotations

from typing import Any

import click

from provcheck import __version__
from provcheck.commands import register_commands
from provcheck.commands._base import ProvcheckGroup
from provcheck.commands._context import AppContext
from provcheck.config.settings import ProvcheckSettings


@click.group(
    cls=ProvcheckGroup,
    invoke_without_command=True,
    examples="""\
  provcheck validate records.json
  provcheck --json validate records.json --fail-on-violation
  provcheck -c ci/provcheck.toml rules list""",
)
@click.version_option(__version__, prog_name="provcheck")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="One line per item.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logs, passing rules and timings.")
@click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines.")
@click.option("-c", "--config", "config_path", default=None, help="Use this provcheck.toml.")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, **flags: Any) -> None:
    """provcheck: rule checks for deployment request records."""
    ctx.obj = AppContext(ProvcheckSettings.from_cli(config_path=config_path, **flags))
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
