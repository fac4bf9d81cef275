"""Command: show how record payloads are structured."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from provcheck.commands._base import ProvcheckCommand

if TYPE_CHECKING:
    from provcheck.commands._context import AppContext


@click.command(
    "inspect",
    cls=ProvcheckCommand,
    examples="""\
  provcheck inspect records.json
  provcheck inspect records.json --record a0X5e000001
  provcheck -v inspect records.json""",
)
@click.argument("file", type=click.Path(path_type=Path))
@click.option("--record", "record_id", default=None, help="Only inspect this record id.")
@click.pass_obj
def inspect_cmd(app: AppContext, file: Path, record_id: str | None) -> None:
    """Summarize payload structure, tenant and entitlement counts in FILE."""
    from provcheck.services.validation import ValidationService

    app.emit(ValidationService(app.settings).inspect_file(file, record_id=record_id))
