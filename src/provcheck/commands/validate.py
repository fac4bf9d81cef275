"""Command: validate deployment records against the enabled rules."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from provcheck.commands._base import RULE_ID, ProvcheckCommand

if TYPE_CHECKING:
    from provcheck.commands._context import AppContext


@click.command(
    cls=ProvcheckCommand,
    examples="""\
  provcheck validate records.json
  provcheck validate records.jsonl --failures-only
  provcheck validate records.json --rule app-quantity-validation --rule model-count-validation
  provcheck validate records.json --workers 8
  provcheck --json validate records.json --fail-on-violation""",
)
@click.argument("file", type=click.Path(path_type=Path))
@click.option(
    "--rule",
    "rule_ids",
    type=RULE_ID,
    multiple=True,
    help="Only run this rule (repeatable). Must also be enabled.",
)
@click.option("--failures-only", is_flag=True, help="Only list records that failed.")
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=None,
    help="Worker threads (overrides [batch] max_workers).",
)
@click.option(
    "--fail-on-violation",
    is_flag=True,
    help="Exit with code 2 when any record fails.",
)
@click.pass_obj
def validate(
    app: AppContext,
    file: Path,
    rule_ids: tuple[str, ...],
    failures_only: bool,
    workers: int | None,
    fail_on_violation: bool,
) -> None:
    """Validate every record in FILE (JSON array, object or JSON lines)."""
    from provcheck.services.validation import ValidationService

    settings = app.settings
    if workers is not None:
        settings = settings.model_copy(
            update={"batch": settings.batch.model_copy(update={"max_workers": workers})}
        )

    svc = ValidationService(settings, plugins=app.plugins)
    result = svc.validate_file(
        file,
        rule_ids=list(rule_ids) or None,
        failures_only=failures_only,
    )
    app.emit(result, fail_on_violation=fail_on_violation)
