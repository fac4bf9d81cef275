"""Command group: list and toggle validation rules."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from provcheck.commands._base import RULE_ID, ProvcheckGroup
from provcheck.services.rules import RuleService

if TYPE_CHECKING:
    from provcheck.commands._context import AppContext

_RULES_EXAMPLES = """\
  provcheck rules list
  provcheck rules disable model-count-validation
  provcheck rules enable model-count-validation
  provcheck rules reset"""


@click.group(cls=ProvcheckGroup, examples=_RULES_EXAMPLES)
@click.pass_obj
def rules(app: AppContext) -> None:
    """Inspect and toggle the enabled rule set."""


@rules.command(
    "list",
    examples="""\
  provcheck rules list
  provcheck -v rules list
  provcheck --json rules list""",
)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List every rule with its enabled state."""
    app.emit(RuleService(app.settings).list_rules())


@rules.command(examples="  provcheck rules enable entitlement-date-gap-validation")
@click.argument("rule_id", type=RULE_ID)
@click.pass_obj
def enable(app: AppContext, rule_id: str) -> None:
    """Enable RULE_ID."""
    app.emit(RuleService(app.settings, plugins=app.plugins).set_enabled(rule_id, True))


@rules.command(examples="  provcheck rules disable entitlement-date-gap-validation")
@click.argument("rule_id", type=RULE_ID)
@click.pass_obj
def disable(app: AppContext, rule_id: str) -> None:
    """Disable RULE_ID."""
    app.emit(RuleService(app.settings, plugins=app.plugins).set_enabled(rule_id, False))


@rules.command(examples="  provcheck rules reset")
@click.pass_obj
def reset(app: AppContext) -> None:
    """Restore every rule to its default enabled state."""
    app.emit(RuleService(app.settings).reset())
