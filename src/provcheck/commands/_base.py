"""Shared Click building blocks: ``--examples`` support and rule-id arguments."""

from __future__ import annotations

from typing import Any

import click
from click.shell_completion import CompletionItem

from provcheck.domain.catalog import DEFAULT_RULES


class _ExamplesMixin:
    """Adds an eager ``--examples`` flag when constructed with ``examples=``."""

    examples: str | None

    def _init_examples(self, examples: str | None) -> None:
        self.examples = examples
        if not examples:
            return
        self.params.append(  # type: ignore[attr-defined]
            click.Option(
                ["--examples"],
                is_flag=True,
                expose_value=False,
                is_eager=True,
                callback=self._print_examples,
                help="Show usage examples.",
            )
        )

    def _print_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if value:
            click.echo(f"Examples for '{ctx.command_path}':\n\n{self.examples}")
            ctx.exit(0)


class ProvcheckCommand(_ExamplesMixin, click.Command):
    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)


class ProvcheckGroup(_ExamplesMixin, click.Group):
    """Group whose subcommands are :class:`ProvcheckCommand` by default."""

    command_class = ProvcheckCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)


class RuleIdType(click.ParamType):
    """A rule id, completed from the built-in catalog.

    Values pass through unchanged so unknown ids reach the service layer,
    which reports them as ``UNKNOWN_RULE``.
    """

    name = "rule_id"

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> str:
        return str(value).strip()

    def shell_complete(
        self, ctx: click.Context, param: click.Parameter, incomplete: str
    ) -> list[CompletionItem]:
        return [
            CompletionItem(rule.id, help=rule.name)
            for rule in DEFAULT_RULES
            if rule.id.startswith(incomplete)
        ]


RULE_ID = RuleIdType()
