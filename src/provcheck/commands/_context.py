"""AppContext: the object every command receives via ``@click.pass_obj``."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from provcheck.config.logging import configure_logging
from provcheck.output.formatters import OutputSettings, format_result
from provcheck.services.telemetry import enable_telemetry

if TYPE_CHECKING:
    from provcheck.config.settings import ProvcheckSettings
    from provcheck.plugins.manager import PluginManager
    from provcheck.services.result import ServiceResult

EXIT_FAILURE = 1
EXIT_VIOLATIONS = 2


class AppContext:
    """Settings, lazily loaded plugins and result emission for one CLI run."""

    def __init__(self, settings: ProvcheckSettings) -> None:
        self.settings = settings
        self.output = OutputSettings(
            json_output=settings.json_output,
            quiet=settings.quiet,
            verbose=settings.verbose,
        )
        self._plugins: PluginManager | None = None

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        if settings.verbose:
            enable_telemetry()

    @property
    def plugins(self) -> PluginManager:
        # Entry points are only scanned by commands that dispatch hooks.
        if self._plugins is None:
            from provcheck.plugins.manager import PluginManager

            self._plugins = PluginManager()
            self._plugins.discover_and_load()
        return self._plugins

    def emit(self, result: ServiceResult, *, fail_on_violation: bool = False) -> None:
        """Print *result* and exit with the matching status.

        Failures go to stderr with exit code 1. Successful output goes to
        stdout, warnings to stderr (omitted in JSON mode, where they are
        part of the document). With *fail_on_violation*, a validation
        result containing failed records exits with code 2.
        """
        text = format_result(result, settings=self.output)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(EXIT_FAILURE)

        click.echo(text)
        if not self.output.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
        if fail_on_violation and result.has_violations:
            raise SystemExit(EXIT_VIOLATIONS)
