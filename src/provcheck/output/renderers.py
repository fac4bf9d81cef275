"""Human-readable rendering of ServiceResult, one renderer per ``op``.

Renderers draw onto a recording Rich console; the text is collected with
:func:`get_output`. Ops without a dedicated renderer print their data as
``key: value`` lines.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from provcheck.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from provcheck.services.result import ServiceResult


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Text for *result*; plain (no ANSI codes) when stdout is not a terminal."""
    console = create_console()
    if not result.ok:
        _render_error(result, console, verbose=verbose)
    else:
        _OP_RENDERERS.get(result.op, _render_generic)(result, console, verbose=verbose)
        if verbose and result.meta:
            _render_meta(console, result.meta)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """One line per record or item, for ``--quiet`` and shell pipelines."""
    if not result.ok:
        reason = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {reason}"

    results = result.data.get("results")
    if isinstance(results, list):
        return "\n".join(f"{r.get('recordId')} {r.get('overallStatus')}" for r in results)

    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(str(item.get("id", "")) for item in items if isinstance(item, dict))

    return f"OK: {result.op}"


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text.assemble(("OK", "pc.ok"), (f"  {result.op}", "pc.op")))


_FIELD_STYLES = {"id": "pc.id", "rule_id": "pc.id", "name": "pc.title"}


def _field(console: Console, key: str, value: Any) -> None:
    console.print(
        Text.assemble((f"  {key}: ", "pc.key"), (str(value), _FIELD_STYLES.get(key, "")))
    )


def _status_text(status: str) -> Text:
    return Text(status, style=style_for_status(status))


def _timing_style(duration_ms: float) -> str:
    if duration_ms > 1000:
        return "bold red"
    if duration_ms > 100:
        return "yellow"
    return "dim"


def _span_label(span: dict[str, Any]) -> Text:
    duration = float(span.get("duration_ms", 0.0))
    label = Text.assemble((f"{duration:>8.2f}ms", _timing_style(duration)), f"  {span.get('name', '?')}")
    annotations = span.get("annotations") or {}
    if annotations:
        label.append("  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")", "dim")
    return label


def _add_spans(tree: Tree, span: dict[str, Any]) -> None:
    branch = tree.add(_span_label(span))
    for child in span.get("children", []):
        _add_spans(branch, child)


def _render_meta(console: Console, meta: dict[str, Any]) -> None:
    """Verbose-only trailer: telemetry as a span tree, other keys verbatim."""
    tree = Tree(Text("meta:", style="dim"))
    for key, value in meta.items():
        if key == "telemetry" and isinstance(value, dict):
            _add_spans(tree, value)
        else:
            tree.add(f"{key}: {value}")
    console.print()
    console.print(tree)


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    console.print(
        Text.assemble(
            ("ERROR", "pc.error"),
            (f"  {result.op}", "pc.op"),
            ": ",
            err.message if err else "Unknown error",
        )
    )
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for key, value in err.detail.items():
            console.print(f"    {key}: {value}")


def _render_rule_lines(console: Console, entry: dict[str, Any], *, verbose: bool) -> None:
    """Per-rule lines under one record: failures always, passes when verbose."""
    for rule in entry.get("ruleResults", []):
        status = str(rule.get("status", ""))
        if status != "FAIL" and not verbose:
            continue
        line = Text("    ")
        line.append(_status_text(status))
        line.append(f"  {rule.get('ruleId', '')}: {rule.get('message', '')}")
        console.print(line)
        details = rule.get("details") or {}
        if verbose and isinstance(details, dict) and "error" in details:
            console.print(f"      error: {details['error']}")


def _render_validation(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render validate_batch / validate_record results."""
    _status_line(console, result)
    entries = result.data.get("results")
    if entries is None:
        entries = [result.data]

    if result.op == "validate_batch":
        for key in ("total", "passed", "failed", "skipped"):
            _field(console, key, result.data.get(key, 0))
        if result.data.get("cancelled"):
            _field(console, "cancelled", True)

    if entries:
        table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
        table.add_column("Record", style="pc.id", no_wrap=True)
        table.add_column("Name", style="pc.title")
        table.add_column("Status")
        table.add_column("Failed rules")
        for entry in entries:
            failed = [
                str(r.get("ruleId")) for r in entry.get("ruleResults", []) if r.get("status") == "FAIL"
            ]
            table.add_row(
                str(entry.get("recordId", "")),
                str(entry.get("recordName", "")),
                _status_text(str(entry.get("overallStatus", ""))),
                ", ".join(failed) or "-",
            )
        console.print(table)

        for entry in entries:
            if entry.get("overallStatus") != "FAIL" and not verbose:
                continue
            console.print(f"\n[bold]{entry.get('recordId')}[/bold] {entry.get('recordName', '')}")
            _render_rule_lines(console, entry, verbose=verbose)


def _render_rule_list(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render list_rules as a table."""
    _status_line(console, result)
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="pc.id", no_wrap=True)
    table.add_column("Name", style="pc.title")
    table.add_column("Category", style="pc.category")
    table.add_column("Enabled")
    if verbose:
        table.add_column("Description")

    for item in result.data.get("items", []):
        enabled = bool(item.get("enabled"))
        row: list[Any] = [
            str(item.get("id", "")),
            str(item.get("name", "")),
            str(item.get("category", "")),
            Text("yes", style="pc.ok") if enabled else Text("no", style="dim"),
        ]
        if verbose:
            row.append(str(item.get("description", "")))
        table.add_row(*row)

    console.print(table)
    console.print(f"{result.data.get('enabled_count', 0)} of {result.data.get('count', 0)} enabled")


def _render_rule_update(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render update_rule / reset_rules results."""
    _status_line(console, result)
    enabled_map = result.data.get("enabled")
    for key in ("id", "name", "enabled"):
        if key in result.data and not isinstance(result.data[key], dict):
            _field(console, key, result.data[key])
    if isinstance(enabled_map, dict):
        for rule_id, enabled in enabled_map.items():
            console.print(f"    {rule_id}: {'enabled' if enabled else 'disabled'}")


def _render_inspect(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render payload structure analysis per record."""
    _status_line(console, result)
    for item in result.data.get("items", []):
        console.print(f"\n[bold]{item.get('id')}[/bold] {item.get('name', '')}")
        if not item.get("hasPayload"):
            console.print("  no payload")
            continue
        if not item.get("payloadValid"):
            console.print("  [pc.warning]malformed payload[/pc.warning]")
            continue
        structure = item.get("structure") or {}
        _field(console, "tenant", item.get("tenantName"))
        _field(console, "app_path", structure.get("appEntitlementsPath") or "-")
        counts = structure.get("counts", {})
        _field(console, "counts", ", ".join(f"{k}={v}" for k, v in counts.items()))
        if verbose:
            for path in structure.get("allPaths", []):
                console.print(f"    {path}")


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)


_OP_RENDERERS: dict[str, Any] = {
    "validate_batch": _render_validation,
    "validate_record": _render_validation,
    "list_rules": _render_rule_list,
    "update_rule": _render_rule_update,
    "reset_rules": _render_rule_update,
    "inspect_payload": _render_inspect,
}
