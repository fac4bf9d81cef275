"""Shared pytest fixtures and test helpers for provcheck tests."""

from __future__ import annotations

import json
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from provcheck.config.settings import ProvcheckSettings
from provcheck.domain.records import Record
from provcheck.services.telemetry import _current_span, disable_telemetry


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Drop PROVCHECK_* env vars and reset telemetry between tests.

    ``-v`` calls enable_telemetry(), which sets a ContextVar that would
    otherwise leak into later tests on the same thread.
    """
    for var in ("PROVCHECK_CONFIG", "PROVCHECK_VERBOSE", "PROVCHECK_JSON_OUTPUT"):
        monkeypatch.delenv(var, raising=False)
    yield
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Temporary project directory holding a provcheck.toml."""
    (tmp_path / "provcheck.toml").write_text("", encoding="utf-8")
    return tmp_path


@pytest.fixture
def settings(project_root: Path) -> ProvcheckSettings:
    """Settings rooted at the temporary project directory."""
    return ProvcheckSettings.from_cli(project_root=project_root)


@pytest.fixture
def _isolated_project(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp project so the CLI writes its store there.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command
    test classes.
    """
    monkeypatch.chdir(project_root)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def app(
    code: str | None = "APP-1",
    *,
    quantity: Any = 1,
    package: str | None = "pkg-default",
    start: str | None = None,
    end: str | None = None,
    name: str | None = None,
) -> dict[str, Any]:
    """Raw app entitlement dict."""
    ent: dict[str, Any] = {"productCode": code, "quantity": quantity, "packageName": package}
    if start is not None:
        ent["startDate"] = start
    if end is not None:
        ent["endDate"] = end
    if name is not None:
        ent["name"] = name
    return ent


def dated(code: str, start: str, end: str) -> dict[str, Any]:
    """Raw model/data entitlement dict with a date range."""
    return {"productCode": code, "startDate": start, "endDate": end}


def make_payload(
    apps: list[Any] | None = None,
    models: list[Any] | None = None,
    data: list[Any] | None = None,
) -> dict[str, Any]:
    """Payload with entitlements at the canonical nested path."""
    entitlements: dict[str, Any] = {}
    if apps is not None:
        entitlements["appEntitlements"] = apps
    if models is not None:
        entitlements["modelEntitlements"] = models
    if data is not None:
        entitlements["dataEntitlements"] = data
    return {"properties": {"provisioningDetail": {"entitlements": entitlements}}}


def make_record(
    payload: Any = None,
    *,
    record_id: str = "rec-1",
    name: str | None = "Test Record",
) -> Record:
    """Record whose raw payload is *payload* JSON-encoded (strings pass through)."""
    raw = payload if payload is None or isinstance(payload, str) else json.dumps(payload)
    return Record(id=record_id, name=name, payload_raw=raw)


def write_records(path: Path, records: list[dict[str, Any]]) -> Path:
    """Write *records* as a JSON array file, payloads embedded as strings."""
    rows = []
    for row in records:
        row = dict(row)
        if isinstance(row.get("payload"), dict):
            row["payload"] = json.dumps(row["payload"])
        rows.append(row)
    path.write_text(json.dumps(rows), encoding="utf-8")
    return path
