"""Tests for the app package-name rule."""

from __future__ import annotations

import pytest

from provcheck.config.models import RulesConfig
from provcheck.domain.types import Status
from provcheck.rules.package_name import validate_app_package_name
from tests.conftest import app, make_payload, make_record


def _run(payload: dict) -> object:
    return validate_app_package_name(payload, make_record(payload), RulesConfig())


class TestPackageName:
    def test_all_named(self) -> None:
        result = _run(make_payload(apps=[app("A", package="a-pkg")]))
        assert result.status is Status.PASS
        assert result.details["passCount"] == 1

    @pytest.mark.parametrize("package", [None, "", "   "])
    def test_missing_fails(self, package: str | None) -> None:
        result = _run(make_payload(apps=[app("A", package=package, name="App A")]))
        assert result.status is Status.FAIL
        assert result.message == (
            "1 of 1 app entitlements failed: App A (app-1) is missing a package name"
        )
        failure = result.details["failures"][0]
        assert failure["reason"] == "Missing package name"
        assert failure["index"] == 1

    @pytest.mark.parametrize(
        "code",
        ["DATAAPI-LOCINTEL", "IC-RISKDATALAKE", "RI-COMETA", "DATAAPI-BULK-GEOCODE"],
    )
    def test_exempt_codes(self, code: str) -> None:
        assert _run(make_payload(apps=[app(code, package=None)])).status is Status.PASS

    def test_snake_case_package(self) -> None:
        payload = make_payload(apps=[{"productCode": "A", "package_name": "p"}])
        assert _run(payload).status is Status.PASS

    def test_no_apps(self) -> None:
        result = _run({})
        assert result.status is Status.PASS
        assert result.message == "No app entitlements found"

    def test_counts(self) -> None:
        payload = make_payload(apps=[app("A"), app("B", package=None), app("C", package="")])
        result = _run(payload)
        assert result.details["totalCount"] == 3
        assert result.details["passCount"] == 1
        assert result.details["failCount"] == 2
