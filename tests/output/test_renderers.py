"""Tests for operation-specific Rich renderers."""

from provcheck.output.renderers import render_quiet, render_result
from provcheck.services.result import ServiceError, ServiceResult

# ── Helpers ───────────────────────────────────────────────────────────


def _ok(op: str, **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _err(op: str, code: str, message: str, **detail: object) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=message, detail=dict(detail)),
    )


def _entry(record_id: str, status: str, failures: list[tuple[str, str]] = ()) -> dict:
    rule_results = [{"ruleId": rid, "status": "FAIL", "message": msg} for rid, msg in failures]
    rule_results.append({"ruleId": "model-count-validation", "status": "PASS", "message": "fine"})
    return {
        "recordId": record_id,
        "recordName": f"Name {record_id}",
        "overallStatus": status,
        "ruleResults": rule_results,
        "tooltip": "",
    }


def _batch(*entries: dict) -> ServiceResult:
    failed = sum(1 for e in entries if e["overallStatus"] == "FAIL")
    return _ok(
        "validate_batch",
        total=len(entries),
        passed=len(entries) - failed,
        failed=failed,
        skipped=0,
        cancelled=False,
        rules=[],
        results=list(entries),
    )


# ── Error rendering ──────────────────────────────────────────────────


class TestErrorRenderer:
    def test_basic_error(self) -> None:
        output = render_result(_err("validate_batch", "RECORDS_NOT_FOUND", "Records file not found"))
        assert "ERROR" in output
        assert "validate_batch" in output
        assert "Records file not found" in output

    def test_verbose_shows_detail(self) -> None:
        result = _err("update_rule", "UNKNOWN_RULE", "Unknown", rule_id="nope")
        output = render_result(result, verbose=True)
        assert "detail" in output
        assert "rule_id" in output
        assert "nope" in output

    def test_no_error_object(self) -> None:
        assert "Unknown error" in render_result(ServiceResult(ok=False, op="test"))


# ── Validation rendering ─────────────────────────────────────────────


class TestValidationRenderer:
    def test_batch_summary_and_table(self) -> None:
        result = _batch(
            _entry("rec-1", "PASS"),
            _entry("rec-2", "FAIL", [("app-quantity-validation", "1 of 1 app entitlements failed")]),
        )
        output = render_result(result)
        assert output.startswith("OK")
        assert "total: 2" in output
        assert "failed: 1" in output
        assert "rec-1" in output
        assert "rec-2" in output
        assert "1 of 1 app entitlements failed" in output

    def test_passing_rules_hidden_unless_verbose(self) -> None:
        result = _batch(_entry("rec-1", "PASS"))
        assert "fine" not in render_result(result)
        assert "fine" in render_result(result, verbose=True)

    def test_single_record(self) -> None:
        entry = _entry("rec-9", "FAIL", [("entitlement-date-gap-validation", "1 date gap found")])
        output = render_result(_ok("validate_record", **entry))
        assert "rec-9" in output
        assert "1 date gap found" in output
        assert "total:" not in output

    def test_cancelled_flag_shown(self) -> None:
        result = _ok(
            "validate_batch", total=2, passed=0, failed=0, skipped=2, cancelled=True, results=[]
        )
        assert "cancelled: True" in render_result(result)

    def test_evaluator_error_in_verbose(self) -> None:
        entry = _entry("rec-1", "PASS")
        entry["ruleResults"] = [
            {
                "ruleId": "model-count-validation",
                "status": "PASS",
                "message": "Validation error, defaulting to pass",
                "details": {"error": "kaboom"},
            }
        ]
        output = render_result(_batch(entry), verbose=True)
        assert "error: kaboom" in output


# ── Rule configuration rendering ─────────────────────────────────────


class TestRuleRenderers:
    def test_rule_list(self) -> None:
        result = _ok(
            "list_rules",
            items=[
                {
                    "id": "app-quantity-validation",
                    "name": "App Quantity Validation",
                    "category": "product-validation",
                    "description": "quantity must be 1",
                    "enabled": True,
                },
                {
                    "id": "model-count-validation",
                    "name": "Model Count Validation",
                    "category": "product-validation",
                    "description": "limit",
                    "enabled": False,
                },
            ],
            count=2,
            enabled_count=1,
        )
        output = render_result(result)
        assert "app-quantity-validation" in output
        assert "yes" in output
        assert "no" in output
        assert "1 of 2 enabled" in output
        assert "quantity must be 1" not in output
        assert "quantity must be 1" in render_result(result, verbose=True)

    def test_update(self) -> None:
        result = _ok("update_rule", id="model-count-validation", name="Model Count", enabled=False)
        output = render_result(result)
        assert "model-count-validation" in output
        assert "enabled: False" in output

    def test_reset(self) -> None:
        result = _ok("reset_rules", enabled={"model-count-validation": True}, count=1)
        assert "model-count-validation: enabled" in render_result(result)


# ── Inspect rendering ────────────────────────────────────────────────


class TestInspectRenderer:
    def test_inspect_items(self) -> None:
        result = _ok(
            "inspect_payload",
            items=[
                {
                    "id": "rec-1",
                    "name": "One",
                    "hasPayload": True,
                    "payloadValid": True,
                    "tenantName": "acme",
                    "structure": {
                        "appEntitlementsPath": "appEntitlements",
                        "counts": {"app": 2, "model": 0, "data": 1},
                        "allPaths": ["appEntitlements"],
                    },
                },
                {"id": "rec-2", "name": "Two", "hasPayload": True, "payloadValid": False},
                {"id": "rec-3", "name": "Three", "hasPayload": False, "payloadValid": False},
            ],
            count=3,
        )
        output = render_result(result)
        assert "acme" in output
        assert "app=2" in output
        assert "malformed payload" in output
        assert "no payload" in output


# ── Generic / quiet ──────────────────────────────────────────────────


class TestGenericAndQuiet:
    def test_generic_fallback(self) -> None:
        output = render_result(_ok("custom_op", flag=True, nested={"a": 1}))
        assert "custom_op" in output
        assert "flag: True" in output
        assert '{"a":1}' in output

    def test_verbose_meta(self) -> None:
        result = ServiceResult(
            ok=True,
            op="custom_op",
            meta={"telemetry": {"name": "RuleService.list_rules", "duration_ms": 1.5}},
        )
        output = render_result(result, verbose=True)
        assert "meta:" in output
        assert "RuleService.list_rules" in output

    def test_quiet_batch(self) -> None:
        result = _batch(_entry("rec-1", "PASS"), _entry("rec-2", "FAIL"))
        assert render_quiet(result) == "rec-1 PASS\nrec-2 FAIL"

    def test_quiet_items(self) -> None:
        assert render_quiet(_ok("list_rules", items=[{"id": "a"}, {"id": "b"}])) == "a\nb"

    def test_quiet_error(self) -> None:
        assert render_quiet(_err("x", "E", "broken")).startswith("ERROR: x")
