"""ValidationService: single-record and batch validation.

The engine itself is pure; this service resolves the enabled rule set
from the configuration store, fans records out over a thread pool, and
reports the outcome as a ServiceResult.

Records are independent, so batches need no coordination beyond
collecting results in input order. The rule set is resolved once per
batch and is read-only while the batch runs.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any

from provcheck.domain.catalog import RuleSet, find_rule
from provcheck.domain.entitlements import analyze_payload_structure, parse_tenant_name
from provcheck.domain.records import Record
from provcheck.domain.results import ValidationResult
from provcheck.engine import get_validation_tooltip, parse_payload, validate_record
from provcheck.infrastructure.records import RecordSourceError, load_records
from provcheck.services._helpers import pluralize
from provcheck.services.base import BaseService
from provcheck.services.result import ErrorCode, ServiceError, ServiceResult
from provcheck.services.telemetry import get_current_span, trace_span, traced

logger = logging.getLogger(__name__)


class ValidationService(BaseService):
    """Validates records against the enabled rules."""

    # ------------------------------------------------------------------
    # Rule set resolution
    # ------------------------------------------------------------------

    def resolve_rule_set(self, rule_ids: list[str] | None = None) -> RuleSet:
        """Enabled rule set from the store, optionally narrowed to *rule_ids*."""
        rule_set = self._store.load().rule_set()
        if rule_ids:
            return rule_set.only(rule_ids)
        return rule_set

    def _unknown_rules(self, rule_ids: list[str] | None) -> ServiceError | None:
        unknown = [rid for rid in rule_ids or [] if find_rule(rid) is None]
        if not unknown:
            return None
        return ServiceError(
            code=ErrorCode.UNKNOWN_RULE,
            message=f"Unknown rule id(s): {', '.join(unknown)}",
            detail={"unknown": unknown},
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @traced
    def validate_record(
        self,
        record: Record,
        *,
        rule_ids: list[str] | None = None,
    ) -> ServiceResult:
        """Validate one record."""
        error = self._unknown_rules(rule_ids)
        if error is not None:
            return ServiceResult.failure("validate_record", error)

        rule_set = self.resolve_rule_set(rule_ids)
        result = validate_record(record, rule_set, options=self._settings.rules)

        warnings: list[str] = []
        self._notify_validated(result, warnings)
        return ServiceResult(
            ok=True,
            op="validate_record",
            data=self._result_entry(result, rule_set),
            warnings=warnings,
        )

    @traced
    def validate_batch(
        self,
        records: list[Record],
        *,
        rule_ids: list[str] | None = None,
        cancel: threading.Event | None = None,
        failures_only: bool = False,
    ) -> ServiceResult:
        """Validate *records* concurrently, preserving input order.

        Records not yet started when *cancel* is set are reported as
        skipped.
        """
        error = self._unknown_rules(rule_ids)
        if error is not None:
            return ServiceResult.failure("validate_batch", error)

        rule_set = self.resolve_rule_set(rule_ids)
        with trace_span("run_batch") as span:
            outcomes = self._run_batch(records, rule_set, cancel)
            if span is not None:
                span.annotate("records", len(records))

        warnings: list[str] = []
        entries: list[dict[str, Any]] = []
        passed = failed = skipped = 0
        for outcome in outcomes:
            if outcome is None:
                skipped += 1
                continue
            self._notify_validated(outcome, warnings)
            if outcome.failed_rules:
                failed += 1
            else:
                passed += 1
                if failures_only:
                    continue
            entries.append(self._result_entry(outcome, rule_set))

        summary: dict[str, Any] = {
            "total": len(records),
            "passed": passed,
            "failed": failed,
            "skipped": skipped,
            "cancelled": bool(cancel is not None and cancel.is_set()),
            "rules": [rule.id for rule in rule_set.enabled_rules()],
        }
        self._dispatch_event(
            "post_batch",
            {"total": len(records), "passed": passed, "failed": failed, "skipped": skipped},
            warnings,
        )
        for extra in self._dispatch_event("validation_summary", {"summary": dict(summary)}, warnings):
            if isinstance(extra, dict):
                summary.update(extra)

        logger.info(
            "Validated %s: %d passed, %d failed, %d skipped",
            pluralize(len(records), "record"),
            passed,
            failed,
            skipped,
        )
        return ServiceResult(
            ok=True,
            op="validate_batch",
            data={**summary, "results": entries},
            warnings=warnings,
        )

    @traced
    def validate_file(self, path: Path, **kwargs: Any) -> ServiceResult:
        """Load records from *path* and validate them as a batch."""
        records, error = self._load(path)
        if error is not None:
            return ServiceResult.failure("validate_batch", error)
        span = get_current_span()
        if span is not None:
            span.annotate("path", str(path))
        return self.validate_batch(records, **kwargs)

    @traced
    def inspect_file(self, path: Path, *, record_id: str | None = None) -> ServiceResult:
        """Describe payload structure for the records in *path*."""
        records, error = self._load(path)
        if error is not None:
            return ServiceResult.failure("inspect_payload", error)

        if record_id is not None:
            records = [r for r in records if r.id == record_id]
            if not records:
                return ServiceResult.failure(
                    "inspect_payload",
                    ServiceError(
                        code=ErrorCode.RECORD_NOT_FOUND,
                        message=f"No record with id {record_id!r} in {path}",
                        detail={"record_id": record_id, "path": str(path)},
                    ),
                )

        items = [self._inspect(record) for record in records]
        return ServiceResult(
            ok=True,
            op="inspect_payload",
            data={"items": items, "count": len(items)},
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _run_batch(
        self,
        records: list[Record],
        rule_set: RuleSet,
        cancel: threading.Event | None,
    ) -> list[ValidationResult | None]:
        options = self._settings.rules

        def run(record: Record) -> ValidationResult | None:
            if cancel is not None and cancel.is_set():
                return None
            return validate_record(record, rule_set, options=options)

        workers = min(self._settings.batch.max_workers, len(records))
        if workers <= 1:
            return [run(record) for record in records]
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(run, records))

    def _load(self, path: Path) -> tuple[list[Record], ServiceError | None]:
        if not path.is_file():
            return [], ServiceError(
                code=ErrorCode.RECORDS_NOT_FOUND,
                message=f"Records file not found: {path}",
                detail={"path": str(path)},
            )
        try:
            return load_records(path), None
        except RecordSourceError as exc:
            return [], ServiceError(
                code=ErrorCode.RECORDS_INVALID,
                message=str(exc),
                detail={"path": str(path)},
            )

    def _notify_validated(self, result: ValidationResult, warnings: list[str]) -> None:
        self._dispatch_event(
            "post_validate",
            {
                "record_id": result.record_id,
                "record_name": result.record_name,
                "overall_status": str(result.overall_status),
                "failed_rules": [r.rule_id for r in result.failed_rules],
            },
            warnings,
        )

    @staticmethod
    def _result_entry(result: ValidationResult, rule_set: RuleSet) -> dict[str, Any]:
        entry = result.to_dict()
        entry["tooltip"] = get_validation_tooltip(result, rule_set.rules)
        return entry

    @staticmethod
    def _inspect(record: Record) -> dict[str, Any]:
        ok, payload = parse_payload(record.payload_raw)
        return {
            "id": record.id,
            "name": record.display_name,
            "hasPayload": bool(record.payload_raw),
            "payloadValid": ok,
            "tenantName": parse_tenant_name(payload) if ok else "N/A",
            "structure": analyze_payload_structure(payload) if ok else None,
        }
