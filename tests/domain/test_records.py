"""Tests for the Record model."""

from __future__ import annotations

import json

from provcheck.domain.records import Record


class TestRecord:
    def test_salesforce_spelling(self) -> None:
        record = Record.model_validate(
            {"Id": "a0X1", "Name": "Deploy-1", "Payload_Data__c": "{}"}
        )
        assert record.id == "a0X1"
        assert record.name == "Deploy-1"
        assert record.payload_raw == "{}"

    def test_camel_spelling(self) -> None:
        record = Record.model_validate({"id": "x", "payloadRaw": "{}"})
        assert record.payload_raw == "{}"

    def test_int_id_coerced(self) -> None:
        assert Record.model_validate({"id": 7}).id == "7"

    def test_object_payload_encoded(self) -> None:
        record = Record.model_validate({"id": "x", "payload": {"a": 1}})
        assert json.loads(record.payload_raw or "") == {"a": 1}

    def test_display_name_default(self) -> None:
        assert Record(id="x").display_name == "Unknown"

    def test_scalar_payloads_encoded(self) -> None:
        assert Record.model_validate({"id": "x", "Payload_Data__c": 42}).payload_raw == "42"
        assert Record.model_validate({"id": "x", "payloadRaw": True}).payload_raw == "true"

    def test_null_payload_stays_none(self) -> None:
        assert Record.model_validate({"id": "x", "payload": None}).payload_raw is None
