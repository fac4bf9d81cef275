"""Tests for the records file reader."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from provcheck.infrastructure.records import RecordSourceError, load_records, parse_records


class TestParseRecords:
    def test_json_array(self) -> None:
        records = parse_records(json.dumps([{"id": "1"}, {"id": "2"}]))
        assert [r.id for r in records] == ["1", "2"]

    def test_records_wrapper(self) -> None:
        text = json.dumps({"totalSize": 1, "records": [{"Id": "a", "Name": "A"}]})
        (record,) = parse_records(text)
        assert record.id == "a"
        assert record.name == "A"

    def test_single_object(self) -> None:
        (record,) = parse_records(json.dumps({"id": "solo"}))
        assert record.id == "solo"

    def test_json_lines(self) -> None:
        text = '{"id": "1"}\n\n{"id": "2", "payload": {"a": 1}}\n'
        records = parse_records(text)
        assert [r.id for r in records] == ["1", "2"]
        assert json.loads(records[1].payload_raw or "") == {"a": 1}

    def test_empty_text(self) -> None:
        assert parse_records("   ") == []

    def test_bad_json_line(self) -> None:
        with pytest.raises(RecordSourceError, match="line 2"):
            parse_records('{"id": "1"}\n{oops\n')

    def test_scalar_document(self) -> None:
        with pytest.raises(RecordSourceError):
            parse_records("42")

    def test_non_object_row(self) -> None:
        with pytest.raises(RecordSourceError, match="#2"):
            parse_records(json.dumps([{"id": "1"}, "junk"]))

    def test_missing_id(self) -> None:
        with pytest.raises(RecordSourceError, match="#1 is invalid"):
            parse_records(json.dumps([{"name": "no id"}]))


class TestLoadRecords:
    def test_reads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "records.json"
        path.write_text(json.dumps([{"id": "1"}]), encoding="utf-8")
        assert load_records(path)[0].id == "1"

    def test_unreadable(self, tmp_path: Path) -> None:
        with pytest.raises(RecordSourceError, match="Cannot read"):
            load_records(tmp_path)

    def test_non_utf8_file(self, tmp_path: Path) -> None:
        path = tmp_path / "records.json"
        path.write_bytes(b'[{"id": "1", "name": "\xff"}]')
        with pytest.raises(RecordSourceError, match="not valid UTF-8"):
            load_records(path)

    def test_scalar_payload_kept_as_json_text(self) -> None:
        (record,) = parse_records('[{"id": "1", "payloadRaw": 42}]')
        assert record.payload_raw == "42"
