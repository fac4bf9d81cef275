"""Record source: reads provisioning request records from disk.

Three layouts are accepted:

* a JSON array of records,
* a JSON object holding the array under ``records`` (the shape of a
  Salesforce query export),
* JSON lines, one record per line.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from provcheck.domain.records import Record


class RecordSourceError(Exception):
    """Raised when a records file cannot be read or understood."""


def _decode(text: str) -> list[Any]:
    stripped = text.strip()
    if not stripped:
        return []
    try:
        data = json.loads(stripped)
    except ValueError:
        rows: list[Any] = []
        for lineno, line in enumerate(stripped.splitlines(), start=1):
            if not line.strip():
                continue
            try:
                rows.append(json.loads(line))
            except ValueError as exc:
                msg = f"Invalid JSON on line {lineno}: {exc}"
                raise RecordSourceError(msg) from exc
        return rows

    if isinstance(data, dict):
        if isinstance(data.get("records"), list):
            return data["records"]
        return [data]
    if isinstance(data, list):
        return data
    msg = "Expected a JSON array, an object with 'records', or JSON lines"
    raise RecordSourceError(msg)


def parse_records(text: str) -> list[Record]:
    """Parse records from file contents."""
    records: list[Record] = []
    for position, row in enumerate(_decode(text), start=1):
        if not isinstance(row, dict):
            msg = f"Record #{position} is not a JSON object"
            raise RecordSourceError(msg)
        try:
            records.append(Record.model_validate(row))
        except ValidationError as exc:
            msg = f"Record #{position} is invalid: {exc.errors()[0]['msg']}"
            raise RecordSourceError(msg) from exc
    return records


def load_records(path: Path) -> list[Record]:
    """Read and parse the records file at *path*."""
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        msg = f"Cannot read {path}: not valid UTF-8 ({exc.reason} at byte {exc.start})"
        raise RecordSourceError(msg) from exc
    except OSError as exc:
        msg = f"Cannot read {path}: {exc.strerror or exc}"
        raise RecordSourceError(msg) from exc
    return parse_records(text)
