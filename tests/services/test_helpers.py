"""Tests for shared service-layer helper functions."""

from __future__ import annotations

from datetime import datetime

from provcheck.services._helpers import now_iso, pluralize


class TestNowIso:
    def test_parses_back_as_aware(self) -> None:
        assert datetime.fromisoformat(now_iso()).tzinfo is not None


class TestPluralize:
    def test_singular(self) -> None:
        assert pluralize(1, "record") == "1 record"

    def test_plural(self) -> None:
        assert pluralize(2, "record") == "2 records"
        assert pluralize(0, "rule") == "0 rules"
