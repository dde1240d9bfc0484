"""Tests for Int64 field normalization."""

from __future__ import annotations

import math

import pytest

from dashbridge.bridge.normalizer import normalize_int64_fields, parse_int


class TestParseInt:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("1380000000000", 1380000000000),
            ("  42", 42),
            ("-7", -7),
            ("+3", 3),
            ("12.9", 12),
            ("99abc", 99),
        ],
    )
    def test_leading_integer(self, text: str, expected: int) -> None:
        assert parse_int(text) == expected

    @pytest.mark.parametrize("text", ["", "abc", "None", "-", "  ", "١٢", "\uff11\uff12"])
    def test_no_digits_is_nan(self, text: str) -> None:
        assert math.isnan(parse_int(text))


class TestNormalizeInt64Fields:
    def test_replaces_known_fields(self) -> None:
        result = [
            {"name": "flow1", "lastStarted": "1380000000000", "lastStopped": "1380000005000"},
            {"name": "flow2", "startTime": 17, "endTime": "18"},
        ]
        normalized = normalize_int64_fields(result)
        assert normalized is result
        assert result[0] == {"name": "flow1", "lastStarted": 1380000000000, "lastStopped": 1380000005000}
        assert result[1] == {"name": "flow2", "startTime": 17, "endTime": 18}

    def test_other_fields_untouched(self) -> None:
        result = [{"status": "RUNNING", "runs": "12", "lastStarted": "5"}]
        normalize_int64_fields(result)
        assert result[0]["runs"] == "12"
        assert result[0]["status"] == "RUNNING"
        assert result[0]["lastStarted"] == 5

    def test_records_missing_fields(self) -> None:
        result = [{"name": "a"}, {"endTime": "9"}]
        normalize_int64_fields(result)
        assert result == [{"name": "a"}, {"endTime": 9}]

    def test_invalid_value_becomes_nan(self) -> None:
        result = [{"startTime": "not-a-number", "endTime": "4"}]
        normalize_int64_fields(result)
        assert math.isnan(result[0]["startTime"])
        assert result[0]["endTime"] == 4

    def test_mixed_sequence_normalizes_records_only(self) -> None:
        result = [{"startTime": "5"}, None, "x", {"endTime": "6"}]
        normalize_int64_fields(result)
        assert result == [{"startTime": 5}, None, "x", {"endTime": 6}]

    @pytest.mark.parametrize("value", [[], None, "[]", 12, {"startTime": "5"}])
    def test_other_shapes_pass_through(self, value: object) -> None:
        assert normalize_int64_fields(value) == value
