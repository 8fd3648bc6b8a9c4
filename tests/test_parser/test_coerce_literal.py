from datetime import datetime, timedelta

import pytest

from flagtree.parser import ValueKind
from flagtree.parser.utils import (
    INT64_MAX,
    INT64_MIN,
    UINT64_MAX,
    coerce_bool,
    coerce_float,
    coerce_int,
    coerce_literal,
    format_duration,
    format_float,
    parse_duration,
    render_literal,
)


@pytest.mark.parametrize(
    "value, kind, expected",
    [
        ("42", ValueKind.INT, 42),
        ("-42", ValueKind.INT64, -42),
        ("+7", ValueKind.INT, 7),
        ("42", ValueKind.UINT, 42),
        ("18446744073709551615", ValueKind.UINT64, UINT64_MAX),
        ("3.14", ValueKind.FLOAT64, 3.14),
        ("1.0", ValueKind.FLOAT64, 1.0),
        ("true", ValueKind.BOOL, True),
        ("0", ValueKind.BOOL, False),
        ("hello", ValueKind.STRING, "hello"),
        ("", ValueKind.STRING, ""),
        ("1s", ValueKind.DURATION, timedelta(seconds=1)),
    ],
)
def test_coerce_literal_basic(value, kind, expected):
    assert coerce_literal(value, kind) == expected


@pytest.mark.parametrize(
    "value, kind",
    [
        ("abc", ValueKind.INT),
        ("1.5", ValueKind.INT),
        ("1_000", ValueKind.INT),
        (" 1", ValueKind.INT),
        ("\u0661\u0662", ValueKind.INT),
        ("\u0661\u0662", ValueKind.FLOAT64),
        ("\uff11.5", ValueKind.FLOAT64),
        ("", ValueKind.INT64),
        ("-1", ValueKind.UINT),
        ("+1", ValueKind.UINT64),
        ("yes", ValueKind.BOOL),
        ("", ValueKind.BOOL),
        ("1,5", ValueKind.FLOAT64),
        ("1s2", ValueKind.DURATION),
        ("not a date", ValueKind.DATETIME),
    ],
)
def test_coerce_literal_rejects(value, kind):
    with pytest.raises(ValueError):
        coerce_literal(value, kind)


def test_coerce_literal_error_names_literal():
    with pytest.raises(ValueError) as excinfo:
        coerce_literal("abc", ValueKind.INT)
    assert "'abc'" in str(excinfo.value)


@pytest.mark.parametrize(
    "value", ["1", "t", "T", "TRUE", "true", "True"]
)
def test_coerce_bool_true(value):
    assert coerce_bool(value) is True


@pytest.mark.parametrize(
    "value", ["0", "f", "F", "FALSE", "false", "False"]
)
def test_coerce_bool_false(value):
    assert coerce_bool(value) is False


def test_coerce_int_range():
    assert coerce_int(str(INT64_MAX)) == INT64_MAX
    assert coerce_int(str(INT64_MIN)) == INT64_MIN
    with pytest.raises(ValueError, match="out of range"):
        coerce_int(str(INT64_MAX + 1))
    with pytest.raises(ValueError, match="out of range"):
        coerce_int(str(INT64_MIN - 1))
    with pytest.raises(ValueError, match="out of range"):
        coerce_int(str(UINT64_MAX + 1), signed=False)


def test_coerce_float_special_values():
    assert coerce_float("inf") == float("inf")
    assert coerce_float("-Inf") == float("-inf")
    assert coerce_float("nan") != coerce_float("nan")
    with pytest.raises(ValueError, match="out of range"):
        coerce_float("1e400")
    with pytest.raises(ValueError):
        coerce_float(" 1.0")


@pytest.mark.parametrize(
    "value, expected",
    [
        (1.0, "1"),
        (0.5, "0.5"),
        (-2.25, "-2.25"),
        (1e16, "10000000000000000"),
        (1e-7, "0.0000001"),
        (float("inf"), "+Inf"),
        (float("-inf"), "-Inf"),
        (float("nan"), "NaN"),
    ],
)
def test_format_float(value, expected):
    assert format_float(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ("0", timedelta(0)),
        ("1s", timedelta(seconds=1)),
        ("-1s", timedelta(seconds=-1)),
        ("+5m", timedelta(minutes=5)),
        ("1h30m", timedelta(hours=1, minutes=30)),
        ("1.5h", timedelta(hours=1, minutes=30)),
        ("300ms", timedelta(milliseconds=300)),
        (".5s", timedelta(milliseconds=500)),
        ("10us", timedelta(microseconds=10)),
        ("10µs", timedelta(microseconds=10)),
        ("1500ns", timedelta(microseconds=2)),
        ("2h45m10.5s", timedelta(hours=2, minutes=45, seconds=10.5)),
    ],
)
def test_parse_duration(value, expected):
    assert parse_duration(value) == expected


@pytest.mark.parametrize("value", ["", "-", "s", "1", "10", "1x", "1.2.3s", "1h 30m"])
def test_parse_duration_rejects(value):
    with pytest.raises(ValueError):
        parse_duration(value)


def test_parse_duration_missing_unit_message():
    with pytest.raises(ValueError, match="missing unit"):
        parse_duration("10")


@pytest.mark.parametrize(
    "value, expected",
    [
        (timedelta(0), "0s"),
        (timedelta(seconds=1), "1s"),
        (timedelta(seconds=-1), "-1s"),
        (timedelta(hours=1), "1h0m0s"),
        (timedelta(minutes=2, seconds=30), "2m30s"),
        (timedelta(seconds=1.5), "1.5s"),
        (timedelta(milliseconds=1.5), "1.5ms"),
        (timedelta(milliseconds=300), "300ms"),
        (timedelta(microseconds=10), "10µs"),
        (timedelta(days=1), "24h0m0s"),
    ],
)
def test_format_duration(value, expected):
    assert format_duration(value) == expected


@pytest.mark.parametrize(
    "literal, kind",
    [
        ("1s", ValueKind.DURATION),
        ("1h0m0s", ValueKind.DURATION),
        ("-2.5ms", ValueKind.DURATION),
        ("42", ValueKind.INT),
        ("-42", ValueKind.INT64),
        ("18446744073709551615", ValueKind.UINT64),
        ("0.1", ValueKind.FLOAT64),
        ("true", ValueKind.BOOL),
        ("false", ValueKind.BOOL),
        ("hello world", ValueKind.STRING),
        ("2025-01-02T03:04:05", ValueKind.DATETIME),
    ],
)
def test_canonical_literals_round_trip(literal, kind):
    value = coerce_literal(literal, kind)
    assert render_literal(value, kind) == literal
    assert coerce_literal(render_literal(value, kind), kind) == value


def test_render_literal_none():
    assert render_literal(None, ValueKind.STRING) == ""
    assert render_literal(None, ValueKind.DATETIME) == ""


def test_coerce_datetime():
    assert coerce_literal("2025-01-02", ValueKind.DATETIME) == datetime(2025, 1, 2)
