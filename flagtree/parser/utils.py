# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Contains value coercion and rendering utilities for Flagtree argument parsing.

This module converts command-line literals into Python values for every
`ValueKind`, and renders values back into the literal form a user would type.
Rendering and coercion are inverses: `coerce_literal(render_literal(v, k), k) == v`
for every value `v` a box of kind `k` can hold.

Functions:
- coerce_bool: Convert a literal to a boolean.
- coerce_int: Convert a base-10 literal to a range-checked integer.
- coerce_float: Convert a literal to a float.
- parse_duration / format_duration: Duration literals such as `1h30m` or `250ms`.
- coerce_datetime: Convert a literal to a datetime using `dateutil`.
- check_value: Check that a Python value fits a `ValueKind`.
- coerce_literal: General-purpose coercion to a `ValueKind`.
- render_literal: General-purpose rendering of a `ValueKind` value.
"""
import math
import re
from datetime import datetime, timedelta
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation
from typing import Any

from dateutil import parser as date_parser

from flagtree.parser.value_kind import ValueKind

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
UINT64_MAX = 2**64 - 1

_TRUE_LITERALS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_LITERALS = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_SIGNED_INT = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_INT = re.compile(r"[0-9]+")

# Duration units expressed in microseconds.
_DURATION_UNITS = {
    "ns": Decimal("0.001"),
    "us": Decimal(1),
    "µs": Decimal(1),
    "μs": Decimal(1),
    "ms": Decimal(1_000),
    "s": Decimal(1_000_000),
    "m": Decimal(60_000_000),
    "h": Decimal(3_600_000_000),
}
_DURATION_PART = re.compile(r"([0-9]+\.?[0-9]*|\.[0-9]+)(ns|us|µs|μs|ms|s|m|h)")


def coerce_bool(value: str) -> bool:
    """
    Convert a string to a boolean.

    Accepts `1`, `t`, `T`, `TRUE`, `true`, `True` and their false counterparts
    `0`, `f`, `F`, `FALSE`, `false`, `False`.

    Raises:
        ValueError: If the literal is not one of the accepted spellings.
    """
    if value in _TRUE_LITERALS:
        return True
    if value in _FALSE_LITERALS:
        return False
    raise ValueError(f"invalid boolean value: {value!r}")


def coerce_int(value: str, signed: bool = True) -> int:
    """
    Convert a base-10 literal to an integer within the 64-bit range.

    Signed literals may carry a leading `+` or `-`. Unsigned literals must be
    plain digits. Whitespace and digit separators are rejected.

    Raises:
        ValueError: If the literal is malformed or out of range.
    """
    pattern = _SIGNED_INT if signed else _UNSIGNED_INT
    if not pattern.fullmatch(value):
        kind = "integer" if signed else "unsigned integer"
        raise ValueError(f"invalid {kind} value: {value!r}")
    number = int(value)
    if signed and not INT64_MIN <= number <= INT64_MAX:
        raise ValueError(f"value out of range: {value!r}")
    if not signed and number > UINT64_MAX:
        raise ValueError(f"value out of range: {value!r}")
    return number


def coerce_float(value: str) -> float:
    """
    Convert a decimal literal to a float.

    `inf`, `+inf`, `-inf` and `nan` (any case) are accepted. Only ASCII
    literals are accepted. Literals whose magnitude overflows a 64-bit float
    are rejected instead of becoming infinite.

    Raises:
        ValueError: If the literal is malformed or out of range.
    """
    if not value or not value.isascii() or value != value.strip() or "_" in value:
        raise ValueError(f"invalid float value: {value!r}")
    try:
        number = float(value)
    except ValueError:
        raise ValueError(f"invalid float value: {value!r}") from None
    if math.isinf(number) and "inf" not in value.lower():
        raise ValueError(f"value out of range: {value!r}")
    return number


def format_float(value: float) -> str:
    """Render a float in its shortest exact decimal form, without an exponent."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def parse_duration(value: str) -> timedelta:
    """
    Parse a duration literal into a `timedelta`.

    A duration is an optionally signed sequence of decimal numbers, each with
    an optional fraction and a unit suffix, such as `300ms`, `-1.5h` or `2h45m`.
    Valid units are `ns`, `us` (or `µs`), `ms`, `s`, `m`, `h`. The bare literal
    `0` is also accepted. Values are rounded to the nearest microsecond.

    Raises:
        ValueError: If the literal is malformed or out of range.
    """
    text = value
    negative = False
    if text and text[0] in "+-":
        negative = text[0] == "-"
        text = text[1:]
    if text == "0":
        return timedelta(0)
    if not text:
        raise ValueError(f"invalid duration: {value!r}")

    total = Decimal(0)
    position = 0
    while position < len(text):
        match = _DURATION_PART.match(text, position)
        if match is None:
            if text[position].isdigit() or text[position] == ".":
                raise ValueError(f"missing unit in duration: {value!r}")
            raise ValueError(f"invalid duration: {value!r}")
        try:
            total += Decimal(match.group(1)) * _DURATION_UNITS[match.group(2)]
        except InvalidOperation:
            raise ValueError(f"invalid duration: {value!r}") from None
        position = match.end()

    microseconds = int(total.to_integral_value(rounding=ROUND_HALF_EVEN))
    if negative:
        microseconds = -microseconds
    try:
        return timedelta(microseconds=microseconds)
    except OverflowError:
        raise ValueError(f"duration out of range: {value!r}") from None


def _with_fraction(amount: int, unit: int) -> str:
    whole, fraction = divmod(amount, unit)
    if not fraction:
        return str(whole)
    width = len(str(unit)) - 1
    digits = str(fraction).rjust(width, "0").rstrip("0")
    return f"{whole}.{digits}"


def format_duration(value: timedelta) -> str:
    """
    Render a `timedelta` as a duration literal.

    Durations under one second use the largest of `µs` or `ms` that keeps the
    integer part non-zero (`1.5ms`). Longer durations are written as hours,
    minutes and seconds with leading zero units omitted (`1h0m0s`, `2m30s`,
    `1.5s`). A zero duration renders as `0s`.
    """
    microseconds = (value.days * 86_400 + value.seconds) * 1_000_000 + value.microseconds
    if microseconds == 0:
        return "0s"
    sign = "-" if microseconds < 0 else ""
    microseconds = abs(microseconds)

    if microseconds < 1_000:
        return f"{sign}{microseconds}µs"
    if microseconds < 1_000_000:
        return f"{sign}{_with_fraction(microseconds, 1_000)}ms"

    hours, remainder = divmod(microseconds, 3_600_000_000)
    minutes, remainder = divmod(remainder, 60_000_000)
    text = f"{_with_fraction(remainder, 1_000_000)}s"
    if hours or minutes:
        text = f"{minutes}m{text}"
    if hours:
        text = f"{hours}h{text}"
    return f"{sign}{text}"


def coerce_datetime(value: str) -> datetime:
    """
    Convert a literal to a datetime.

    Raises:
        ValueError: If `dateutil` cannot parse the literal.
    """
    try:
        return date_parser.parse(value)
    except (ValueError, OverflowError) as error:
        raise ValueError(f"invalid datetime value: {value!r}") from error


_DEFAULT_TYPES: dict[ValueKind, tuple[type, ...]] = {
    ValueKind.STRING: (str,),
    ValueKind.INT: (int,),
    ValueKind.INT64: (int,),
    ValueKind.UINT: (int,),
    ValueKind.UINT64: (int,),
    ValueKind.FLOAT64: (int, float),
    ValueKind.BOOL: (bool,),
    ValueKind.DURATION: (timedelta,),
    ValueKind.DATETIME: (datetime,),
}


def check_value(value: Any, kind: ValueKind) -> None:
    """
    Check that `value` is something a box of the given kind can hold.

    `None` is accepted for every kind and renders as an empty literal.

    Raises:
        TypeError: If the value has the wrong type for the kind.
        ValueError: If an integer is outside the range of the kind.
    """
    if value is None:
        return
    if isinstance(value, bool) and kind is not ValueKind.BOOL:
        raise TypeError(f"{value!r} is not a valid {kind} value")
    if not isinstance(value, _DEFAULT_TYPES[kind]):
        raise TypeError(f"{value!r} is not a valid {kind} value")
    if kind.is_signed or kind.is_unsigned:
        coerce_int(str(value), signed=kind.is_signed)


def coerce_literal(value: str, kind: ValueKind) -> Any:
    """
    Convert a command-line literal to a value of the given kind.

    Args:
        value (str): The literal as it appeared on the command line.
        kind (ValueKind): The kind of value to produce.

    Returns:
        Any: The converted value.

    Raises:
        ValueError: If the literal cannot be converted. The message names the literal.
    """
    if kind is ValueKind.STRING:
        return value
    if kind.is_signed:
        return coerce_int(value, signed=True)
    if kind.is_unsigned:
        return coerce_int(value, signed=False)
    if kind is ValueKind.FLOAT64:
        return coerce_float(value)
    if kind is ValueKind.BOOL:
        return coerce_bool(value)
    if kind is ValueKind.DURATION:
        return parse_duration(value)
    if kind is ValueKind.DATETIME:
        return coerce_datetime(value)
    raise ValueError(f"unsupported value kind: {kind}")


def render_literal(value: Any, kind: ValueKind) -> str:
    """
    Render a value of the given kind in command-line literal form.

    `None` renders as an empty string.
    """
    if value is None:
        return ""
    if kind is ValueKind.STRING:
        return str(value)
    if kind.is_signed or kind.is_unsigned:
        return str(int(value))
    if kind is ValueKind.FLOAT64:
        return format_float(float(value))
    if kind is ValueKind.BOOL:
        return "true" if value else "false"
    if kind is ValueKind.DURATION:
        return format_duration(value)
    if kind is ValueKind.DATETIME:
        return value.isoformat()
    raise ValueError(f"unsupported value kind: {kind}")
