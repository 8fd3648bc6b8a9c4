# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ValueKind`, the closed set of primitive types a value box can hold.

Every typed flag stores one of these kinds, either as a single value or as an
ordered list of values. Conversion from and rendering to the command-line
literal form is dispatched on the kind in `flagtree.parser.utils`, so adding a
kind means adding a member here and a branch there.

Supports alias coercion for config-friendly spellings.

Example:
    ValueKind("int64")    → ValueKind.INT64
    ValueKind("str")      → ValueKind.STRING (via alias)
    ValueKind("timedelta") → ValueKind.DURATION (via alias)
"""
from __future__ import annotations

from enum import Enum


class ValueKind(Enum):
    """
    Primitive kinds understood by the value boxes.

    Members:
        STRING: Text stored as given.
        INT: Signed base-10 integer in the native 64-bit range.
        INT64: Signed base-10 integer in the 64-bit range.
        UINT: Unsigned base-10 integer in the native 64-bit range.
        UINT64: Unsigned base-10 integer in the 64-bit range.
        FLOAT64: Decimal floating point number.
        BOOL: Boolean, may be set by the bare flag.
        DURATION: `datetime.timedelta` written like `1h30m` or `250ms`.
        DATETIME: `datetime.datetime` in any format `dateutil` understands.
    """

    STRING = "string"
    INT = "int"
    INT64 = "int64"
    UINT = "uint"
    UINT64 = "uint64"
    FLOAT64 = "float64"
    BOOL = "bool"
    DURATION = "duration"
    DATETIME = "datetime"

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "str": "string",
            "float": "float64",
            "boolean": "bool",
            "timedelta": "duration",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> ValueKind:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower()
        alias = cls._get_alias(normalized)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    @property
    def is_signed(self) -> bool:
        return self in (ValueKind.INT, ValueKind.INT64)

    @property
    def is_unsigned(self) -> bool:
        return self in (ValueKind.UINT, ValueKind.UINT64)

    def __str__(self) -> str:
        """Return the string representation of the value kind."""
        return self.value
