"""
Flagtree CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .flag import Flag
from .flag_builder import (
    FlagBuilder,
    bool_flag,
    datetime_flag,
    duration_flag,
    float_flag,
    func_flag,
    int64_flag,
    int_flag,
    string_flag,
    strings_flag,
    uint64_flag,
    uint_flag,
    var_flag,
)
from .matcher import ArgumentMatcher
from .parser_types import FlagState, Invocation
from .value import FuncValue, ScalarValue, SliceValue, is_bool_value
from .value_kind import ValueKind

__all__ = [
    "ArgumentMatcher",
    "Flag",
    "FlagBuilder",
    "FlagState",
    "FuncValue",
    "Invocation",
    "ScalarValue",
    "SliceValue",
    "ValueKind",
    "bool_flag",
    "datetime_flag",
    "duration_flag",
    "float_flag",
    "func_flag",
    "int64_flag",
    "int_flag",
    "is_bool_value",
    "string_flag",
    "strings_flag",
    "uint64_flag",
    "uint_flag",
    "var_flag",
]
