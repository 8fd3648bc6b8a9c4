"""
Flagtree CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .command import Command, CommandBuilder
from .dispatcher import Dispatcher, DispatchState, run, run_with_args
from .exceptions import (
    ArgumentError,
    CardinalityError,
    ConstructionError,
    DispatchError,
    FlagtreeError,
    ParseError,
    RoutingError,
)
from .parser import (
    Flag,
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

__all__ = [
    "ArgumentError",
    "CardinalityError",
    "Command",
    "CommandBuilder",
    "ConstructionError",
    "DispatchError",
    "DispatchState",
    "Dispatcher",
    "Flag",
    "FlagBuilder",
    "FlagtreeError",
    "ParseError",
    "RoutingError",
    "bool_flag",
    "datetime_flag",
    "duration_flag",
    "float_flag",
    "func_flag",
    "int64_flag",
    "int_flag",
    "run",
    "run_with_args",
    "string_flag",
    "strings_flag",
    "uint64_flag",
    "uint_flag",
    "var_flag",
]
