# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Implements `FlagBuilder`, the fluent constructor for `Flag` records, along with
one factory function per supported value type.

Each factory creates the value box for its type and returns a builder. Builder
methods only record constraints; nothing is checked until `build()`, which
validates the whole definition at once and either returns a `Flag` or raises
`FlagDefinitionError`.

Example Usage:
    ip = string_flag("ip", "127.0.0.1", "IP address to ping").validate(check_ip)
    names = strings_flag("name", None, "Widget name").nargs(1, 0)
    verbose = bool_flag("verbose", False, "Chatty output").short("v").inherit()

    flag = ip.build()
    ...
    ip.get()  # current value once arguments have been parsed

Factories:
- var_flag: Any object implementing the `Value` protocol.
- func_flag: A function called with each literal.
- bool_flag, int_flag, int64_flag, uint_flag, uint64_flag, float_flag,
  duration_flag, datetime_flag, string_flag: Single-value flags, at most once.
- strings_flag: Repeatable string flag collecting values in command-line order.
"""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Callable, Iterable

from flagtree.exceptions import FlagDefinitionError
from flagtree.parser.flag import Flag
from flagtree.parser.utils import check_value
from flagtree.parser.value import FuncValue, ScalarValue, SliceValue
from flagtree.parser.value_kind import ValueKind
from flagtree.protocols import ValidateFunc, Value

DEFAULT_MIN_COUNT = 0
DEFAULT_MAX_COUNT = 1


class FlagBuilder:
    """
    Fluent builder for a `Flag`.

    Every method returns the builder itself so calls can be chained. Call
    `build()` (or hand the builder to `CommandBuilder.flags()`) to finish it.
    """

    def __init__(self, value: Value, name: str, usage: str = "") -> None:
        self._value: Value = value
        self._name: str = name
        self._short_name: str = ""
        if len(name) == 1:
            self._short_name = name
            self._name = ""
        self._usage: str = usage
        self._min_count: int = DEFAULT_MIN_COUNT
        self._max_count: int = DEFAULT_MAX_COUNT
        self._validator: ValidateFunc | None = None
        self._choices: tuple[str, ...] | None = None
        self._inherited: bool = False
        self._hidden: bool = False

    @property
    def value(self) -> Value:
        """The value box this flag feeds."""
        return self._value

    def get(self) -> Any:
        """Return the current value of the flag's box, if the box exposes one."""
        getter = getattr(self._value, "get", None)
        return getter() if callable(getter) else None

    def nargs(self, min_count: int, max_count: int) -> FlagBuilder:
        """
        Set how many times the flag may occur.

        Args:
            min_count (int): Minimum occurrences. Above zero makes the flag required.
            max_count (int): Maximum occurrences. Zero means unbounded.
        """
        self._min_count = min_count
        self._max_count = max_count
        return self

    def choices(self, *choices: str) -> FlagBuilder:
        """Restrict the flag to the given literals, compared as plain text."""
        self._choices = tuple(choices)
        return self

    def validate(self, validator: ValidateFunc) -> FlagBuilder:
        """
        Attach a check over each raw literal.

        The validator runs after the choices check and before type conversion.
        Any exception it raises rejects the literal.
        """
        self._validator = validator
        return self

    def short(self, short_name: str) -> FlagBuilder:
        """Give a long flag a single-character alias, e.g. `-v` for `--verbose`."""
        self._short_name = short_name
        return self

    def inherit(self) -> FlagBuilder:
        """Make the flag reachable by name from subcommands of its command."""
        self._inherited = True
        return self

    def hidden(self) -> FlagBuilder:
        """Leave the flag out of help output."""
        self._hidden = True
        return self

    def _validate_names(self) -> None:
        if not self._name and not self._short_name:
            raise FlagDefinitionError("Flag must have a name or a short name")
        if self._name:
            if self._name.startswith("-"):
                raise FlagDefinitionError(
                    f"Flag name '{self._name}' must not start with '-'"
                )
            if "=" in self._name or any(char.isspace() for char in self._name):
                raise FlagDefinitionError(
                    f"Flag name '{self._name}' must not contain '=' or whitespace"
                )
        if self._short_name:
            if len(self._short_name) != 1:
                raise FlagDefinitionError(
                    f"Short name '{self._short_name}' must be a single character"
                )
            if self._short_name in ("-", "=") or self._short_name.isspace():
                raise FlagDefinitionError(
                    f"Short name '{self._short_name}' is not a valid flag character"
                )

    def _validate_nargs(self) -> None:
        for count in (self._min_count, self._max_count):
            if not isinstance(count, int) or isinstance(count, bool):
                raise FlagDefinitionError(f"nargs bounds must be integers, got {count!r}")
        if self._min_count < 0 or self._max_count < 0:
            raise FlagDefinitionError("nargs bounds must not be negative")
        if self._max_count and self._min_count > self._max_count:
            raise FlagDefinitionError(
                f"nargs minimum {self._min_count} exceeds maximum {self._max_count}"
            )

    def _normalize_choices(self) -> tuple[str, ...] | None:
        if self._choices is None:
            return None
        if not self._choices:
            raise FlagDefinitionError("choices must not be empty")
        for choice in self._choices:
            if not isinstance(choice, str):
                raise FlagDefinitionError(f"Choice {choice!r} must be a string")
        return self._choices

    def _validate_default(self) -> None:
        kind = getattr(self._value, "kind", None)
        if not isinstance(kind, ValueKind):
            return
        default = getattr(self._value, "default", None)
        values = default if isinstance(self._value, SliceValue) else [default]
        for value in values:
            try:
                check_value(value, kind)
            except (TypeError, ValueError) as error:
                raise FlagDefinitionError(
                    f"Default for flag '{self._name or self._short_name}': {error}"
                ) from error

    def build(self) -> Flag:
        """
        Validate the definition and return the finished `Flag`.

        Raises:
            FlagDefinitionError: If the names, bounds, choices, validator, value
                box or default are invalid.
        """
        self._validate_names()
        self._validate_nargs()
        choices = self._normalize_choices()
        if self._validator is not None and not callable(self._validator):
            raise FlagDefinitionError(
                f"Validator for flag '{self._name or self._short_name}' must be callable"
            )
        if self._value is None or not callable(getattr(self._value, "set", None)):
            raise FlagDefinitionError(
                f"Flag '{self._name or self._short_name}' needs a value with a set() method"
            )
        self._validate_default()
        return Flag(
            name=self._name,
            short_name=self._short_name,
            usage=self._usage,
            value=self._value,
            min_count=self._min_count,
            max_count=self._max_count,
            validator=self._validator,
            choices=choices,
            inherited=self._inherited,
            hidden=self._hidden,
        )

    def __repr__(self) -> str:
        name = f"--{self._name}" if self._name else f"-{self._short_name}"
        return f"FlagBuilder({name}, value={self._value!r})"


def var_flag(value: Value, name: str, usage: str = "") -> FlagBuilder:
    """Return a builder for a flag backed by a custom `Value`."""
    return FlagBuilder(value, name, usage)


def func_flag(name: str, usage: str, function: Callable[[str], Any]) -> FlagBuilder:
    """
    Return a builder for a flag that calls `function` with each literal.

    Anything `function` raises is reported as an argument error for the flag.
    """
    return var_flag(FuncValue(function), name, usage)


def bool_flag(name: str, default: bool = False, usage: str = "") -> FlagBuilder:
    """Return a builder for a boolean flag. `--name` alone sets it to True."""
    return var_flag(ScalarValue(ValueKind.BOOL, default), name, usage)


def duration_flag(
    name: str, default: timedelta = timedelta(0), usage: str = ""
) -> FlagBuilder:
    """Return a builder for a duration flag accepting literals like `1m30s`."""
    return var_flag(ScalarValue(ValueKind.DURATION, default), name, usage)


def datetime_flag(
    name: str, default: datetime | None = None, usage: str = ""
) -> FlagBuilder:
    """Return a builder for a datetime flag accepting any `dateutil` format."""
    return var_flag(ScalarValue(ValueKind.DATETIME, default), name, usage)


def float_flag(name: str, default: float = 0.0, usage: str = "") -> FlagBuilder:
    """Return a builder for a 64-bit float flag."""
    return var_flag(ScalarValue(ValueKind.FLOAT64, default), name, usage)


def int_flag(name: str, default: int = 0, usage: str = "") -> FlagBuilder:
    """Return a builder for a signed integer flag."""
    return var_flag(ScalarValue(ValueKind.INT, default), name, usage)


def int64_flag(name: str, default: int = 0, usage: str = "") -> FlagBuilder:
    """Return a builder for a signed 64-bit integer flag."""
    return var_flag(ScalarValue(ValueKind.INT64, default), name, usage)


def uint_flag(name: str, default: int = 0, usage: str = "") -> FlagBuilder:
    """Return a builder for an unsigned integer flag."""
    return var_flag(ScalarValue(ValueKind.UINT, default), name, usage)


def uint64_flag(name: str, default: int = 0, usage: str = "") -> FlagBuilder:
    """Return a builder for an unsigned 64-bit integer flag."""
    return var_flag(ScalarValue(ValueKind.UINT64, default), name, usage)


def string_flag(name: str, default: str = "", usage: str = "") -> FlagBuilder:
    """Return a builder for a string flag."""
    return var_flag(ScalarValue(ValueKind.STRING, default), name, usage)


def strings_flag(
    name: str, default: Iterable[str] | None = None, usage: str = ""
) -> FlagBuilder:
    """
    Return a builder for a repeatable string flag.

    Each occurrence appends its literal, in command-line order. The flag may
    occur any number of times unless `nargs()` says otherwise.
    """
    values = list(default) if default is not None else None
    return var_flag(SliceValue(ValueKind.STRING, values), name, usage).nargs(0, 0)
