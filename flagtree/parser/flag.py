# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `Flag` dataclass used by commands and the argument matcher to
represent a single declared command-line flag.

A `Flag` is the finished, immutable record produced by `FlagBuilder.build()`.
It names the flag, bounds how often it may occur, and points at the value box
that receives its literals.

Key Attributes:
- `name` / `short_name`: Long (`--verbose`) and single-letter (`-v`) identifiers
- `usage`: Help text
- `min_count` / `max_count`: Occurrence bounds, `max_count == 0` meaning unbounded
- `value`: The value box literals are fed into
- `validator`: Optional check over the raw literal
- `choices`: Optional set of allowed literals
- `inherited`: Whether descendant commands can match this flag
- `hidden`: Whether help output omits the flag
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from flagtree.parser.utils import render_literal
from flagtree.parser.value import is_bool_value
from flagtree.protocols import ValidateFunc, Value


@dataclass(frozen=True, eq=False)
class Flag:
    """
    Represents a declared command-line flag.

    Attributes:
        name (str): Long name without dashes, or "" for a short-only flag.
        short_name (str): Single-character name without the dash, or "".
        usage (str): Help text for the flag.
        value (Value): Box that receives each literal given for the flag.
        min_count (int): Minimum number of occurrences; above zero means required.
        max_count (int): Maximum number of occurrences; zero means unbounded.
        validator (ValidateFunc | None): Check run on each raw literal before conversion.
        choices (tuple[str, ...] | None): Literals the flag accepts, if restricted.
        inherited (bool): True if subcommands can match this flag by name.
        hidden (bool): True if help output should omit this flag.
    """

    name: str
    short_name: str
    usage: str
    value: Value
    min_count: int = 0
    max_count: int = 1
    validator: ValidateFunc | None = None
    choices: tuple[str, ...] | None = None
    inherited: bool = False
    hidden: bool = False

    @property
    def identifiers(self) -> tuple[str, ...]:
        """Return every name the flag answers to, long name first."""
        return tuple(name for name in (self.name, self.short_name) if name)

    @property
    def display_name(self) -> str:
        """Return the flag as a user would type it, preferring the long form."""
        if self.name:
            return f"--{self.name}"
        return f"-{self.short_name}"

    @property
    def required(self) -> bool:
        return self.min_count > 0

    @property
    def repeatable(self) -> bool:
        return self.max_count != 1

    @property
    def is_bool(self) -> bool:
        return is_bool_value(self.value)

    def get(self) -> Any:
        """Return the current value of the flag's box, if the box exposes one."""
        getter = getattr(self.value, "get", None)
        return getter() if callable(getter) else None

    def get_flag_text(self) -> str:
        """Get the flag names as shown in help, e.g. `-v, --verbose`."""
        names = []
        if self.short_name:
            names.append(f"-{self.short_name}")
        if self.name:
            names.append(f"--{self.name}")
        return ", ".join(names)

    def get_choice_text(self) -> str:
        """Get the value placeholder shown after the flag names in help."""
        if self.is_bool:
            return ""
        if self.choices:
            choice_text = f"{{{','.join(self.choices)}}}"
        else:
            choice_text = (self.name or self.short_name).upper().replace("-", "_")
        if self.repeatable:
            choice_text = f"{choice_text} ..."
        return choice_text

    def get_default_text(self) -> str:
        """Get the rendered default value, or "" if there is nothing worth showing."""
        default = getattr(self.value, "default", None)
        kind = getattr(self.value, "kind", None)
        if kind is None or default is None or default is False or default in ("", []):
            return ""
        if isinstance(default, list):
            return " ".join(render_literal(item, kind) for item in default)
        return render_literal(default, kind)

    def __str__(self) -> str:
        return (
            f"Flag({self.display_name}, min={self.min_count}, max={self.max_count}, "
            f"value={self.value!r})"
        )
