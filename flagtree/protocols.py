# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines structural protocols for pluggable Flagtree components.

These runtime-checkable `Protocol` classes specify the expected interfaces for:
- Value boxes that accept command-line literals
- Value boxes that can be set by a bare flag
- Objects that can produce a finished command tree

Used to support type-safe extensibility without requiring explicit base classes:
any object with a `set(literal)` method can back a flag.

Protocols:
- Value: Accepts a literal via `set()`, raising on conversion failure.
- BoolValue: A `Value` that reports whether it may be set without a literal.
- Commander: Returns a finalized `Command` via `command()`.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Protocol, runtime_checkable

if TYPE_CHECKING:
    from flagtree.command import Command

ValidateFunc = Callable[[str], object]
"""Validates a raw literal before conversion; raises to reject it."""

HandlerFunc = Callable[[list[str]], "int | None"]
"""Handles a resolved command, receiving leftover positional arguments."""


@runtime_checkable
class Value(Protocol):
    def set(self, literal: str) -> None: ...


@runtime_checkable
class BoolValue(Value, Protocol):
    def is_bool_flag(self) -> bool: ...


@runtime_checkable
class Commander(Protocol):
    def command(self) -> Command: ...
