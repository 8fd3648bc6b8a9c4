# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used in the Flagtree CLI framework.

Errors fall into two families: problems with how a command tree was declared
(raised while building it, before any argument is looked at) and problems with
the arguments a user supplied (raised while matching them against the tree).

All exceptions inherit from `FlagtreeError`, the base exception for the framework.

Exception Hierarchy:
- FlagtreeError
    ├── ConstructionError
    │   ├── FlagDefinitionError
    │   └── CommandDefinitionError
    ├── ParseError
    │   ├── ArgumentError
    │   ├── CardinalityError
    │   │   ├── MissingFlagError
    │   │   └── TooManyFlagsError
    │   └── RoutingError
    │       ├── UnknownFlagError
    │       └── UnknownCommandError
    └── DispatchError

Every `ParseError` renders as a single diagnostic line of the form
`<context>: <flag>: <cause>`, for example `Argument error: --ip: invalid IP: 256.0.0.1`.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from flagtree.parser.flag import Flag


class FlagtreeError(Exception):
    """Base exception for the Flagtree framework."""


class ConstructionError(FlagtreeError):
    """Exception raised when a flag or command tree is declared incorrectly."""


class FlagDefinitionError(ConstructionError):
    """Exception raised when a flag builder cannot produce a valid flag."""


class CommandDefinitionError(ConstructionError):
    """Exception raised when a command node is invalid (name clashes, bad handler)."""


class ParseError(FlagtreeError):
    """
    Base class for failures caused by user input.

    Attributes:
        flag (Flag | None): The flag the failure is attributed to, if any.
        cause (str): Human readable description of what went wrong.
    """

    context = "Argument error"

    def __init__(self, cause: str, flag: Flag | None = None) -> None:
        self.cause = cause
        self.flag = flag
        super().__init__(str(self))

    @property
    def flag_name(self) -> str:
        """Return the flag's long name, or its short name if it has no long name."""
        if self.flag is None:
            return ""
        return self.flag.name or self.flag.short_name

    def __str__(self) -> str:
        if self.flag is None:
            return f"{self.context}: {self.cause}"
        return f"{self.context}: {self.flag.display_name}: {self.cause}"


class ArgumentError(ParseError):
    """
    Exception raised when a literal supplied for a flag is rejected.

    The literal may fail the flag's choices, its validator or the type conversion
    of its value. The underlying exception, if any, is chained as `__cause__`.
    """

    def __init__(self, flag: Flag, literal: str, cause: str) -> None:
        self.literal = literal
        super().__init__(cause, flag)


class CardinalityError(ParseError):
    """Exception raised when a flag occurs too few or too many times."""

    def __init__(self, flag: Flag, count: int, cause: str) -> None:
        self.count = count
        super().__init__(cause, flag)


class MissingFlagError(CardinalityError):
    """Exception raised when a required flag was not supplied often enough."""

    def __init__(self, flag: Flag, count: int) -> None:
        if flag.min_count == 1:
            cause = "flag is required"
        else:
            cause = f"flag must be given at least {flag.min_count} times (got {count})"
        super().__init__(flag, count, cause)


class TooManyFlagsError(CardinalityError):
    """Exception raised when a flag was supplied more often than its maximum allows."""

    def __init__(self, flag: Flag, count: int) -> None:
        if flag.max_count == 1:
            cause = "flag may only be given once"
        else:
            cause = f"flag may be given at most {flag.max_count} times (got {count})"
        super().__init__(flag, count, cause)


class RoutingError(ParseError):
    """Exception raised when a token cannot be routed to a flag or command."""

    def __init__(self, token: str, cause: str) -> None:
        self.token = token
        super().__init__(cause)


class UnknownFlagError(RoutingError):
    """Exception raised when a flag token matches no declared flag."""

    def __init__(self, token: str) -> None:
        super().__init__(token, f"unknown flag: {token}")


class UnknownCommandError(RoutingError):
    """Exception raised when a command without a handler is given an unknown subcommand."""

    def __init__(self, token: str, command_name: str) -> None:
        self.command_name = command_name
        super().__init__(token, f"unknown command '{token}' for '{command_name}'")


class DispatchError(FlagtreeError):
    """Exception raised when the resolved command has no handler to dispatch to."""

    def __init__(self, command_name: str) -> None:
        self.command_name = command_name
        super().__init__(f"Command error: '{command_name}' has no handler")
