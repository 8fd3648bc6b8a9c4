# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines flow control signals used internally by the Flagtree CLI framework.

These signals are raised to interrupt the normal parse-then-dispatch flow
without being treated as traditional exceptions.

All signals inherit from `FlowSignal`, which is a subclass of `BaseException`
to ensure they bypass standard `except Exception` blocks.

Signals:
- HelpSignal: Stop parsing and show help for the command resolved so far.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from flagtree.command import Command


class FlowSignal(BaseException):
    """Base class for all flow control signals in Flagtree.

    These are not errors. They're used to control flow like showing help
    from anywhere inside the argument matcher.
    """


class HelpSignal(FlowSignal):
    """Raised to display help information for `command`, reached through `path`."""

    def __init__(
        self,
        command: Command,
        path: Sequence[Command] = (),
        message: str = "Help signal received.",
    ):
        super().__init__(message)
        self.command = command
        self.path = tuple(path) or (command,)
