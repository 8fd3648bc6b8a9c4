# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Parses an argument list against a command tree and invokes the resolved handler.

`Dispatcher` is the boundary where every parse-time failure is caught and turned
into a diagnostic line plus an exit code. Handlers run outside that boundary:
their return value becomes the exit code and their exceptions propagate.

Dispatch moves through these states:

    UNRESOLVED ──parse ok──▶ RESOLVED ──handler──▶ DISPATCHED
         │                      │
         │ -h / --help          └──no handler──▶ FAILED
         ▼
    HELP_SHOWN           (any parse error) ──▶ FAILED

Exit codes:
- 0: help was shown, or the handler returned 0 or None
- 1: the tree could not be built, the arguments were rejected, or the
  resolved command has no handler
- anything else: returned by the handler

Entry points:
- run(cmd): Use the process arguments (`sys.argv[1:]`).
- run_with_args(cmd, *args): Use the given arguments.
"""
from __future__ import annotations

import sys
from enum import Enum
from typing import TYPE_CHECKING, Sequence

from flagtree.console import get_console
from flagtree.exceptions import ConstructionError, DispatchError, ParseError
from flagtree.logger import logger
from flagtree.parser.matcher import ArgumentMatcher
from flagtree.protocols import Commander
from flagtree.signals import HelpSignal

if TYPE_CHECKING:
    from rich.console import Console

    from flagtree.command import Command


class DispatchState(Enum):
    """Lifecycle of a single dispatch."""

    UNRESOLVED = "unresolved"
    RESOLVED = "resolved"
    DISPATCHED = "dispatched"
    FAILED = "failed"
    HELP_SHOWN = "help_shown"

    def __str__(self) -> str:
        return self.value


class Dispatcher:
    """
    Runs one parse-and-dispatch cycle over the tree rooted at `root`.

    Attributes:
        root (Command): Root of the command tree.
        state (DispatchState): Where the last `dispatch()` ended up.
        error (Exception | None): The failure that ended the last dispatch, if any.
        path (tuple[Command, ...]): Commands from the root to the resolved command.
    """

    def __init__(self, root: Command) -> None:
        self.root: Command = root
        self.state: DispatchState = DispatchState.UNRESOLVED
        self.error: Exception | None = None
        self.path: tuple[Command, ...] = (root,)

    def _sink(self, attribute: str) -> object:
        for command in reversed(self.path):
            sink = getattr(command, attribute)
            if sink is not None:
                return sink
        return None

    def _stdout(self) -> Console:
        return get_console(self._sink("stdout"))

    def _stderr(self) -> Console:
        return get_console(self._sink("stderr"), stderr=True)

    def _fail(self, error: Exception) -> int:
        self.state = DispatchState.FAILED
        self.error = error
        logger.debug("Dispatch failed: %s", error)
        self._stderr().print(str(error), markup=False, soft_wrap=True)
        return 1

    def dispatch(self, args: Sequence[str]) -> int:
        """
        Parse `args` and run the resolved command's handler.

        Returns:
            int: The exit code for the process.
        """
        self.state = DispatchState.UNRESOLVED
        self.error = None
        self.path = (self.root,)

        matcher = ArgumentMatcher(self.root)
        try:
            invocation = matcher.parse(args)
        except HelpSignal as signal:
            self.path = signal.path
            signal.command.render_help(self._stdout(), signal.path)
            self.state = DispatchState.HELP_SHOWN
            return 0
        except ParseError as error:
            self.path = tuple(matcher.path)
            return self._fail(error)

        self.path = invocation.path
        self.state = DispatchState.RESOLVED
        command = invocation.command
        if command.handler is None:
            console = self._stderr()
            command.render_help(console, invocation.path)
            return self._fail(DispatchError(command.name))

        logger.debug(
            "Dispatching '%s' with args %s",
            " ".join(invocation.path_names),
            invocation.args,
        )
        self.state = DispatchState.DISPATCHED
        exit_code = command.handler(invocation.args)
        return 0 if exit_code is None else int(exit_code)


def run_with_args(cmd: Commander, *args: str) -> int:
    """
    Build the command tree from `cmd`, parse `args` against it and dispatch.

    If `-h` or `--help` is given, usage is printed to the command's standard
    output and the exit code is 0. If the resolved command has no handler,
    usage is printed to its error output and the exit code is non-zero.

    Example:
        sys.exit(run_with_args(cmd, "--foo", "--bar"))
    """
    try:
        command = cmd.command()
    except ConstructionError as error:
        logger.debug("Command tree construction failed: %s", error)
        get_console(stderr=True).print(str(error), markup=False, soft_wrap=True)
        return 1
    return Dispatcher(command).dispatch(list(args))


def run(cmd: Commander) -> int:
    """
    Parse the process arguments and dispatch.

    Example:
        if __name__ == "__main__":
            sys.exit(run(cmd))
    """
    return run_with_args(cmd, *sys.argv[1:])
