# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
State models used by the `ArgumentMatcher` while and after it walks the tokens.

Contents:
- `FlagState`: Tracks how often a flag occurred.
- `Invocation`: The outcome of a successful match, naming the resolved command,
  the path taken to it, the leftover positional arguments and the occurrence
  count of every flag that was seen.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from flagtree.parser.flag import Flag

if TYPE_CHECKING:
    from flagtree.command import Command


@dataclass
class FlagState:
    """Tracks the occurrences of one flag during a single parse."""

    flag: Flag
    count: int = 0

    def record(self) -> None:
        """Record one occurrence of the flag."""
        self.count += 1


@dataclass(frozen=True)
class Invocation:
    """The resolved command, its path from the root and the leftover arguments."""

    command: Command
    path: tuple[Command, ...]
    args: list[str]
    states: dict[Flag, FlagState] = field(default_factory=dict)

    @property
    def path_names(self) -> list[str]:
        return [command.name for command in self.path]

    def count(self, name: str) -> int:
        """Return how many times the flag called `name` (long or short) occurred."""
        for flag, state in self.states.items():
            if name in flag.identifiers:
                return state.count
        return 0
