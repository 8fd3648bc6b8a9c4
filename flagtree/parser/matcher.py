# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements `ArgumentMatcher`, which matches a flat list of
command-line tokens against a command tree.

The matcher makes a single left-to-right pass with no backtracking. Along the
way it routes into subcommands, feeds flag literals into value boxes and
collects positional leftovers for the handler. Once every token is consumed it
checks each reachable flag's occurrence count.

Token grammar:
- `--name`, `--name=value`: long flag
- `-x`, `-xvalue`, `-x=value`: short flag
- `--`: end of flags, every later token is positional
- `-h`, `--help`: stop and show help for the command resolved so far
- anything else: a subcommand name or a positional argument

Routing Rules:
- A token naming a child command routes into it only while no flag and no
  positional argument has been seen at the current command.
- A command with children but no handler treats any other such token as an
  unknown command.
- After routing, flags are looked up on the current command first, then on its
  ancestors, where only flags declared with `inherit()` are reachable.

Per-literal Validation (short-circuiting):
1. choices: the raw literal must be one of the flag's choices
2. validator: the flag's validator must accept the raw literal
3. conversion: the value box must accept the literal

Example Usage:
    matcher = ArgumentMatcher(command)
    invocation = matcher.parse(["remote", "add", "--fetch", "origin", "url"])
    invocation.command.name  # "add"
    invocation.args          # ["origin", "url"]
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, Sequence

from flagtree.exceptions import (
    ArgumentError,
    MissingFlagError,
    TooManyFlagsError,
    UnknownCommandError,
    UnknownFlagError,
)
from flagtree.logger import logger
from flagtree.parser.flag import Flag
from flagtree.parser.parser_types import FlagState, Invocation
from flagtree.signals import HelpSignal

if TYPE_CHECKING:
    from flagtree.command import Command

HELP_TOKENS = ("-h", "--help")
END_OF_FLAGS = "--"


class ArgumentMatcher:
    """
    Matches raw argument lists against the command tree rooted at `root`.

    The tree is only read, never modified. Value boxes of every flag in the
    tree are reset to their defaults at the start of each `parse()`. `path`
    holds the commands routed through so far, including after a failed parse.
    """

    def __init__(self, root: Command) -> None:
        self.root: Command = root
        self.path: list[Command] = [root]

    def _iter_flags(self, command: Command) -> Iterator[Flag]:
        yield from command.flags
        for child in command.subcommands:
            yield from self._iter_flags(child)

    def _reset_values(self) -> None:
        for flag in self._iter_flags(self.root):
            reset = getattr(flag.value, "reset", None)
            if callable(reset):
                reset()

    def _is_flag_token(self, token: str) -> bool:
        return len(token) > 1 and token.startswith("-")

    def _split_flag_token(self, token: str) -> tuple[str, str | None]:
        """Split a flag token into its name and its inline value, if any."""
        if token.startswith("--"):
            name, separator, value = token[2:].partition("=")
            return name, value if separator else None
        name, rest = token[1], token[2:]
        if rest.startswith("="):
            return name, rest[1:]
        return name, rest or None

    def _lookup(self, name: str, path: list[Command]) -> Flag | None:
        """Find the flag called `name` on the current command or an inheriting ancestor."""
        flag = path[-1].flag_map.get(name)
        if flag is not None:
            return flag
        for ancestor in reversed(path[:-1]):
            flag = ancestor.flag_map.get(name)
            if flag is not None and flag.inherited:
                return flag
        return None

    def _reachable_flags(self, path: list[Command]) -> list[Flag]:
        flags = list(path[-1].flags)
        for ancestor in reversed(path[:-1]):
            flags.extend(flag for flag in ancestor.flags if flag.inherited)
        return flags

    def _apply(self, flag: Flag, literal: str) -> None:
        """Run choices, validator and conversion for one literal, in that order."""
        if flag.choices is not None and literal not in flag.choices:
            raise ArgumentError(
                flag,
                literal,
                f"invalid choice {literal!r} (choose from {', '.join(flag.choices)})",
            )
        if flag.validator is not None:
            try:
                accepted = flag.validator(literal)
            except Exception as error:
                raise ArgumentError(flag, literal, str(error)) from error
            if accepted is False:
                raise ArgumentError(flag, literal, f"invalid value {literal!r}")
        try:
            flag.value.set(literal)
        except Exception as error:
            raise ArgumentError(flag, literal, str(error)) from error
        logger.debug("Flag %s set from %r", flag.display_name, literal)

    def _check_counts(self, path: list[Command], states: dict[Flag, FlagState]) -> None:
        for flag in self._reachable_flags(path):
            state = states.get(flag)
            count = state.count if state else 0
            if count < flag.min_count:
                raise MissingFlagError(flag, count)
            if flag.max_count and count > flag.max_count:
                raise TooManyFlagsError(flag, count)

    def parse(self, args: Sequence[str]) -> Invocation:
        """
        Match `args` against the tree and return the resolved `Invocation`.

        Args:
            args (Sequence[str]): Command-line tokens, without the program name.

        Returns:
            Invocation: The resolved command, its path and the leftover arguments.

        Raises:
            HelpSignal: If `-h` or `--help` was given.
            UnknownFlagError: If a flag token matches no reachable flag.
            UnknownCommandError: If a handler-less command is given an unknown subcommand.
            ArgumentError: If a literal fails choices, validation or conversion.
            MissingFlagError: If a required flag occurred too few times.
            TooManyFlagsError: If a flag occurred more often than allowed.
        """
        args = list(args)
        self._reset_values()

        self.path = path = [self.root]
        states: dict[Flag, FlagState] = {}
        positional: list[str] = []
        seen_flag = False

        i = 0
        while i < len(args):
            token = args[i]
            command = path[-1]

            if token == END_OF_FLAGS:
                positional.extend(args[i + 1 :])
                break

            if token in HELP_TOKENS:
                logger.debug("Help requested for '%s'", command.name)
                raise HelpSignal(command, path)

            if self._is_flag_token(token):
                seen_flag = True
                name, literal = self._split_flag_token(token)
                flag = self._lookup(name, path)
                if flag is None:
                    raise UnknownFlagError(token.partition("=")[0])
                if literal is None:
                    if flag.is_bool:
                        literal = "true"
                    elif i + 1 < len(args):
                        i += 1
                        literal = args[i]
                    else:
                        raise ArgumentError(flag, "", "flag needs an argument")
                self._apply(flag, literal)
                states.setdefault(flag, FlagState(flag)).record()
                i += 1
                continue

            if not seen_flag and not positional:
                child = command.get_subcommand(token)
                if child is not None:
                    logger.debug("Routing '%s' -> '%s'", command.name, child.name)
                    path.append(child)
                    i += 1
                    continue
                if command.subcommands and command.handler is None:
                    raise UnknownCommandError(token, command.name)

            positional.append(token)
            i += 1

        self._check_counts(path, states)
        return Invocation(
            command=path[-1], path=tuple(path), args=positional, states=states
        )
