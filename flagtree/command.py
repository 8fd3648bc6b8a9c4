# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""command.py

Defines the Command class and its fluent CommandBuilder for Flagtree CLIs.

A Command is a named node in a dispatch tree. It owns:

- A set of flags, addressable by long or short name
- An ordered list of child commands, addressable by name
- An optional handler that receives leftover positional arguments and
  returns an exit code
- Optional output sinks for help and diagnostics

Commands are validated when they are created. Flag identifiers must be unique
within a command (long and short names share one namespace), `-h`/`--help`
are reserved, and sibling commands must have distinct names. A command tree
is built once and only read afterwards.

Example Usage:
    widgets = strings_flag("name", None, "Widget name").nargs(1, 0)

    cmd = (
        CommandBuilder("create-widgets", "Create some widgets")
        .flags(widgets)
        .handle(lambda args: print(", ".join(widgets.get())))
    )
    run_with_args(cmd, "--name=foo", "--name=bar")
"""
from __future__ import annotations

from functools import cached_property
from typing import Any, Callable, Sequence

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    InstanceOf,
    ValidationError,
    field_validator,
    model_validator,
)
from rich.console import Console
from rich.markup import escape

from flagtree.dispatcher import Dispatcher, run_with_args
from flagtree.exceptions import CommandDefinitionError
from flagtree.parser.flag import Flag
from flagtree.parser.flag_builder import FlagBuilder
from flagtree.parser.matcher import HELP_TOKENS
from flagtree.protocols import HandlerFunc

RESERVED_FLAG_NAMES = tuple(token.lstrip("-") for token in HELP_TOKENS)


class Command(BaseModel):
    """
    Represents a node in a Flagtree command tree.

    Attributes:
        name (str): Name used to route to this command from its parent.
        usage (str): One-line description shown in listings and help.
        help_text (str): Longer description shown in this command's help.
        help_epilog (str): Text shown at the end of this command's help.
        flags (list[Flag]): Flags declared on this command.
        subcommands (list[Command]): Child commands, in declaration order.
        handler (HandlerFunc | None): Called with the leftover positional
            arguments when this command is the one resolved.
        stdout (Any): Sink for help output, or None for `sys.stdout`.
        stderr (Any): Sink for diagnostics, or None for `sys.stderr`.

    Methods:
        command(): Return this command, satisfying the `Commander` protocol.
        run(args): Parse `args` and dispatch, returning an exit code.
        render_help(console): Print usage for this command.
    """

    name: str
    usage: str = ""
    help_text: str = ""
    help_epilog: str = ""
    flags: list[InstanceOf[Flag]] = Field(default_factory=list)
    subcommands: list[Command] = Field(default_factory=list)
    handler: Callable[[list[str]], Any] | None = None
    stdout: Any = None
    stderr: Any = None

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @field_validator("name")
    @classmethod
    def validate_name(cls, name: str) -> str:
        if not name:
            raise CommandDefinitionError("Command name must not be empty")
        if name.startswith("-"):
            raise CommandDefinitionError(f"Command name '{name}' must not start with '-'")
        if any(char.isspace() for char in name):
            raise CommandDefinitionError(
                f"Command name '{name}' must not contain whitespace"
            )
        return name

    @field_validator("flags", mode="before")
    @classmethod
    def build_flags(cls, flags: Any) -> list[Flag]:
        built = []
        for flag in flags or []:
            if isinstance(flag, FlagBuilder):
                flag = flag.build()
            if not isinstance(flag, Flag):
                raise CommandDefinitionError(
                    f"Expected a Flag or FlagBuilder, got {type(flag).__name__}"
                )
            built.append(flag)
        return built

    @field_validator("subcommands", mode="before")
    @classmethod
    def build_subcommands(cls, subcommands: Any) -> list[Command]:
        built = []
        for subcommand in subcommands or []:
            if isinstance(subcommand, CommandBuilder):
                subcommand = subcommand.command()
            if not isinstance(subcommand, Command):
                raise CommandDefinitionError(
                    f"Expected a Command or CommandBuilder, got {type(subcommand).__name__}"
                )
            built.append(subcommand)
        return built

    @field_validator("handler", mode="before")
    @classmethod
    def validate_handler(cls, handler: Any) -> Any:
        if handler is not None and not callable(handler):
            raise CommandDefinitionError(f"Handler {handler!r} is not callable")
        return handler

    @model_validator(mode="after")
    def check_unique_names(self) -> Command:
        seen: dict[str, Flag] = {}
        for flag in self.flags:
            for identifier in flag.identifiers:
                if identifier in RESERVED_FLAG_NAMES:
                    raise CommandDefinitionError(
                        f"[{self.name}] Flag name '{identifier}' is reserved for help"
                    )
                existing = seen.get(identifier)
                if existing is not None:
                    raise CommandDefinitionError(
                        f"[{self.name}] Flag name '{identifier}' is already used by "
                        f"{existing.display_name}"
                    )
                seen[identifier] = flag

        names: set[str] = set()
        for subcommand in self.subcommands:
            if subcommand.name in names:
                raise CommandDefinitionError(
                    f"[{self.name}] Subcommand '{subcommand.name}' is defined twice"
                )
            names.add(subcommand.name)
        return self

    @cached_property
    def flag_map(self) -> dict[str, Flag]:
        """Map every long and short flag name to its flag."""
        return {
            identifier: flag for flag in self.flags for identifier in flag.identifiers
        }

    def command(self) -> Command:
        return self

    def get_flag(self, name: str) -> Flag | None:
        return self.flag_map.get(name)

    def get_subcommand(self, name: str) -> Command | None:
        return next(
            (command for command in self.subcommands if command.name == name), None
        )

    def run(self, args: Sequence[str]) -> int:
        """Parse `args` against this command tree and dispatch, returning an exit code."""
        return Dispatcher(self).dispatch(args)

    def get_options_text(self, plain_text: bool = False) -> str:
        """
        Render the visible flags as a usage fragment, e.g. `[-v] --name NAME ...`.

        Required flags are shown bare, optional flags in brackets.
        """
        options_list = []
        for flag in self.flags:
            if flag.hidden:
                continue
            choice_text = flag.get_choice_text()
            text = flag.display_name
            if choice_text:
                text = f"{text} {choice_text}"
            options_list.append(text if flag.required else f"[{text}]")
        options_list.append("[-h]")
        options_text = " ".join(options_list)
        if plain_text:
            return options_text
        return escape(options_text)

    def get_usage(self, path: Sequence[Command] = (), plain_text: bool = False) -> str:
        """
        Render the usage line for this command.

        Args:
            path (Sequence[Command]): Commands from the root down to this one,
                used to spell out the full invocation.
        """
        program = " ".join(command.name for command in path) if path else self.name
        if not plain_text:
            program = escape(program)
        parts = [program, self.get_options_text(plain_text)]
        if self.subcommands:
            parts.append("<command>" if plain_text else escape("<command>"))
        return " ".join(parts)

    def render_help(self, console: Console, path: Sequence[Command] = ()) -> None:
        """
        Print formatted help text for this command using Rich output.

        Includes usage, description, subcommands, options and optional epilog.
        """
        console.print(f"[bold]usage:[/bold] {self.get_usage(path)}\n")

        description = self.help_text or self.usage
        if description:
            console.print(escape(description) + "\n")

        if self.subcommands:
            console.print("[bold]commands:[/bold]")
            for subcommand in self.subcommands:
                console.print(f"  {escape(subcommand.name):<30} {escape(subcommand.usage)}")

        console.print("[bold]options:[/bold]")
        console.print(f"  {'-h, --help':<30} Show this help message.")
        for flag in self.flags:
            if flag.hidden:
                continue
            flags_choice = f"{flag.get_flag_text()} {flag.get_choice_text()}".rstrip()
            arg_line = f"  {escape(flags_choice):<30} "
            help_text = escape(flag.usage)
            default_text = flag.get_default_text()
            if default_text:
                help_text = f"{help_text} (default: {escape(default_text)})".lstrip()
            if flag.required:
                help_text = f"{help_text} (required)".lstrip()
            if help_text and len(flags_choice) > 30:
                help_text = f"\n{'':<33}{help_text}"
            console.print(f"{arg_line}{help_text}")

        if self.help_epilog:
            console.print("\n" + escape(self.help_epilog), style="dim")

    def __str__(self) -> str:
        return (
            f"Command(name='{self.name}', flags={len(self.flags)}, "
            f"subcommands={len(self.subcommands)}, "
            f"handler={'yes' if self.handler else 'no'})"
        )


class CommandBuilder:
    """
    Fluent builder for a `Command` tree.

    Every method returns the builder itself so calls can be chained. Nothing is
    validated until `command()` builds the tree, so a builder can be handed
    straight to `run_with_args()`.
    """

    def __init__(self, name: str, usage: str = "") -> None:
        self.name: str = name
        self.usage: str = usage
        self._help_text: str = ""
        self._help_epilog: str = ""
        self._flags: list[Flag | FlagBuilder] = []
        self._subcommands: list[Command | CommandBuilder] = []
        self._handler: HandlerFunc | None = None
        self._stdout: Any = None
        self._stderr: Any = None

    def flags(self, *flags: Flag | FlagBuilder) -> CommandBuilder:
        """Add flags to the command."""
        self._flags.extend(flags)
        return self

    def subcommands(self, *commands: Command | CommandBuilder) -> CommandBuilder:
        """Add child commands, routed to by name."""
        self._subcommands.extend(commands)
        return self

    def handle(self, handler: HandlerFunc) -> CommandBuilder:
        """Set the function called with leftover arguments when this command runs."""
        self._handler = handler
        return self

    def output(self, stdout: Any = None, stderr: Any = None) -> CommandBuilder:
        """Send help to `stdout` and diagnostics to `stderr` instead of the process streams."""
        self._stdout = stdout
        self._stderr = stderr
        return self

    def help(self, text: str, epilog: str = "") -> CommandBuilder:
        """Set the long description and epilog shown in this command's help."""
        self._help_text = text
        self._help_epilog = epilog
        return self

    def command(self) -> Command:
        """
        Build and validate the command tree.

        Raises:
            ConstructionError: If a flag or command in the tree is invalid.
        """
        try:
            return Command(
                name=self.name,
                usage=self.usage,
                help_text=self._help_text,
                help_epilog=self._help_epilog,
                flags=self._flags,
                subcommands=self._subcommands,
                handler=self._handler,
                stdout=self._stdout,
                stderr=self._stderr,
            )
        except ValidationError as error:
            raise CommandDefinitionError(
                f"Invalid command '{self.name}': {error}"
            ) from error

    def run(self, args: Sequence[str]) -> int:
        """Build the tree, parse `args` against it and dispatch."""
        return run_with_args(self, *args)

    def __repr__(self) -> str:
        return (
            f"CommandBuilder(name='{self.name}', flags={len(self._flags)}, "
            f"subcommands={len(self._subcommands)})"
        )
