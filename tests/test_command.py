from io import StringIO

import pytest

from flagtree import Command, CommandBuilder
from flagtree.console import get_console
from flagtree.exceptions import CommandDefinitionError, FlagDefinitionError
from flagtree.parser import bool_flag, string_flag, strings_flag
from flagtree.protocols import Commander


def noop(args):
    return 0


def test_builder_produces_command():
    cmd = (
        CommandBuilder("app", "Does things")
        .flags(string_flag("name"), bool_flag("v"))
        .subcommands(CommandBuilder("sub").handle(noop))
        .handle(noop)
        .command()
    )
    assert isinstance(cmd, Command)
    assert cmd.name == "app"
    assert cmd.usage == "Does things"
    assert [flag.display_name for flag in cmd.flags] == ["--name", "-v"]
    assert cmd.get_subcommand("sub").name == "sub"
    assert cmd.get_subcommand("missing") is None
    assert cmd.get_flag("v").short_name == "v"
    assert cmd.get_flag("nope") is None


def test_builder_and_command_are_commanders():
    builder = CommandBuilder("app")
    cmd = builder.command()
    assert isinstance(builder, Commander)
    assert isinstance(cmd, Commander)
    assert cmd.command() is cmd


def test_command_accepts_builders_directly():
    cmd = Command(
        name="app",
        flags=[string_flag("name")],
        subcommands=[CommandBuilder("sub")],
    )
    assert cmd.flags[0].name == "name"
    assert cmd.subcommands[0].name == "sub"


@pytest.mark.parametrize("name", ["", "-app", "two words"])
def test_invalid_command_names(name):
    with pytest.raises(CommandDefinitionError):
        CommandBuilder(name).command()


def test_handler_must_be_callable():
    with pytest.raises(CommandDefinitionError, match="not callable"):
        CommandBuilder("app").handle("nope").command()


def test_flags_must_be_flags():
    with pytest.raises(CommandDefinitionError, match="Expected a Flag"):
        Command(name="app", flags=["--name"])


def test_invalid_flag_definition_surfaces_at_build():
    with pytest.raises(FlagDefinitionError):
        CommandBuilder("app").flags(string_flag("name").nargs(3, 1)).command()


def test_duplicate_long_names():
    with pytest.raises(CommandDefinitionError, match="already used by --name"):
        CommandBuilder("app").flags(string_flag("name"), bool_flag("name")).command()


def test_long_name_clashes_with_short_name():
    with pytest.raises(CommandDefinitionError, match="'n' is already used"):
        CommandBuilder("app").flags(
            string_flag("name").short("n"), bool_flag("n")
        ).command()


@pytest.mark.parametrize(
    "builder", [bool_flag("help"), bool_flag("h"), bool_flag("hint").short("h")]
)
def test_help_names_are_reserved(builder):
    with pytest.raises(CommandDefinitionError, match="reserved"):
        CommandBuilder("app").flags(builder).command()


def test_duplicate_subcommands():
    with pytest.raises(CommandDefinitionError, match="defined twice"):
        CommandBuilder("app").subcommands(
            CommandBuilder("sub"), CommandBuilder("sub")
        ).command()


def test_same_flag_name_on_different_commands():
    cmd = (
        CommandBuilder("app")
        .flags(string_flag("name"))
        .subcommands(CommandBuilder("sub").flags(string_flag("name")))
        .command()
    )
    assert cmd.get_flag("name") is not cmd.subcommands[0].get_flag("name")


def test_get_usage():
    cmd = (
        CommandBuilder("app")
        .flags(
            bool_flag("verbose").short("v"),
            strings_flag("tag").nargs(1, 0),
            string_flag("mode").choices("fast", "slow"),
            string_flag("secret").hidden(),
        )
        .subcommands(CommandBuilder("sub"))
        .command()
    )
    assert cmd.get_usage(plain_text=True) == (
        "app [--verbose] --tag TAG ... [--mode {fast,slow}] [-h] <command>"
    )


def test_get_usage_with_path():
    cmd = CommandBuilder("app").subcommands(CommandBuilder("sub")).command()
    sub = cmd.subcommands[0]
    assert sub.get_usage((cmd, sub), plain_text=True) == "app sub [-h]"


def test_render_help():
    buffer = StringIO()
    cmd = (
        CommandBuilder("ping", "Send echo requests")
        .flags(
            string_flag("ip", "127.0.0.1", "IP address to ping"),
            strings_flag("tag", None, "Tag to attach").nargs(1, 0),
            string_flag("secret", "", "Not shown").hidden(),
        )
        .subcommands(CommandBuilder("trace", "Trace the route"))
        .help("Ping a host.", epilog="See the manual for more.")
        .command()
    )
    cmd.render_help(get_console(buffer))
    output = buffer.getvalue()

    assert "usage: ping [--ip IP] --tag TAG ... [-h] <command>" in output
    assert "Ping a host." in output
    assert "commands:" in output
    assert "trace" in output
    assert "Trace the route" in output
    assert "-h, --help" in output
    assert "IP address to ping (default: 127.0.0.1)" in output
    assert "Tag to attach (required)" in output
    assert "secret" not in output
    assert "See the manual for more." in output


def test_render_help_without_subcommands():
    buffer = StringIO()
    cmd = CommandBuilder("app", "Short usage").command()
    cmd.render_help(get_console(buffer))
    output = buffer.getvalue()

    assert "usage: app [-h]" in output
    assert "Short usage" in output
    assert "commands:" not in output


def test_str():
    cmd = CommandBuilder("app").handle(noop).command()
    assert str(cmd) == "Command(name='app', flags=0, subcommands=0, handler=yes)"
    assert repr(CommandBuilder("app")) == "CommandBuilder(name='app', flags=0, subcommands=0)"


def test_usage_escapes_command_names():
    buffer = StringIO()
    cmd = CommandBuilder("[bold]x").command()
    cmd.render_help(get_console(buffer))

    assert "usage: [bold]x [-h]" in buffer.getvalue()
    assert cmd.get_usage(plain_text=True) == "[bold]x [-h]"
