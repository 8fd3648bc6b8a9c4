import sys
from datetime import timedelta

from flagtree import (
    CommandBuilder,
    bool_flag,
    duration_flag,
    func_flag,
    run,
    string_flag,
)
from flagtree.utils import setup_logging

setup_logging()

remotes: dict[str, str] = {"origin": "git@example.com:app.git"}

verbose = bool_flag("verbose", False, "Print more").short("v").inherit()
timeout = duration_flag("timeout", timedelta(seconds=30), "Network timeout").inherit()
fetch = bool_flag("fetch", False, "Fetch the remote after adding it").short("f")
protocol = string_flag("protocol", "ssh", "Transport").choices("ssh", "https")


def reject_existing(name: str) -> None:
    if name in remotes:
        raise ValueError(f"remote {name} already exists")


def add_remote(args: list[str]) -> int:
    if len(args) != 2:
        print("usage: remote add [options] <name> <url>", file=sys.stderr)
        return 2
    name, url = args
    reject_existing(name)
    remotes[name] = url
    if verbose.get():
        print(f"added {name} -> {url} over {protocol.get()}")
    if fetch.get():
        print(f"fetching {name} (timeout {timeout.value})")
    return 0


def remove_remote(args: list[str]) -> int:
    for name in args:
        if remotes.pop(name, None) is None:
            print(f"no such remote: {name}", file=sys.stderr)
            return 2
    return 0


def list_remotes(args: list[str]) -> int:
    for name, url in remotes.items():
        print(f"{name}\t{url}" if verbose.get() else name)
    return 0


def show_remote(name: str) -> None:
    if name not in remotes:
        raise ValueError(f"no such remote: {name}")
    print(f"{name}\t{remotes[name]}")


cmd = (
    CommandBuilder("git", "A tiny version control front end")
    .flags(verbose, timeout)
    .subcommands(
        CommandBuilder("remote", "Manage tracked repositories")
        .flags(func_flag("show", "Print one remote and exit", show_remote))
        .handle(list_remotes)
        .subcommands(
            CommandBuilder("add", "Add a remote")
            .flags(fetch, protocol)
            .handle(add_remote),
            CommandBuilder("remove", "Remove remotes").handle(remove_remote),
        )
        .help(
            "Manage the set of repositories whose branches you track.",
            epilog="Run 'git remote <command> -h' for command help.",
        ),
    )
)

if __name__ == "__main__":
    sys.exit(run(cmd))
