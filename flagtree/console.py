# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""Rich console helpers bound to the output sinks of a command."""
from typing import Any

from rich.console import Console


def get_console(file: Any = None, stderr: bool = False) -> Console:
    """
    Return a console that writes to `file`.

    When `file` is None the console follows `sys.stdout` (or `sys.stderr` if
    `stderr` is set) at write time, so redirected streams are honoured.
    """
    if file is None:
        return Console(stderr=stderr, highlight=False, emoji=False)
    return Console(file=file, highlight=False, emoji=False)
