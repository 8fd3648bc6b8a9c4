# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""utils.py"""
from __future__ import annotations

import logging
import os

import pythonjsonlogger.json
from rich.logging import RichHandler

from flagtree.console import get_console

JSON_LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
TEXT_LOG_FORMAT = "%(asctime)s [%(name)s] [%(levelname)s] %(message)s"


def running_in_container() -> bool:
    try:
        with open("/proc/1/cgroup", "r", encoding="UTF-8") as f:
            content = f.read()
            return (
                "docker" in content
                or "kubepods" in content
                or "containerd" in content
                or "podman" in content
            )
    except OSError:
        return False


def _json_formatter() -> logging.Formatter:
    return pythonjsonlogger.json.JsonFormatter(JSON_LOG_FORMAT)


def setup_logging(
    mode: str | None = None,
    log_filename: str | None = "flagtree.log",
    json_log_to_file: bool = False,
    file_log_level: int = logging.DEBUG,
    console_log_level: int = logging.WARNING,
) -> None:
    """
    Configure logging for a Flagtree program.

    Console logs always go to standard error, leaving standard output to help
    text and whatever the command handlers print.

    Args:
        mode (str | None):
            Console output mode:
                - "cli": human-readable Rich logs (default outside containers)
                - "json": one JSON object per record (default inside containers)
            When omitted, the `FLAGTREE_LOG_MODE` environment variable is used,
            falling back to container detection.
        log_filename (str | None):
            File that receives every record at `file_log_level`. Pass None to
            skip file logging.
        json_log_to_file (bool):
            Write the file log as JSON instead of plain text.
        file_log_level (int):
            Logging level for the file handler. Defaults to `logging.DEBUG`.
        console_log_level (int):
            Logging level for the console handler. Defaults to `logging.WARNING`.

    Existing root handlers are removed first, so calling this twice does not
    duplicate output.

    Raises:
        ValueError: If `mode` is not "cli" or "json".
    """
    if not mode:
        mode = os.getenv("FLAGTREE_LOG_MODE") or (
            "json" if running_in_container() else "cli"
        )

    if mode == "cli":
        console_handler: logging.Handler = RichHandler(
            console=get_console(stderr=True),
            rich_tracebacks=True,
            show_time=True,
            show_level=True,
            show_path=False,
            markup=False,
            log_time_format="[%Y-%m-%d %H:%M:%S]",
        )
    elif mode == "json":
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(_json_formatter())
    else:
        raise ValueError(f"Invalid log mode: {mode}")

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    if root.hasHandlers():
        root.handlers.clear()

    console_handler.setLevel(console_log_level)
    root.addHandler(console_handler)

    if log_filename:
        file_handler = logging.FileHandler(log_filename, "a", "UTF-8")
        file_handler.setLevel(file_log_level)
        if json_log_to_file:
            file_handler.setFormatter(_json_formatter())
        else:
            file_handler.setFormatter(
                logging.Formatter(TEXT_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
            )
        root.addHandler(file_handler)

    logger = logging.getLogger("flagtree")
    logger.propagate = True
    logger.debug("Logging initialized in '%s' mode.", mode)
