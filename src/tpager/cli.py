import os
import sys
from pathlib import Path

import click

from tpager import __version__
from tpager.app import PagerApp
from tpager.settings import (
    Schema,
    Settings,
    SettingsError,
    default_settings_path,
    load_settings,
)
from tpager.settings_schema import SCHEMA
from tpager.store import LineStore

STDIN_PATH = "-"
TERMINAL_DEVICE = "/dev/tty"


def read_input(path: str | None) -> LineStore:
    """Read the input in to a line store.

    Args:
        path: Path to a file, or `None` / "-" for standard input.

    Raises:
        click.FileError: If the file could not be opened or read.
        click.ClickException: If standard input could not be read.

    Returns:
        A line store containing the full input.
    """
    store = LineStore()
    if path is None or path == STDIN_PATH:
        try:
            store.read(sys.stdin.buffer)
        except OSError as error:
            raise click.ClickException(f"Failed to read content: {error}")
    else:
        try:
            with open(path, "rb") as input_file:
                store.read(input_file)
        except OSError as error:
            raise click.FileError(path, hint=error.strerror or str(error))
    return store


def attach_terminal() -> None:
    """Point standard input at the controlling terminal, if it was redirected.

    Raises:
        click.ClickException: If there is no controlling terminal.
    """
    if sys.stdin.isatty():
        return
    try:
        terminal_fd = os.open(TERMINAL_DEVICE, os.O_RDONLY)
    except OSError as error:
        raise click.ClickException(f"Failed to initialize terminal: {error}")
    try:
        os.dup2(terminal_fd, sys.stdin.fileno())
    finally:
        os.close(terminal_fd)


def build_settings(settings_path: Path | None, tab_width: int | None) -> Settings:
    """Load settings and apply command line overrides.

    Raises:
        click.ClickException: If the settings are invalid.
    """
    path = default_settings_path() if settings_path is None else settings_path
    try:
        settings = Settings(Schema(SCHEMA), load_settings(path))
        if tab_width is not None:
            settings.set("pager.tab-width", tab_width)
        settings.get("pager.tab-width", int)
    except SettingsError as error:
        raise click.ClickException(str(error))
    return settings


@click.command()
@click.argument("path", metavar="PATH", required=False)
@click.option(
    "--tab-width",
    type=click.IntRange(min=1),
    default=None,
    help="Number of columns a tab advances (default 8).",
)
@click.option(
    "--settings",
    "settings_path",
    metavar="FILE",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to a JSON settings file.",
)
@click.version_option(__version__, prog_name="tpager")
def main(path: str | None, tab_width: int | None, settings_path: Path | None) -> None:
    """View PATH (or standard input) one screen at a time."""
    if path is None and sys.stdin.isatty():
        raise click.UsageError("Missing PATH, and standard input is a terminal.")
    settings = build_settings(settings_path, tab_width)
    store = read_input(path)
    attach_terminal()
    app = PagerApp(store, settings)
    app.run()


if __name__ == "__main__":
    main()
