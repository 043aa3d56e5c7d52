"""CLI entry point for edkit-files. Uses Click for argument parsing.

Each invocation visits FILE into a fresh buffer table, runs one command
against that buffer and prints the status message.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable

import click

from edkit.files import commands
from edkit.files.context import CommandContext, create_context
from edkit.files.errors import FileCommandError
from edkit.files.prompt import AlwaysYes, ClickPrompter
from edkit.files.settings import SettingsManager
from edkit.files.types import PreserveFlags


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _run(obj: dict, file: str, command: Callable[[CommandContext], str], overrides: dict | None = None) -> None:
    """Build a context, visit ``file`` and run ``command`` on it."""
    cwd = obj["cwd"]
    settings = SettingsManager.create(cwd)
    if settings.load_error:
        click.echo(f"Warning: could not load settings: {settings.load_error}", err=True)
    if overrides:
        settings.apply_overrides(overrides)

    prompter = AlwaysYes() if obj["yes"] else ClickPrompter()
    ctx = create_context(settings, cwd=cwd, prompter=prompter)

    try:
        ctx.table.visit(file)
        click.echo(command(ctx))
    except FileCommandError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@click.group()
@click.option("--cwd", default=None, help="Working directory (defaults to the current one)")
@click.option("-y", "--yes", is_flag=True, help="Answer yes to every confirmation prompt")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, cwd, yes, verbose):
    """Rename, delete, copy and inspect files through editor buffers."""
    _setup_logging(verbose)
    ctx.obj = {"cwd": os.path.abspath(cwd or os.getcwd()), "yes": yes}


@main.command()
@click.argument("file")
@click.argument("new_path")
@click.option("--force", is_flag=True, help="Overwrite an existing destination without asking")
@click.pass_obj
def rename(obj, file, new_path, force):
    """Rename FILE (and its buffer) to NEW_PATH."""
    _run(obj, file, lambda ctx: commands.rename_file(ctx, new_path, force=force))


@main.command()
@click.argument("file")
@click.option("--permanent", is_flag=True, help="Delete permanently instead of moving to the trash")
@click.pass_obj
def delete(obj, file, permanent):
    """Delete FILE and kill its buffer."""
    overrides = {"deleteToTrash": False} if permanent else None
    _run(obj, file, lambda ctx: commands.delete_file(ctx), overrides)


@main.command()
@click.argument("file")
@click.argument("new_path")
@click.option("--force", is_flag=True, help="Overwrite an existing destination without asking")
@click.option("--no-preserve-timestamps", is_flag=True, help="Do not copy access/modification times")
@click.option("--no-preserve-ownership", is_flag=True, help="Do not copy owner and group")
@click.option("--no-preserve-permissions", is_flag=True, help="Do not copy permission bits")
@click.pass_obj
def copy(obj, file, new_path, force, no_preserve_timestamps, no_preserve_ownership, no_preserve_permissions):
    """Copy FILE to NEW_PATH and open the copy."""

    def run(ctx: CommandContext) -> str:
        defaults = ctx.settings.get_preserve_flags()
        preserve = PreserveFlags(
            timestamps=defaults.timestamps and not no_preserve_timestamps,
            ownership=defaults.ownership and not no_preserve_ownership,
            permissions=defaults.permissions and not no_preserve_permissions,
        )
        return commands.copy_file(ctx, new_path, force=force, preserve=preserve)

    _run(obj, file, run)


@main.command()
@click.argument("file")
@click.pass_obj
def revert(obj, file):
    """Reload FILE's buffer from disk."""
    _run(obj, file, lambda ctx: commands.revert_buffer(ctx))


@main.command()
@click.argument("file")
@click.pass_obj
def kill(obj, file):
    """Kill FILE's buffer."""
    _run(obj, file, lambda ctx: commands.kill_buffer(ctx))


@main.command("yank-name")
@click.argument("file")
@click.pass_obj
def yank_name(obj, file):
    """Print the buffer name FILE would get."""
    _run(obj, file, lambda ctx: commands.yank_buffer_name(ctx))


@main.command("yank-path")
@click.argument("file")
@click.option("--relative/--absolute", default=None, help="Make the path relative to the project root")
@click.pass_obj
def yank_path(obj, file, relative):
    """Print FILE's path, optionally relative to its project root."""
    _run(obj, file, lambda ctx: commands.yank_buffer_path(ctx, relative=relative))


@main.command("open-directory")
@click.argument("file")
@click.pass_obj
def open_directory(obj, file):
    """List the directory containing FILE."""
    _run(obj, file, lambda ctx: commands.open_directory(ctx))


if __name__ == "__main__":
    main()
