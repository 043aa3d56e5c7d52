"""User-facing buffer and file commands.

Each command takes the command context, an optional buffer reference (None
for the current buffer, a buffer name, or a Buffer) and its own parameters,
and returns a human-readable status message.
"""

from __future__ import annotations

import logging
import os
from typing import Any

from edkit.files.context import CommandContext
from edkit.files.dispatcher import dispatch
from edkit.files.errors import InvalidArgument
from edkit.files.resolver import resolve_buffer
from edkit.files.types import OperationRequest, OperationResult, PreserveFlags

logger = logging.getLogger(__name__)


def _via(result: OperationResult) -> str:
    return f" (via {result.backend})" if result.backend else ""


def rename_file(ctx: CommandContext, new_path: str | None, buffer: Any = None, *, force: bool = False) -> str:
    """Rename the visited file and the buffer to ``new_path``."""
    buf = resolve_buffer(buffer, ctx.table)
    op = OperationRequest(
        kind="rename",
        destination=new_path,
        overwrite="force" if force else ctx.settings.get_overwrite_policy(),
    )
    result = dispatch(op, buf, ctx)

    if result.old_path == result.path:
        return f"{result.path} is already named {result.buffer_name}"
    if result.old_path is None:
        return f"Buffer {result.old_buffer_name} renamed to {result.buffer_name}, now visiting {result.path}"
    return (
        f"Renamed {result.old_buffer_name} ({result.old_path}) "
        f"to {result.buffer_name} ({result.path}){_via(result)}"
    )


def delete_file(ctx: CommandContext, buffer: Any = None) -> str:
    """Delete the visited file and kill the buffer."""
    buf = resolve_buffer(buffer, ctx.table)
    result = dispatch(OperationRequest(kind="delete"), buf, ctx)

    if result.path is None:
        return f"Killed buffer {result.buffer_name} (no file)"
    return f"Deleted {result.path}{_via(result)} and killed buffer {result.buffer_name}"


def copy_file(
    ctx: CommandContext,
    new_path: str | None,
    buffer: Any = None,
    *,
    force: bool = False,
    preserve: PreserveFlags | None = None,
) -> str:
    """Copy the visited file (or the buffer's text) to ``new_path`` and open it."""
    buf = resolve_buffer(buffer, ctx.table)
    op = OperationRequest(
        kind="copy",
        destination=new_path,
        overwrite="force" if force else ctx.settings.get_overwrite_policy(),
        preserve=preserve or ctx.settings.get_preserve_flags(),
    )
    result = dispatch(op, buf, ctx)

    source = result.old_path or f"buffer {result.old_buffer_name}"
    return f"Copied {source} to {result.path}, opened as {result.buffer_name}"


def revert_buffer(ctx: CommandContext, buffer: Any = None, *, force: bool = False) -> str:
    """Replace the buffer's text with its file's contents."""
    buf = resolve_buffer(buffer, ctx.table)
    if not buf.file:
        raise InvalidArgument(f"Buffer {buf.name} is not visiting a file")

    if buf.modified and not force:
        if not ctx.prompter.confirm(f"Revert buffer from file {buf.file}?"):
            return f"Revert of {buf.name} cancelled"

    buf.content = ctx.fs.read_text(buf.file)
    buf.modified = False
    logger.info("Reverted %s from %s", buf.name, buf.file)
    return f"Reverted {buf.name} from {buf.file}"


def kill_buffer(ctx: CommandContext, buffer: Any = None, *, force: bool = False) -> str:
    """Close the buffer, confirming first if it has unsaved changes."""
    buf = resolve_buffer(buffer, ctx.table)

    if buf.modified and not force:
        if not ctx.prompter.confirm(f"Buffer {buf.name} modified; kill anyway?"):
            return f"Kill of {buf.name} cancelled"

    ctx.table.kill(buf)
    logger.info("Killed buffer %s", buf.name)
    return f"Killed buffer {buf.name}"


def yank_buffer_name(ctx: CommandContext, buffer: Any = None, *, register: str | None = None) -> str:
    buf = resolve_buffer(buffer, ctx.table)
    ctx.register.push(buf.name, name=register)
    return f"Copied buffer name: {buf.name}"


def yank_buffer_path(
    ctx: CommandContext,
    buffer: Any = None,
    *,
    relative: bool | None = None,
    register: str | None = None,
) -> str:
    """Yank the visited file's path, or the buffer's directory when unvisited.

    With ``relative`` the path is made relative to the enclosing project root,
    staying absolute when no project is detected.
    """
    buf = resolve_buffer(buffer, ctx.table)
    path = buf.file or buf.default_directory
    if relative is None:
        relative = ctx.settings.get_yank_relative_to_project()

    text = ctx.projects.relative_path(path) if relative else os.path.abspath(path)
    ctx.register.push(text, name=register)
    return f"Copied path: {text}"


def open_directory(ctx: CommandContext, buffer: Any = None) -> str:
    """Open the directory browser on the buffer's directory."""
    buf = resolve_buffer(buffer, ctx.table)
    directory = os.path.dirname(buf.file) if buf.file else buf.default_directory
    listing = ctx.browser.open(directory)
    return f"{directory}:\n{listing}"
