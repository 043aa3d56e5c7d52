"""File-operation dispatcher.

Chooses between version-control-aware and plain filesystem primitives for
rename, delete and copy, then updates the buffer table. The file step always
runs before the buffer step, so a failed file step leaves buffers untouched.
"""

from __future__ import annotations

import logging
import os

from edkit.files.buffers import Buffer
from edkit.files.context import CommandContext
from edkit.files.errors import InvalidArgument, NotFound
from edkit.files.policy import check_overwrite
from edkit.files.types import OperationRequest, OperationResult, TrackedBy, Untracked

logger = logging.getLogger(__name__)


def dispatch(op: OperationRequest, buf: Buffer, ctx: CommandContext) -> OperationResult:
    """Perform ``op`` on the file visited by ``buf`` and update the buffer."""
    if not ctx.table.is_live(buf):
        raise NotFound(f"Buffer {buf.name} is no longer open")

    match op.kind:
        case "rename":
            return _rename(op, buf, ctx)
        case "delete":
            return _delete(buf, ctx)
        case "copy":
            return _copy(op, buf, ctx)
        case _:
            raise InvalidArgument(f"Unknown operation: {op.kind!r}")


def _destination(op: OperationRequest, buf: Buffer, default_name: str) -> str:
    """Absolute destination path. An existing directory means "into it"."""
    if not op.destination:
        raise InvalidArgument(f"{op.kind} requires a destination path")
    dest = os.path.abspath(os.path.join(buf.default_directory, os.path.expanduser(op.destination)))
    if os.path.isdir(dest):
        dest = os.path.join(dest, default_name)
    return dest


def _same_file(a: str, b: str) -> bool:
    return os.path.abspath(a) == os.path.abspath(b)


def _prepare_parent(dest: str, ctx: CommandContext) -> None:
    if ctx.settings.get_create_parent_directories():
        ctx.fs.make_dirs(os.path.dirname(dest))


# --- Rename ---


def _rename(op: OperationRequest, buf: Buffer, ctx: CommandContext) -> OperationResult:
    old_name, old_path = buf.name, buf.file
    dest = _destination(op, buf, os.path.basename(old_path) if old_path else buf.name)

    if old_path and _same_file(old_path, dest):
        logger.debug("Rename of %s onto itself; nothing to do", old_path)
        return OperationResult(
            kind="rename",
            buffer_name=buf.name,
            path=buf.file,
            old_buffer_name=old_name,
            old_path=old_path,
        )

    backend = ""
    match ctx.vc.status(old_path) if old_path else Untracked():
        case TrackedBy(backend=name):
            exists = ctx.fs.exists(dest)
            check_overwrite(op.overwrite, dest, exists=exists, prompter=ctx.prompter)
            _prepare_parent(dest, ctx)
            ctx.vc.get(name).rename(old_path, dest, force=exists)
            backend = name
        case Untracked() if old_path and ctx.fs.exists(old_path):
            check_overwrite(op.overwrite, dest, exists=ctx.fs.exists(dest), prompter=ctx.prompter)
            _prepare_parent(dest, ctx)
            ctx.fs.rename(old_path, dest)
        case _:
            _prepare_parent(dest, ctx)
            logger.debug("%s is not on disk; renaming buffer only", old_path or buf.name)

    # One buffer per file: the renamed buffer replaces any buffer on dest.
    stale = ctx.table.find_by_file(dest)
    if stale is not None and stale is not buf:
        logger.debug("Killing buffer %s, which visited the overwritten %s", stale.name, dest)
        ctx.table.kill(stale)

    new_name = ctx.table.rename(buf, os.path.basename(dest))
    ctx.table.set_visited_file(buf, dest)
    return OperationResult(
        kind="rename",
        buffer_name=new_name,
        path=buf.file,
        old_buffer_name=old_name,
        old_path=old_path,
        backend=backend,
    )


# --- Delete ---


def _delete(buf: Buffer, ctx: CommandContext) -> OperationResult:
    name, path = buf.name, buf.file

    backend = ""
    if path:
        match ctx.vc.status(path):
            case TrackedBy(backend=vc_name):
                ctx.vc.get(vc_name).delete(path)
                backend = vc_name
            case Untracked() if ctx.fs.exists(path):
                ctx.fs.delete(path, to_trash=ctx.settings.get_delete_to_trash())
            case _:
                logger.debug("%s is not on disk; killing buffer only", path)

    ctx.table.kill(buf)
    return OperationResult(
        kind="delete",
        buffer_name=name,
        path=path,
        old_buffer_name=name,
        old_path=path,
        backend=backend,
    )


# --- Copy ---


def _copy(op: OperationRequest, buf: Buffer, ctx: CommandContext) -> OperationResult:
    src = buf.file
    dest = _destination(op, buf, os.path.basename(src) if src else buf.name)

    if src and _same_file(src, dest):
        raise InvalidArgument(f"Cannot copy {src} onto itself")

    check_overwrite(op.overwrite, dest, exists=ctx.fs.exists(dest), prompter=ctx.prompter)
    _prepare_parent(dest, ctx)

    if src and ctx.fs.exists(src):
        ctx.fs.copy(src, dest, op.preserve)
    else:
        ctx.fs.write_text(dest, buf.content)

    stale = ctx.table.find_by_file(dest)
    if stale is not None:
        stale.content = ctx.fs.read_text(dest)
        stale.modified = False
    new_buf = ctx.table.visit(dest)

    return OperationResult(
        kind="copy",
        buffer_name=new_buf.name,
        path=new_buf.file,
        old_buffer_name=buf.name,
        old_path=src,
    )
