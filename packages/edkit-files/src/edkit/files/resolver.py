"""Buffer reference resolution."""

from __future__ import annotations

from typing import Any

from edkit.files.buffers import Buffer, BufferTable
from edkit.files.errors import InvalidArgument, NotFound
from edkit.files.types import BufferRef, ByHandle, ByName, Unspecified


def coerce_buffer_ref(value: Any) -> BufferRef:
    """Turn a loosely typed buffer argument into a BufferRef.

    Accepts None (current buffer), a buffer name, a Buffer, or a BufferRef.
    """
    match value:
        case None:
            return Unspecified()
        case Unspecified() | ByName() | ByHandle():
            return value
        case str():
            return ByName(value)
        case Buffer():
            return ByHandle(value)
        case _:
            raise InvalidArgument(
                f"Expected a buffer, buffer name or None, got {value!r} ({type(value).__name__})"
            )


def resolve(ref: BufferRef, table: BufferTable) -> Buffer:
    """Resolve ``ref`` to a live buffer in ``table``."""
    match ref:
        case Unspecified():
            if table.current is None:
                raise NotFound("No current buffer")
            return table.current
        case ByName(name=name):
            buf = table.get(name)
            if buf is None:
                raise NotFound(f"No buffer named {name}")
            return buf
        case ByHandle(buffer=buf):
            if not table.is_live(buf):
                raise NotFound(f"Buffer {buf.name} is not open")
            return buf
        case _:
            raise InvalidArgument(f"Not a buffer reference: {ref!r} ({type(ref).__name__})")


def resolve_buffer(value: Any, table: BufferTable) -> Buffer:
    """coerce_buffer_ref followed by resolve."""
    return resolve(coerce_buffer_ref(value), table)
