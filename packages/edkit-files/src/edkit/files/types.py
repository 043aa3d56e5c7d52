"""Core types for buffer and file commands.

Buffer references and VC status are plain tagged dataclasses; operation
requests and results are Pydantic models so they validate on construction
and serialize with camelCase aliases.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from edkit.files.buffers import Buffer

# --- Identifiers ---

OperationKind = Literal["rename", "delete", "copy"]

OverwritePolicy = Literal["ask", "force", "skip"]

# --- Buffer references ---


@dataclass(frozen=True)
class Unspecified:
    """Refers to the current buffer."""


@dataclass(frozen=True)
class ByName:
    """Refers to the open buffer with exactly this name."""

    name: str


@dataclass(frozen=True)
class ByHandle:
    """Refers to a buffer object directly."""

    buffer: Buffer


BufferRef = Union[Unspecified, ByName, ByHandle]

# --- Version-control status ---


@dataclass(frozen=True)
class Untracked:
    pass


@dataclass(frozen=True)
class TrackedBy:
    backend: str


VCStatus = Union[Untracked, TrackedBy]

# --- Operations ---


class PreserveFlags(BaseModel):
    """Attributes carried over by an OS-level copy."""

    model_config = ConfigDict(frozen=True)

    timestamps: bool = True
    ownership: bool = True
    permissions: bool = True


class OperationRequest(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: OperationKind
    destination: str | None = None
    overwrite: OverwritePolicy = "ask"
    preserve: PreserveFlags = Field(default_factory=PreserveFlags)


class OperationResult(BaseModel):
    """Outcome of a dispatched operation.

    buffer_name and path describe the buffer the user ends up looking at:
    the renamed buffer, the newly opened copy, or the killed buffer.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: OperationKind
    buffer_name: str = Field(alias="bufferName")
    path: str | None = None
    old_buffer_name: str = Field(alias="oldBufferName")
    old_path: str | None = Field(default=None, alias="oldPath")
    backend: str = ""
